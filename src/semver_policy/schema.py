# SPDX-License-Identifier: MIT
"""Pydantic models for version fields and compliance settings."""

import logging
import re
from enum import Enum
from typing import Any, Literal, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .errors import FieldError, FieldValidationError
from .grammar import is_branch, is_build, is_label, is_numeric_identifier, is_prerelease

logger = logging.getLogger(__name__)

# Largest integer that survives a round trip through an IEEE double
MAX_SAFE_INTEGER = 2**53 - 1

# Pattern rules written as plain strings: /pattern/ with optional flag letters
PATTERN_LITERAL = re.compile(r"^/(?P<pattern>.*)/(?P<flags>[imsx]*)$", re.DOTALL)

_FLAG_LETTERS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


class ComplianceField(str, Enum):
    """Fields governed by custom compliance settings."""

    BRANCH = "Branch"
    LABEL = "Label"
    HOTFIX = "Hotfix"
    PRERELEASE = "Prerelease"
    BUILD = "Build"

    @property
    def attribute(self) -> str:
        """Name of the matching attribute on a version."""
        return self.value.lower()


PolicySetting = Literal["required", "optional", "forbidden"]
StringRule = Union[str, re.Pattern[str]]
HotfixRule = Union[int, re.Pattern[str]]
StringPolicy = Union[PolicySetting, tuple[StringRule, ...]]
HotfixPolicy = Union[PolicySetting, tuple[HotfixRule, ...]]


class VersionFields(BaseModel):
    """Structurally validated version fields.

    Numeric fields accept integers or digit strings (as captured by the
    grammar). An empty label is accepted and treated as absent.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    branch: Optional[str] = Field(
        default=None,
        description="Free-text qualifier preceding the version (e.g. a VCS branch)",
        min_length=1,
    )
    label: Optional[str] = Field(
        default=None,
        description="Release-type label: v, ver or version (any case)",
    )
    major: int = Field(..., description="Major version number", ge=0, le=MAX_SAFE_INTEGER)
    minor: int = Field(..., description="Minor version number", ge=0, le=MAX_SAFE_INTEGER)
    patch: int = Field(..., description="Patch version number", ge=0, le=MAX_SAFE_INTEGER)
    hotfix: Optional[int] = Field(
        default=None,
        description="Hotfix number below patch",
        ge=0,
        le=MAX_SAFE_INTEGER,
    )
    prerelease: Optional[str] = Field(
        default=None,
        description="Dot-separated prerelease identifiers (e.g. beta.1)",
    )
    build: Optional[str] = Field(
        default=None,
        description="Dot-separated build metadata identifiers (e.g. build.007)",
    )

    @field_validator("major", "minor", "patch", "hotfix", mode="before")
    @classmethod
    def validate_numeric(cls, v: Any) -> Any:
        """Convert digit strings to integers and reject booleans."""
        if isinstance(v, bool):
            raise ValueError("must be an integer, not a boolean")
        if isinstance(v, str):
            if not is_numeric_identifier(v):
                raise ValueError("must be a non-negative integer")
            return int(v)
        return v

    @field_validator("branch")
    @classmethod
    def validate_branch(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_branch(v):
            raise ValueError(
                "Branch must be a single line and must not end with a label keyword"
            )
        return v

    @field_validator("label")
    @classmethod
    def validate_label(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        if not is_label(v):
            raise ValueError("Label must be one of v, ver or version")
        return v or None

    @field_validator("prerelease")
    @classmethod
    def validate_prerelease(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_prerelease(v):
            raise ValueError("Prerelease Version does not match required format.")
        return v

    @field_validator("build")
    @classmethod
    def validate_build(cls, v: Optional[str]) -> Optional[str]:
        if v is not None and not is_build(v):
            raise ValueError("Build Version does not match required format.")
        return v


class ComplianceSettings(BaseModel):
    """Custom compliance policy, one setting per governed field.

    Each setting is ``"required"``, ``"optional"``, ``"forbidden"`` or a
    sequence of rules the field must match at least one of. String fields take
    literal strings or compiled patterns; Hotfix takes integers or compiled
    patterns. An empty-string literal matches an absent field.

    Keys may be given as display names (``Prerelease``) or attribute names
    (``prerelease``).

    Example:
        >>> ComplianceSettings(Prerelease=["alpha", re.compile(r"^beta\\..+$")])
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    branch: StringPolicy = Field(default="optional", alias="Branch")
    label: StringPolicy = Field(default="optional", alias="Label")
    hotfix: HotfixPolicy = Field(default="optional", alias="Hotfix")
    prerelease: StringPolicy = Field(default="optional", alias="Prerelease")
    build: StringPolicy = Field(default="optional", alias="Build")

    def setting_for(self, field: ComplianceField) -> Union[StringPolicy, HotfixPolicy]:
        return getattr(self, field.attribute)

    def to_dict(self) -> dict[str, Any]:
        """Return the settings as JSON-serializable data keyed by attribute name.

        Rule sequences become lists and compiled patterns become ``/pattern/``
        strings (with flag letters such as ``/pattern/i``). Pass the result
        through ``compliance_settings_from_data`` to get the settings back.
        """
        result: dict[str, Any] = {}
        for field in ComplianceField:
            setting = self.setting_for(field)
            if isinstance(setting, str):
                result[field.attribute] = setting
            else:
                result[field.attribute] = [
                    pattern_to_literal(rule) if isinstance(rule, re.Pattern) else rule
                    for rule in setting
                ]
        return result


def pattern_to_literal(pattern: re.Pattern[str]) -> str:
    """Write a compiled pattern as a ``/pattern/flags`` string.

    Examples:
        >>> pattern_to_literal(re.compile(r"^beta", re.IGNORECASE))
        '/^beta/i'
    """
    flags = "".join(letter for letter, flag in _FLAG_LETTERS.items() if pattern.flags & flag)
    return f"/{pattern.pattern}/{flags}"


def pattern_from_literal(rule: str) -> Optional[re.Pattern[str]]:
    """Compile a ``/pattern/flags`` string; plain strings give None.

    Raises:
        re.error: If the text between the slashes is not a valid pattern
    """
    match = PATTERN_LITERAL.match(rule)
    if match is None:
        return None
    flags = 0
    for letter in match.group("flags"):
        flags |= _FLAG_LETTERS[letter]
    return re.compile(match.group("pattern"), flags)


def compliance_settings_from_data(data: Mapping[str, Any]) -> dict[str, Any]:
    """Turn ``/pattern/`` strings inside rule lists into compiled patterns.

    This reverses ``ComplianceSettings.to_dict`` and reads the same form used
    in configuration files. Settings that are not lists are left unchanged.

    Raises:
        re.error: If a pattern string does not compile
    """
    converted: dict[str, Any] = {}
    for key, value in data.items():
        if isinstance(value, (list, tuple)):
            converted[key] = [
                (pattern_from_literal(rule) or rule) if isinstance(rule, str) else rule
                for rule in value
            ]
        else:
            converted[key] = value
    return converted


def _describe_errors(exc: ValidationError) -> list[FieldError]:
    errors = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "version"
        errors.append(FieldError(field=location, message=error["msg"]))
    return errors


def validate_fields(data: Mapping[str, Any], version: Optional[str] = None) -> VersionFields:
    """Validate a raw field mapping into typed version fields.

    Args:
        data: Field mapping, e.g. the output of ``match_version_fields``
        version: Text used to identify the input in error messages

    Returns:
        The validated fields

    Raises:
        FieldValidationError: Listing every field that failed validation
    """
    try:
        return VersionFields.model_validate(dict(data))
    except ValidationError as e:
        errors = _describe_errors(e)
        logger.debug("Version fields rejected: %s", "; ".join(str(err) for err in errors))
        raise FieldValidationError(version if version is not None else repr(dict(data)), errors) from e


def validate_compliance_settings(
    settings: Union["ComplianceSettings", Mapping[str, Any]],
) -> ComplianceSettings:
    """Return settings as a ComplianceSettings, validating mappings.

    Raises:
        FieldValidationError: If a mapping holds an unknown field or rule
    """
    if isinstance(settings, ComplianceSettings):
        return settings
    try:
        return ComplianceSettings.model_validate(dict(settings))
    except ValidationError as e:
        errors = [
            FieldError(field=f"compliance_settings.{err.field}", message=err.message)
            for err in _describe_errors(e)
        ]
        raise FieldValidationError(repr(dict(settings)), errors) from e
