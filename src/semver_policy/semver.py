# SPDX-License-Identifier: MIT
"""Extended semantic version value type.

A Version holds the standard MAJOR.MINOR.PATCH triple plus an optional branch,
label (v/ver/version), hotfix, prerelease and build. Values are immutable:
every change_* and increment_* method returns a new, fully validated Version
that keeps the compliance settings of the original.
"""

from __future__ import annotations

import locale
import re
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Union

from . import settings as _settings
from .compliance import ComplianceReport, check_custom_compliance, check_standard_compliance
from .errors import (
    FieldError,
    FieldValidationError,
    GrammarMismatchError,
    InvalidVersionError,
    InvariantViolationError,
)
from .grammar import FIELD_NAMES, match_version_fields
from .schema import (
    ComplianceSettings,
    compliance_settings_from_data,
    validate_compliance_settings,
    validate_fields,
)

SettingsInput = Union[ComplianceSettings, Mapping[str, Any], None]

# Snapshot keys accepted for compliance settings
_SETTINGS_KEYS = ("compliance_settings", "complianceSettings")


@dataclass(frozen=True, slots=True)
class Version:
    """Represents a validated extended semantic version.

    Attributes:
        major: Major version number
        minor: Minor version number
        patch: Patch version number
        hotfix: Optional hotfix number below patch
        prerelease: Optional prerelease identifiers (e.g., "beta.1")
        build: Optional build metadata (e.g., "build.007")
        branch: Optional free-text qualifier rendered before the version
        label: Optional release-type label ("v", "ver" or "version")
        compliance_settings: Custom compliance policy captured at construction;
            the process-wide default is used when none is given

    Raises:
        FieldValidationError: If any field is invalid
        InvariantViolationError: If compliance_settings is of an unsupported type
    """

    major: int = 0
    minor: int = 0
    patch: int = 1
    hotfix: Optional[int] = None
    prerelease: Optional[str] = None
    build: Optional[str] = None
    branch: Optional[str] = None
    label: Optional[str] = None
    compliance_settings: Optional[ComplianceSettings] = field(default=None, repr=False)

    def __post_init__(self) -> None:
        raw = {name: getattr(self, name) for name in FIELD_NAMES}
        fields = validate_fields(raw, version=_render(raw))
        for name in FIELD_NAMES:
            object.__setattr__(self, name, getattr(fields, name))

        object.__setattr__(
            self, "compliance_settings", _resolve_settings(self.compliance_settings)
        )

    def __str__(self) -> str:
        """Return the canonical string form, the inverse of parse()."""
        return _render({name: getattr(self, name) for name in FIELD_NAMES})

    # -- construction -------------------------------------------------------

    @classmethod
    def parse(cls, text: str, compliance_settings: SettingsInput = None) -> "Version":
        """Parse a version string.

        Examples:
            >>> Version.parse("v1.2.3")
            Version(major=1, minor=2, patch=3, hotfix=None, prerelease=None, build=None, branch=None, label='v')

        Raises:
            GrammarMismatchError: If the string does not match the grammar
            FieldValidationError: If a matched field is invalid
            InvariantViolationError: If text is not a string
        """
        if not isinstance(text, str):
            raise InvariantViolationError(
                f"Version must be a string, got {type(text).__name__}"
            )
        raw = match_version_fields(text)
        if raw is None:
            raise GrammarMismatchError(text, f"Invalid Semantic Version String: {text!r}")
        fields = validate_fields(raw, version=text)
        return cls(**fields.model_dump(), compliance_settings=compliance_settings)

    @classmethod
    def from_fields(
        cls, data: Mapping[str, Any], compliance_settings: SettingsInput = None
    ) -> "Version":
        """Build a version from a field mapping such as a to_json() snapshot.

        Settings embedded in the mapping are used unless compliance_settings
        is given explicitly. Embedded pattern rules may be written as
        ``/pattern/flags`` strings, the form to_json() produces.

        Raises:
            FieldValidationError: If a field or an embedded pattern is invalid
        """
        data = dict(data)
        embedded = None
        for key in _SETTINGS_KEYS:
            if key in data:
                embedded = data.pop(key)
        fields = validate_fields(data)
        if compliance_settings is None and isinstance(embedded, Mapping):
            try:
                compliance_settings = compliance_settings_from_data(embedded)
            except re.error as e:
                raise FieldValidationError(
                    repr(dict(embedded)),
                    [FieldError(field="compliance_settings", message=f"Invalid pattern: {e}")],
                ) from e
        elif compliance_settings is None:
            compliance_settings = embedded
        return cls(**fields.model_dump(), compliance_settings=compliance_settings)

    from_json = from_fields

    @classmethod
    def coerce(cls, value: Union[str, Mapping[str, Any], "Version"]) -> "Version":
        """Turn a string, field mapping or Version into a Version.

        Raises:
            InvariantViolationError: For any other type of value
        """
        if isinstance(value, Version):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, Mapping):
            return cls.from_fields(value)
        raise InvariantViolationError(
            f"Invalid Semantic Version Initializer: {type(value).__name__}"
        )

    def to_json(self) -> dict[str, Any]:
        """Return a snapshot of every field and the resolved settings."""
        snapshot: dict[str, Any] = {name: getattr(self, name) for name in FIELD_NAMES}
        snapshot["compliance_settings"] = self.compliance_settings.to_dict()
        return snapshot

    # -- field replacement --------------------------------------------------

    def change_branch(self, branch: Optional[str]) -> "Version":
        return replace(self, branch=branch)

    def change_label(self, label: Optional[str]) -> "Version":
        return replace(self, label=label)

    def change_major(self, major: int) -> "Version":
        return replace(self, major=major)

    def change_minor(self, minor: int) -> "Version":
        return replace(self, minor=minor)

    def change_patch(self, patch: int) -> "Version":
        return replace(self, patch=patch)

    def change_hotfix(self, hotfix: Optional[int]) -> "Version":
        return replace(self, hotfix=hotfix)

    def change_prerelease(self, prerelease: Optional[str]) -> "Version":
        return replace(self, prerelease=prerelease)

    def change_build(self, build: Optional[str]) -> "Version":
        return replace(self, build=build)

    # -- increments ---------------------------------------------------------
    # Bumping a field resets every less significant field and drops
    # hotfix, prerelease and build.

    def increment_major(self) -> "Version":
        return replace(
            self,
            major=self.major + 1,
            minor=0,
            patch=0,
            hotfix=None,
            prerelease=None,
            build=None,
        )

    def increment_minor(self) -> "Version":
        return replace(
            self, minor=self.minor + 1, patch=0, hotfix=None, prerelease=None, build=None
        )

    def increment_patch(self) -> "Version":
        return replace(self, patch=self.patch + 1, hotfix=None, prerelease=None, build=None)

    def increment_hotfix(self) -> "Version":
        """Bump the hotfix (absent counts as 0), keeping major.minor.patch."""
        return replace(self, hotfix=(self.hotfix or 0) + 1, prerelease=None, build=None)

    # -- compliance ---------------------------------------------------------

    def check_standard_compliance(self, strict: bool = False) -> ComplianceReport:
        return check_standard_compliance(self, strict)

    def is_standard_compliant(self, strict: bool = False) -> bool:
        """Return True if the version follows standard SemVer syntax.

        With strict=True a label or hotfix makes the version non-compliant.
        """
        return check_standard_compliance(self, strict).success

    def check_custom_compliance(self) -> ComplianceReport:
        return check_custom_compliance(self)

    def is_custom_compliant(self) -> bool:
        """Return True if the version satisfies its compliance settings."""
        return check_custom_compliance(self).success

    # -- precedence ---------------------------------------------------------

    def compare_precedence(self, other: "Version") -> int:
        """Compare precedence with another version.

        Fields are compared in order: branch (locale collation, absent as
        empty), major, minor, patch, hotfix (absent as 0). Prerelease and
        build do not take part.

        Returns:
            -1, 0 or 1
        """
        if self.branch != other.branch:
            order = locale.strcoll(self.branch or "", other.branch or "")
            if order:
                return -1 if order < 0 else 1

        for ours, theirs in (
            (self.major, other.major),
            (self.minor, other.minor),
            (self.patch, other.patch),
            (self.hotfix or 0, other.hotfix or 0),
        ):
            if ours != theirs:
                return -1 if ours < theirs else 1
        return 0

    @staticmethod
    def compare(a: "Version", b: "Version") -> int:
        return a.compare_precedence(b)


def _resolve_settings(settings: SettingsInput) -> ComplianceSettings:
    if settings is None:
        return _settings.get_default_compliance_settings()
    if isinstance(settings, (ComplianceSettings, Mapping)):
        return validate_compliance_settings(settings)
    raise InvariantViolationError(
        f"Compliance settings must be ComplianceSettings or a mapping, got {type(settings).__name__}"
    )


def _render(fields: Mapping[str, Any]) -> str:
    """Render fields as ``[branch ][label]MAJOR.MINOR.PATCH[.HOTFIX][-PRE][+BUILD]``.

    The label is written directly before major (``v1.2.3``), not as the
    ``[label ]`` layout with a trailing space. The bare form is what the
    documented ``"v1.2.3"`` rendering shows; the parser reads both forms, so
    either one parses back to the same fields.
    """
    text = ""
    if fields.get("branch") is not None:
        text += f"{fields['branch']} "
    if fields.get("label") is not None:
        text += f"{fields['label']}"
    text += f"{fields.get('major')}.{fields.get('minor')}.{fields.get('patch')}"
    if fields.get("hotfix") is not None:
        text += f".{fields['hotfix']}"
    if fields.get("prerelease") is not None:
        text += f"-{fields['prerelease']}"
    if fields.get("build") is not None:
        text += f"+{fields['build']}"
    return text


def parse_version(version_string: str) -> Version:
    """Parse a version string into a Version object.

    Raises:
        InvalidVersionError: If the string is not a valid version
        InvariantViolationError: If version_string is not a string
    """
    return Version.parse(version_string)


def try_parse_version(value: Any) -> Optional[Version]:
    """Return a Version for a string, mapping or Version, or None if invalid.

    Raises:
        InvariantViolationError: For values that are none of those types
    """
    try:
        return Version.coerce(value)
    except InvalidVersionError:
        return None


def is_valid_version(version_string: str, strict: bool = False) -> bool:
    """Check if a string parses and is standard compliant.

    Examples:
        >>> is_valid_version("release v1.0.0")
        True
        >>> is_valid_version("release v1.0.0", strict=True)
        False
        >>> is_valid_version("1.0")
        False
    """
    if not isinstance(version_string, str):
        return False
    version = try_parse_version(version_string)
    return version is not None and version.is_standard_compliant(strict)
