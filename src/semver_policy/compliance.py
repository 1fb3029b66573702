# SPDX-License-Identifier: MIT
"""Standard and custom compliance checks for versions.

Both checks are queries: a failure is reported in the returned
ComplianceReport, never raised.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Literal, Optional

from .errors import InvariantViolationError
from .grammar import is_branch, is_build, is_label, is_prerelease
from .schema import MAX_SAFE_INTEGER, ComplianceField

if TYPE_CHECKING:
    from .semver import Version

MessageType = Literal["error", "warning", "info"]


@dataclass(frozen=True)
class ComplianceMessage:
    """One finding from a compliance check."""

    field: str
    message: str
    type: MessageType = "error"


@dataclass(frozen=True)
class ComplianceReport:
    """Result of a compliance check.

    Attributes:
        success: True unless a message has type "error"
        messages: Findings in field order
    """

    success: bool
    messages: tuple[ComplianceMessage, ...] = field(default_factory=tuple)

    def __bool__(self) -> bool:
        return self.success

    @property
    def errors(self) -> tuple[ComplianceMessage, ...]:
        return tuple(m for m in self.messages if m.type == "error")


def _is_version_number(value: Any) -> bool:
    return (
        isinstance(value, int)
        and not isinstance(value, bool)
        and 0 <= value <= MAX_SAFE_INTEGER
    )


def _require_version(version: Optional[Version]) -> Version:
    if version is None:
        raise InvariantViolationError("Semantic Version is None.")
    return version


def check_standard_compliance(version: Version, strict: bool = False) -> ComplianceReport:
    """Check each field of a version against its canonical syntax.

    In non-strict mode branch, label and hotfix are accepted when well formed.
    In strict mode a present label or hotfix is an error, while a present
    branch is only reported as info.

    Raises:
        InvariantViolationError: If version is None
    """
    version = _require_version(version)
    messages: list[ComplianceMessage] = []

    if strict:
        if version.branch is not None:
            messages.append(
                ComplianceMessage("Branch", "Branch is not a standard notation", "info")
            )
    elif version.branch is not None and not is_branch(version.branch):
        messages.append(ComplianceMessage("Branch", "Branch does not match required format"))

    if strict and version.label:
        messages.append(ComplianceMessage("Label", "Label is not a standard notation"))
    elif version.label is not None and not is_label(version.label):
        messages.append(ComplianceMessage("Label", "Label does not match required format"))

    for name in ("Major", "Minor", "Patch"):
        if not _is_version_number(getattr(version, name.lower())):
            messages.append(
                ComplianceMessage(name, f"{name} Version does not match required format")
            )

    if strict:
        if version.hotfix is not None:
            messages.append(ComplianceMessage("Hotfix", "Hotfix is not a standard notation"))
    elif version.hotfix is not None and not _is_version_number(version.hotfix):
        messages.append(
            ComplianceMessage("Hotfix", "Hotfix Version does not match required format")
        )

    if version.prerelease is not None and not is_prerelease(version.prerelease):
        messages.append(
            ComplianceMessage("Prerelease", "Prerelease Version does not match required format")
        )

    if version.build is not None and not is_build(version.build):
        messages.append(ComplianceMessage("Build", "Build Version does not match required format"))

    return ComplianceReport(
        success=not any(m.type == "error" for m in messages),
        messages=tuple(messages),
    )


def _rule_matches(rule: Any, value: Any) -> bool:
    if isinstance(rule, re.Pattern):
        return rule.search("" if value is None else str(value)) is not None
    if isinstance(rule, str) and rule == "":
        return value is None
    return rule == value


def _check_field(version: Version, key: ComplianceField) -> Optional[ComplianceMessage]:
    setting = version.compliance_settings.setting_for(key)
    value = getattr(version, key.attribute)

    if setting == "required":
        missing = value is None or (isinstance(value, str) and not value.strip())
        if missing:
            return ComplianceMessage(key.value, f"Semantic Version Setting {key.value} is required")
    elif setting == "forbidden":
        if value is not None:
            return ComplianceMessage(key.value, f"Semantic Version Setting {key.value} is forbidden")
    elif setting == "optional" or setting is None:
        pass
    elif not any(_rule_matches(rule, value) for rule in setting):
        return ComplianceMessage(
            key.value, f"Semantic Version Setting {key.value} does not match required format"
        )
    return None


def check_custom_compliance(version: Version) -> ComplianceReport:
    """Check a version against the compliance settings it carries.

    Each governed field that fails its setting contributes exactly one error.

    Raises:
        InvariantViolationError: If version is None
    """
    version = _require_version(version)
    messages = [
        message
        for message in (_check_field(version, key) for key in ComplianceField)
        if message is not None
    ]
    return ComplianceReport(success=not messages, messages=tuple(messages))
