# SPDX-License-Identifier: MIT
"""Extended semantic version parsing, policy compliance and precedence.

Versions follow ``[branch ][label]MAJOR.MINOR.PATCH[.HOTFIX][-PRERELEASE][+BUILD]``
where label is ``v``, ``ver`` or ``version``.

Example:
    >>> from semver_policy import Version, compare_versions
    >>>
    >>> version = Version.parse("release 2.0.0.5-beta.1+build.007")
    >>> version.branch, version.hotfix
    ('release', 5)
    >>> str(version.increment_patch())
    'release 2.0.1'
    >>>
    >>> Version.parse("1.0.0.1").is_standard_compliant(strict=True)
    False
    >>>
    >>> compare_versions("1.0.0", "1.1.0")
    -1
"""

__version__ = "0.1.0"

from .errors import (
    FieldError,
    FieldValidationError,
    GrammarMismatchError,
    InvalidVersionError,
    InvariantViolationError,
)
from .grammar import SEMVER_PATTERN, match_version_fields
from .schema import (
    MAX_SAFE_INTEGER,
    ComplianceField,
    ComplianceSettings,
    VersionFields,
    validate_fields,
)
from .compliance import (
    ComplianceMessage,
    ComplianceReport,
    check_custom_compliance,
    check_standard_compliance,
)
from .settings import (
    ComplianceConfigError,
    compliance_settings_from_pyproject_dict,
    get_default_compliance_settings,
    load_compliance_settings,
    reset_default_compliance_settings,
    set_default_compliance_settings,
)
from .semver import (
    Version,
    is_valid_version,
    parse_version,
    try_parse_version,
)
from .compare import (
    compare_versions,
    version_key,
)

__all__ = [
    # Errors
    "FieldError",
    "FieldValidationError",
    "GrammarMismatchError",
    "InvalidVersionError",
    "InvariantViolationError",
    # Grammar and field validation
    "SEMVER_PATTERN",
    "match_version_fields",
    "MAX_SAFE_INTEGER",
    "VersionFields",
    "validate_fields",
    # Compliance
    "ComplianceField",
    "ComplianceSettings",
    "ComplianceMessage",
    "ComplianceReport",
    "check_custom_compliance",
    "check_standard_compliance",
    # Default settings
    "ComplianceConfigError",
    "compliance_settings_from_pyproject_dict",
    "get_default_compliance_settings",
    "load_compliance_settings",
    "reset_default_compliance_settings",
    "set_default_compliance_settings",
    # Versions
    "Version",
    "is_valid_version",
    "parse_version",
    "try_parse_version",
    # Version comparison
    "compare_versions",
    "version_key",
]
