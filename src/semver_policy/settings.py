# SPDX-License-Identifier: MIT
"""Default compliance settings and loading them from pyproject.toml.

Versions built without explicit settings capture the process-wide default at
construction time. The default is plain module state with no locking: set it
before any other thread starts building versions if results must be
deterministic. Changing it later does not affect versions that already exist.

Settings can be kept in ``pyproject.toml``::

    [tool.semver-policy.compliance]
    Branch = "forbidden"
    Hotfix = [0, 1]
    Prerelease = ["alpha", "/^beta\\\\..+$/"]

Strings written as ``/pattern/`` (optionally followed by the flag letters
``i``, ``m``, ``s`` or ``x``, e.g. ``/pattern/i`` for case-insensitive)
become compiled patterns; other strings and integers are literals.
"""

from __future__ import annotations

import logging
import re
import sys
from pathlib import Path
from typing import Any, Mapping, Union

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

from pydantic import ValidationError

from .schema import (
    ComplianceSettings,
    compliance_settings_from_data,
    validate_compliance_settings,
)

logger = logging.getLogger(__name__)

TOOL_SECTION = "semver-policy"

_default_settings = ComplianceSettings()


class ComplianceConfigError(Exception):
    """Raised when compliance settings in a configuration file are invalid."""

    pass


def get_default_compliance_settings() -> ComplianceSettings:
    """Return the settings new versions capture when given none."""
    return _default_settings


def set_default_compliance_settings(
    settings: Union[ComplianceSettings, Mapping[str, Any]],
) -> ComplianceSettings:
    """Replace the process-wide default compliance settings.

    Args:
        settings: The new defaults, as a ComplianceSettings or a mapping

    Returns:
        The validated settings now in effect

    Raises:
        FieldValidationError: If a mapping is not valid settings
    """
    global _default_settings
    _default_settings = validate_compliance_settings(settings)
    logger.info("Default compliance settings changed: %s", _default_settings.to_dict())
    return _default_settings


def reset_default_compliance_settings() -> ComplianceSettings:
    """Restore the default where every governed field is optional."""
    return set_default_compliance_settings(ComplianceSettings())


def compliance_settings_from_pyproject_dict(pyproject: Mapping[str, Any]) -> ComplianceSettings:
    """Build settings from a parsed pyproject.toml dictionary.

    Missing sections yield the all-optional settings.

    Raises:
        ComplianceConfigError: If the section holds invalid settings
    """
    section = pyproject.get("tool", {}).get(TOOL_SECTION, {}).get("compliance", {})
    if not isinstance(section, Mapping):
        raise ComplianceConfigError(f"[tool.{TOOL_SECTION}.compliance] must be a table")

    try:
        converted = compliance_settings_from_data(section)
    except re.error as e:
        raise ComplianceConfigError(f"Invalid pattern in compliance settings: {e}") from e

    try:
        return ComplianceSettings.model_validate(converted)
    except ValidationError as e:
        raise ComplianceConfigError(f"Invalid compliance settings: {e}") from e


def load_compliance_settings(pyproject_path: str | Path) -> ComplianceSettings:
    """Read compliance settings from a pyproject.toml file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        ComplianceConfigError: If the file or its settings are invalid
    """
    path = Path(pyproject_path)
    if not path.exists():
        raise FileNotFoundError(f"pyproject.toml not found: {path}")

    try:
        with open(path, "rb") as f:
            pyproject = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ComplianceConfigError(f"Invalid TOML syntax: {e}") from e

    return compliance_settings_from_pyproject_dict(pyproject)
