# SPDX-License-Identifier: MIT
"""Tests for default compliance settings and pyproject.toml loading."""

import re

import pytest

from semver_policy import (
    ComplianceConfigError,
    ComplianceSettings,
    FieldValidationError,
    compliance_settings_from_pyproject_dict,
    get_default_compliance_settings,
    load_compliance_settings,
    reset_default_compliance_settings,
    set_default_compliance_settings,
)


class TestDefaultSettings:
    """Tests for the process-wide default settings."""

    def test_initial_default(self):
        assert get_default_compliance_settings() == ComplianceSettings()

    def test_set_from_mapping(self):
        result = set_default_compliance_settings({"Branch": "forbidden"})
        assert result.branch == "forbidden"
        assert get_default_compliance_settings() is result

    def test_set_invalid(self):
        with pytest.raises(FieldValidationError):
            set_default_compliance_settings({"Branch": "always"})
        assert get_default_compliance_settings() == ComplianceSettings()

    def test_reset(self):
        set_default_compliance_settings({"Build": "required"})
        reset_default_compliance_settings()
        assert get_default_compliance_settings().build == "optional"


class TestPyprojectSettings:
    """Tests for reading [tool.semver-policy.compliance]."""

    def test_missing_section(self):
        assert compliance_settings_from_pyproject_dict({"project": {"name": "x"}}) == (
            ComplianceSettings()
        )

    def test_literals_and_patterns(self):
        settings = compliance_settings_from_pyproject_dict(
            {
                "tool": {
                    "semver-policy": {
                        "compliance": {
                            "Branch": "forbidden",
                            "Hotfix": [0, "/^[1-3]$/"],
                            "Prerelease": ["alpha", "/^BETA\\..+$/i", ""],
                        }
                    }
                }
            }
        )
        assert settings.branch == "forbidden"
        assert settings.hotfix == (0, re.compile(r"^[1-3]$"))
        assert settings.prerelease == ("alpha", re.compile(r"^BETA\..+$", re.IGNORECASE), "")

    def test_invalid_setting(self):
        with pytest.raises(ComplianceConfigError):
            compliance_settings_from_pyproject_dict(
                {"tool": {"semver-policy": {"compliance": {"Label": "maybe"}}}}
            )

    def test_invalid_pattern(self):
        with pytest.raises(ComplianceConfigError, match="Invalid pattern"):
            compliance_settings_from_pyproject_dict(
                {"tool": {"semver-policy": {"compliance": {"Build": ["/(/"]}}}}
            )

    def test_section_must_be_table(self):
        with pytest.raises(ComplianceConfigError):
            compliance_settings_from_pyproject_dict(
                {"tool": {"semver-policy": {"compliance": "strict"}}}
            )

    def test_load_file(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text(
            "[tool.semver-policy.compliance]\n"
            'Label = ["v", ""]\n'
            'Prerelease = ["/^rc\\\\.[0-9]+$/"]\n'
        )
        settings = load_compliance_settings(path)
        assert settings.label == ("v", "")
        assert settings.prerelease == (re.compile(r"^rc\.[0-9]+$"),)

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_compliance_settings(tmp_path / "pyproject.toml")

    def test_load_invalid_toml(self, tmp_path):
        path = tmp_path / "pyproject.toml"
        path.write_text("[tool.semver-policy\n")
        with pytest.raises(ComplianceConfigError, match="Invalid TOML syntax"):
            load_compliance_settings(path)
