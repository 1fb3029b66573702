# SPDX-License-Identifier: MIT
"""Shared fixtures for semver-policy tests."""

import pytest

from semver_policy import reset_default_compliance_settings


@pytest.fixture(autouse=True)
def default_compliance_settings():
    """Ensure every test starts and ends with all-optional default settings."""
    reset_default_compliance_settings()
    yield
    reset_default_compliance_settings()
