# SPDX-License-Identifier: MIT
"""Version precedence helpers.

Precedence runs over branch, major, minor, patch and hotfix. Prerelease and
build metadata are ignored, so ``1.0.0-alpha`` and ``1.0.0+build.1`` have the
same precedence as ``1.0.0``.
"""

from __future__ import annotations

import locale
from typing import Union

from .semver import Version, parse_version


def compare_versions(version1: Union[str, Version], version2: Union[str, Version]) -> int:
    """Compare the precedence of two versions.

    Args:
        version1: First version (string or Version object)
        version2: Second version (string or Version object)

    Returns:
        -1 if version1 < version2
        0 if version1 == version2
        1 if version1 > version2

    Raises:
        InvalidVersionError: If either version string is invalid

    Examples:
        >>> compare_versions("1.0.0", "1.1.0")
        -1
        >>> compare_versions("1.0.0.1", "1.0.0")
        1
        >>> compare_versions("1.0.0-alpha", "1.0.0+build.5")
        0
    """
    v1 = parse_version(version1) if isinstance(version1, str) else version1
    v2 = parse_version(version2) if isinstance(version2, str) else version2
    return v1.compare_precedence(v2)


def version_key(version: Union[str, Version]) -> tuple:
    """Return a sort key consistent with compare_versions.

    Examples:
        >>> sorted(["1.0.0.1", "2.0.0", "1.0.0"], key=version_key)
        ['1.0.0', '1.0.0.1', '2.0.0']
    """
    v = parse_version(version) if isinstance(version, str) else version
    return (
        locale.strxfrm(v.branch or ""),
        v.major,
        v.minor,
        v.patch,
        v.hotfix or 0,
    )
