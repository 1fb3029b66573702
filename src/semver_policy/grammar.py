# SPDX-License-Identifier: MIT
"""Version string grammar.

The grammar is assembled from one sub-pattern per field so each piece can be
tested on its own:

    [branch ][label[ ]]MAJOR.MINOR.PATCH[.HOTFIX][-PRERELEASE][+BUILD]

- branch: free text on a single line, separated from the rest by one space
- label: ``v``, ``ver`` or ``version`` (any case), optionally followed by a space
- prerelease: dot-separated identifiers, each validated later on its own
- build: dot-separated identifiers, leading zeros allowed
"""

from __future__ import annotations

import logging
import re
from typing import Optional

logger = logging.getLogger(__name__)

NUMERIC_PATTERN = r"[0-9]+"
LABEL_PATTERN = r"version|ver|v"
BRANCH_PATTERN = r"[^\r\n]+?"
PRERELEASE_PATTERN = r"[1-9a-zA-Z-][0-9a-zA-Z.-]*"
BUILD_PATTERN = r"[0-9a-zA-Z.-]+"

# Single identifiers inside the dotted prerelease/build segments
PRERELEASE_IDENTIFIER = re.compile(r"^[1-9a-zA-Z-][0-9a-zA-Z-]*$")
BUILD_IDENTIFIER = re.compile(r"^[0-9a-zA-Z-]+$")
NUMERIC_IDENTIFIER = re.compile(rf"^{NUMERIC_PATTERN}$")
LABEL_IDENTIFIER = re.compile(rf"^(?:{LABEL_PATTERN})?$", re.IGNORECASE)

# A branch must not be mistaken for a label when the rendered string is read back
_TRAILING_LABEL = re.compile(rf"(?:^|\s)(?:{LABEL_PATTERN})\s*$", re.IGNORECASE)

# Everything after the label, without capture groups
_TAIL_PATTERN = (
    rf"{NUMERIC_PATTERN}\.{NUMERIC_PATTERN}\.{NUMERIC_PATTERN}"
    rf"(?:\.{NUMERIC_PATTERN})?(?:-{PRERELEASE_PATTERN})?(?:\+{BUILD_PATTERN})?"
)

# A leading label followed by a complete version is never read as a branch
SEMVER_PATTERN = re.compile(
    rf"^(?:(?!(?:{LABEL_PATTERN}) ?{_TAIL_PATTERN}$)(?P<branch>{BRANCH_PATTERN}) )?"
    rf"(?:(?P<label>{LABEL_PATTERN}) ?)?"
    rf"(?P<major>{NUMERIC_PATTERN})"
    rf"\.(?P<minor>{NUMERIC_PATTERN})"
    rf"\.(?P<patch>{NUMERIC_PATTERN})"
    rf"(?:\.(?P<hotfix>{NUMERIC_PATTERN}))?"
    rf"(?:-(?P<prerelease>{PRERELEASE_PATTERN}))?"
    rf"(?:\+(?P<build>{BUILD_PATTERN}))?$",
    re.IGNORECASE,
)

FIELD_NAMES = ("branch", "label", "major", "minor", "patch", "hotfix", "prerelease", "build")


def match_version_fields(text: str) -> Optional[dict[str, str]]:
    """Split a version string into its raw string fields.

    Args:
        text: The candidate version string. It must match in full.

    Returns:
        A mapping of the fields that were present, or None if the string does
        not match the grammar.

    Examples:
        >>> match_version_fields("v1.2.3")
        {'label': 'v', 'major': '1', 'minor': '2', 'patch': '3'}
        >>> match_version_fields("1.2") is None
        True
    """
    match = SEMVER_PATTERN.fullmatch(text)
    if match is None:
        logger.debug("Version string %r does not match the grammar", text)
        return None
    return {name: value for name, value in match.groupdict().items() if value is not None}


def is_label(value: str) -> bool:
    """Return True for an empty string or a label keyword in any case."""
    return LABEL_IDENTIFIER.fullmatch(value) is not None


def is_numeric_identifier(value: str) -> bool:
    return NUMERIC_IDENTIFIER.fullmatch(value) is not None


def is_prerelease(value: str) -> bool:
    """Return True if every dot-separated identifier is a valid prerelease identifier."""
    return all(PRERELEASE_IDENTIFIER.fullmatch(piece) for piece in value.split("."))


def is_build(value: str) -> bool:
    """Return True if every dot-separated identifier is a valid build identifier."""
    return all(BUILD_IDENTIFIER.fullmatch(piece) for piece in value.split("."))


def is_branch(value: str) -> bool:
    """Return True if the branch can be rendered and read back unchanged."""
    if not value or "\n" in value or "\r" in value:
        return False
    return _TRAILING_LABEL.search(value) is None
