# SPDX-License-Identifier: MIT
"""Exceptions raised while building semantic versions."""

from __future__ import annotations

from dataclasses import dataclass


class InvalidVersionError(ValueError):
    """Raised when input cannot be turned into a semantic version."""

    def __init__(self, version: str, message: str = ""):
        self.version = version
        self.message = message or f"Invalid semantic version: {version}"
        super().__init__(self.message)


class GrammarMismatchError(InvalidVersionError):
    """Raised when a version string does not match the version grammar."""


@dataclass(frozen=True)
class FieldError:
    """A single structural problem with one version field."""

    field: str
    message: str

    def __str__(self) -> str:
        return f"{self.field}: {self.message}"


class FieldValidationError(InvalidVersionError):
    """Raised when one or more version fields fail structural validation.

    Every violated field is reported, not just the first one.
    """

    def __init__(self, version: str, errors: list[FieldError] | tuple[FieldError, ...]):
        self.errors = tuple(errors)
        details = "\n".join(str(error) for error in self.errors)
        super().__init__(version, f"Invalid semantic version fields for {version!r}:\n{details}")

    @property
    def fields(self) -> tuple[str, ...]:
        """Names of the fields that failed validation, in report order."""
        return tuple(dict.fromkeys(error.field for error in self.errors))


class InvariantViolationError(TypeError):
    """Raised on programmer error, such as an unsupported initializer type."""
