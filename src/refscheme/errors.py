"""Error classes for refscheme.

This module provides:
- RefSchemeError: Base exception class for all package errors
- SchemeErrorCode: Structured discriminant for scheme grammar failures
- InvalidSchemeError: The single error kind for a scheme that fails the grammar
- SchemeConfigError: Scheme configuration exception
"""

from enum import StrEnum
from typing import override

SCHEME_ERROR_PREFIX = "scheme is not valid"
"""Every InvalidSchemeError message starts with this text."""


class SchemeErrorCode(StrEnum):
    """Why a candidate string failed the scheme grammar."""

    EMPTY = "empty"
    INVALID_LEADING_CHARACTER = "invalid_leading_character"
    INVALID_CHARACTER = "invalid_character"


class RefSchemeError(Exception):
    """Base exception for all refscheme errors."""

    pass


class InvalidSchemeError(RefSchemeError, ValueError):
    """Raised (or returned) when a candidate string is not a valid scheme.

    The error kind is the same for every grammar failure. ``code`` narrows
    down the cause for callers that want to branch on it, and the message
    always starts with ``SCHEME_ERROR_PREFIX``.

    Attributes:
        candidate: The rejected string, unchanged
        code: Structured cause of the rejection
        reason: Human-readable explanation of the cause

    """

    def __init__(self, candidate: str, code: SchemeErrorCode, reason: str) -> None:
        """Initialise the error with the rejected candidate and its cause.

        Args:
            candidate: The string that failed validation
            code: Structured cause of the failure
            reason: Human-readable explanation

        """
        super().__init__(f"{SCHEME_ERROR_PREFIX}: {candidate!r} ({reason})")
        self.candidate = candidate
        self.code = code
        self.reason = reason

    @override
    def __reduce__(self) -> tuple[type, tuple[str, SchemeErrorCode, str]]:
        return (type(self), (self.candidate, self.code, self.reason))


class SchemeConfigError(RefSchemeError):
    """Raised when a scheme configuration cannot be loaded or is invalid."""

    pass
