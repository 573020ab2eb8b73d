"""Reference scheme validation.

A reference scheme is the short token in front of a reference string that
tells a resolver how to interpret the rest of it (``file``, ``https``,
``tx``...). Valid schemes follow a restricted form of the RFC 3986 scheme
production::

    scheme = ALPHA *( ALPHA / DIGIT / "-" )

``+`` and ``.`` are allowed by RFC 3986 but not here. Only ASCII letters and
digits count, and the whole string must match.

This module provides:
- ReferenceScheme: Immutable, always-valid scheme value
- SchemeValidation: Explicit result of validate()
- validate / is_valid_scheme: Non-raising entry points
"""

from __future__ import annotations

import logging
import string
from dataclasses import dataclass
from typing import Self, cast

from refscheme.errors import InvalidSchemeError, SchemeErrorCode

logger = logging.getLogger(__name__)

SCHEME_DELIMITER = "://"

_ASCII_LETTERS = frozenset(string.ascii_letters)
_ASCII_DIGITS = frozenset(string.digits)
_TAIL_CHARACTERS = _ASCII_LETTERS | _ASCII_DIGITS | {"-"}


def _check(candidate: str) -> InvalidSchemeError | None:
    """Return the grammar failure for candidate, or None if it is valid."""
    if not isinstance(candidate, str):
        raise TypeError(f"scheme must be a str, not {type(candidate).__name__}")

    if not candidate:
        return InvalidSchemeError(candidate, SchemeErrorCode.EMPTY, "empty string")

    first = candidate[0]
    if first not in _ASCII_LETTERS:
        return InvalidSchemeError(
            candidate,
            SchemeErrorCode.INVALID_LEADING_CHARACTER,
            f"must start with an ASCII letter, got {first!r}",
        )

    for index, char in enumerate(candidate[1:], start=1):
        if char not in _TAIL_CHARACTERS:
            return InvalidSchemeError(
                candidate,
                SchemeErrorCode.INVALID_CHARACTER,
                f"character {char!r} at position {index} is not a letter, digit or '-'",
            )

    return None


@dataclass(frozen=True, slots=True, order=True)
class ReferenceScheme:
    """A scheme token that is guaranteed to satisfy the scheme grammar.

    The value is kept exactly as given: no case folding, no trimming.
    Equality, hashing and ordering all use the exact value, so ``Hello`` and
    ``hello`` are different schemes here. Whether they mean the same thing
    is up to whoever resolves references.

    Raises:
        InvalidSchemeError: If value is not a valid scheme
        TypeError: If value is not a string

    """

    value: str

    def __post_init__(self) -> None:
        error = _check(self.value)
        if error is not None:
            raise error

    @classmethod
    def parse(cls, candidate: str) -> Self:
        """Create a scheme from candidate, raising if it is not valid.

        Args:
            candidate: String to validate

        Returns:
            The validated scheme

        Raises:
            InvalidSchemeError: If candidate is not a valid scheme

        """
        return cls(candidate)

    @property
    def prefix(self) -> str:
        """The text that starts every reference using this scheme, e.g. ``file://``."""
        return f"{self.value}{SCHEME_DELIMITER}"

    def matches(self, reference: str) -> bool:
        """Check whether reference starts with this scheme's prefix."""
        return reference.startswith(self.prefix)

    def with_prefix(self, path: str) -> str:
        """Return path with this scheme's prefix in front of it."""
        return f"{self.prefix}{path}"

    def strip_prefix(self, reference: str) -> str:
        """Return reference without this scheme's prefix.

        Raises:
            ValueError: If reference does not start with the prefix

        """
        if not self.matches(reference):
            raise ValueError(
                f"Reference {reference!r} does not use scheme {self.value!r}"
            )
        return reference[len(self.prefix) :]

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class SchemeValidation:
    """Outcome of validating one candidate string.

    Exactly one of ``scheme`` and ``error`` is set.
    """

    candidate: str
    """The validated input, unchanged."""

    scheme: ReferenceScheme | None = None
    """The validated scheme, on success."""

    error: InvalidSchemeError | None = None
    """Why the candidate was rejected, on failure."""

    def __post_init__(self) -> None:
        if (self.scheme is None) == (self.error is None):
            raise ValueError("SchemeValidation needs exactly one of scheme or error")

    @property
    def is_valid(self) -> bool:
        """Check if the candidate was accepted."""
        return self.scheme is not None

    def unwrap(self) -> ReferenceScheme:
        """Return the validated scheme or raise the rejection error.

        Raises:
            InvalidSchemeError: If the candidate was rejected

        """
        if self.scheme is None:
            raise cast(InvalidSchemeError, self.error)
        return self.scheme


def validate(candidate: str) -> SchemeValidation:
    """Validate candidate against the scheme grammar without raising.

    Args:
        candidate: Any string, including empty or non-ASCII ones

    Returns:
        A SchemeValidation holding either the scheme or the error

    Raises:
        TypeError: If candidate is not a string

    Example:
        >>> validate("hello-2").unwrap().value
        'hello-2'
        >>> validate("4hello").error.code
        <SchemeErrorCode.INVALID_LEADING_CHARACTER: 'invalid_leading_character'>

    """
    error = _check(candidate)
    if error is not None:
        logger.debug("Rejected scheme candidate: %s", error)
        return SchemeValidation(candidate=candidate, error=error)
    return SchemeValidation(candidate=candidate, scheme=ReferenceScheme(candidate))


def is_valid_scheme(candidate: str) -> bool:
    """Check whether candidate is a valid scheme."""
    return _check(candidate) is None


FILE = ReferenceScheme("file")
HTTP = ReferenceScheme("http")
HTTPS = ReferenceScheme("https")
TX = ReferenceScheme("tx")
