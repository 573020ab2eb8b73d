"""Tests for scheme validation and the ReferenceScheme value type."""

import pickle
import string
import threading

import pytest

from refscheme import (
    FILE,
    HTTPS,
    SCHEME_ERROR_PREFIX,
    TX,
    InvalidSchemeError,
    ReferenceScheme,
    SchemeErrorCode,
    SchemeValidation,
    is_valid_scheme,
    validate,
)

VALID_SCHEMES = [
    "hello",
    "h",
    "he",
    "h0t",
    "hello-world",
    "hello-2",
    "Hello",
    "FiLe",
    "a-",
    "x--y",
]

INVALID_SCHEMES = [
    "",
    "hello world",
    "hello\tworld",
    "\nhello",
    "\r\nhello",
    "hello\n",
    "hello\r\n",
    "hello\n\r",
    "hello\nworld",
    "-hello",
    "-",
    "4hello",
    "0",
    "hel_lo",
    "he:lo",
    "hello:",
    "hello.world",
    "http+https",
    " hello",
    "héllo",
    "ñ",
    "a٣",
    "hello\x00",
]

# =============================================================================
# Literal Scenarios
# =============================================================================


class TestValidationScenarios:
    """The reference accept/reject cases."""

    @pytest.mark.parametrize(
        "candidate", ["", "hello world", "-hello", "4hello", "hel_lo"]
    )
    def test_rejects_with_stable_message_prefix(self, candidate: str) -> None:
        """Every rejection message starts with 'scheme is not valid'."""
        result = validate(candidate)

        assert not result.is_valid
        assert result.error is not None
        assert str(result.error).startswith("scheme is not valid")

    def test_accepts_hyphen_and_digit_after_first_letter(self) -> None:
        """'hello-2' is accepted and its value is exactly the input."""
        result = validate("hello-2")

        assert result.is_valid
        assert result.unwrap().value == "hello-2"

    def test_case_has_no_bearing_on_validity(self) -> None:
        """Upper-case letters are valid and preserved."""
        assert validate("Hello").unwrap().value == "Hello"


# =============================================================================
# Grammar
# =============================================================================


class TestGrammar:
    """Acceptance matches the scheme grammar exactly."""

    @pytest.mark.parametrize("candidate", VALID_SCHEMES)
    def test_accepts_valid_scheme(self, candidate: str) -> None:
        """Valid schemes are accepted without normalisation."""
        result = validate(candidate)

        assert result.is_valid
        assert result.error is None
        assert result.scheme is not None
        assert result.scheme.value == candidate
        assert is_valid_scheme(candidate)

    @pytest.mark.parametrize("candidate", INVALID_SCHEMES)
    def test_rejects_invalid_scheme(self, candidate: str) -> None:
        """Invalid schemes are rejected with an InvalidSchemeError."""
        result = validate(candidate)

        assert not result.is_valid
        assert result.scheme is None
        assert isinstance(result.error, InvalidSchemeError)
        assert str(result.error).startswith(SCHEME_ERROR_PREFIX)
        assert not is_valid_scheme(candidate)

    def test_every_single_ascii_character(self) -> None:
        """A one-character scheme is valid iff it is an ASCII letter."""
        for code_point in range(128):
            char = chr(code_point)
            assert is_valid_scheme(char) == (char in string.ascii_letters), char

    def test_every_ascii_character_after_a_letter(self) -> None:
        """After the first letter only letters, digits and '-' are allowed."""
        allowed = set(string.ascii_letters + string.digits + "-")
        for code_point in range(128):
            char = chr(code_point)
            assert is_valid_scheme(f"a{char}") == (char in allowed), repr(char)

    def test_long_scheme_is_accepted(self) -> None:
        """Length is not limited by the validator."""
        candidate = "a" + "b1-" * 10_000
        assert validate(candidate).unwrap().value == candidate


# =============================================================================
# Error Codes
# =============================================================================


class TestErrorCodes:
    """Rejections carry a structured code alongside the message."""

    @pytest.mark.parametrize(
        ("candidate", "code"),
        [
            ("", SchemeErrorCode.EMPTY),
            ("-hello", SchemeErrorCode.INVALID_LEADING_CHARACTER),
            ("4hello", SchemeErrorCode.INVALID_LEADING_CHARACTER),
            (" hello", SchemeErrorCode.INVALID_LEADING_CHARACTER),
            ("éa", SchemeErrorCode.INVALID_LEADING_CHARACTER),
            ("hello world", SchemeErrorCode.INVALID_CHARACTER),
            ("hel_lo", SchemeErrorCode.INVALID_CHARACTER),
            ("hello\n", SchemeErrorCode.INVALID_CHARACTER),
            ("http+https", SchemeErrorCode.INVALID_CHARACTER),
        ],
    )
    def test_error_code_identifies_cause(
        self, candidate: str, code: SchemeErrorCode
    ) -> None:
        """Each kind of failure maps to its own code."""
        result = validate(candidate)

        assert result.error is not None
        assert result.error.code == code
        assert result.error.candidate == candidate

    def test_invalid_character_reason_names_position(self) -> None:
        """The reason points at the first offending character."""
        result = validate("hel_lo")

        assert result.error is not None
        assert "'_'" in result.error.reason
        assert "position 3" in result.error.reason

    def test_error_is_a_value_error(self) -> None:
        """InvalidSchemeError can be caught as ValueError."""
        with pytest.raises(ValueError, match=f"^{SCHEME_ERROR_PREFIX}"):
            validate("4hello").unwrap()

    def test_error_survives_pickling(self) -> None:
        """Errors keep their attributes across pickling."""
        error = validate("hel_lo").error
        assert error is not None

        restored = pickle.loads(pickle.dumps(error))

        assert restored.candidate == error.candidate
        assert restored.code == error.code
        assert str(restored) == str(error)


# =============================================================================
# Result Behaviour
# =============================================================================


class TestSchemeValidation:
    """Tests for the SchemeValidation result type."""

    def test_validation_is_idempotent(self) -> None:
        """Validating the same string twice gives equal outcomes."""
        assert validate("hello") == validate("hello")
        assert validate("hello").unwrap() == validate("hello").unwrap()

        first = validate("4hello")
        second = validate("4hello")
        assert first.is_valid == second.is_valid
        assert str(first.error) == str(second.error)

    def test_candidate_is_left_unchanged(self) -> None:
        """The rejected candidate is returned as given."""
        candidate = "  hel_lo  "
        result = validate(candidate)

        assert result.candidate is candidate
        assert candidate == "  hel_lo  "

    def test_unwrap_raises_carried_error(self) -> None:
        """unwrap() re-raises the rejection error."""
        result = validate("")

        with pytest.raises(InvalidSchemeError) as exc_info:
            result.unwrap()

        assert exc_info.value is result.error

    def test_requires_exactly_one_outcome(self) -> None:
        """A result cannot hold both or neither outcome."""
        with pytest.raises(ValueError, match="exactly one"):
            SchemeValidation(candidate="hello")

        with pytest.raises(ValueError, match="exactly one"):
            SchemeValidation(
                candidate="hello",
                scheme=ReferenceScheme("hello"),
                error=validate("").error,
            )

    def test_non_string_input_is_a_type_error(self) -> None:
        """Passing something other than a string is a caller error."""
        with pytest.raises(TypeError, match="must be a str"):
            validate(None)  # type: ignore[arg-type]

        with pytest.raises(TypeError, match="must be a str"):
            validate(b"hello")  # type: ignore[arg-type]

    def test_concurrent_validation(self) -> None:
        """validate() can be called from many threads at once."""
        results: dict[int, bool] = {}

        def worker(index: int) -> None:
            candidate = f"scheme-{index}" if index % 2 else f"{index}-scheme"
            results[index] = validate(candidate).is_valid

        threads = [threading.Thread(target=worker, args=(i,)) for i in range(50)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == {i: bool(i % 2) for i in range(50)}

    def test_logs_rejection_at_debug(self, caplog: pytest.LogCaptureFixture) -> None:
        """Rejections are logged at DEBUG level."""
        with caplog.at_level("DEBUG", logger="refscheme.scheme"):
            validate("hel_lo")

        assert any(
            record.levelname == "DEBUG" and SCHEME_ERROR_PREFIX in record.getMessage()
            for record in caplog.records
        )


# =============================================================================
# ReferenceScheme
# =============================================================================


class TestReferenceScheme:
    """Tests for the ReferenceScheme value type."""

    def test_constructor_validates(self) -> None:
        """An invalid value cannot be wrapped."""
        with pytest.raises(InvalidSchemeError, match=f"^{SCHEME_ERROR_PREFIX}"):
            ReferenceScheme("hel_lo")

    def test_parse_returns_scheme(self) -> None:
        """parse() is the raising factory."""
        assert ReferenceScheme.parse("tx") == TX

        with pytest.raises(InvalidSchemeError) as exc_info:
            ReferenceScheme.parse("-hello")

        assert exc_info.value.code == SchemeErrorCode.INVALID_LEADING_CHARACTER

    def test_is_immutable(self) -> None:
        """The value cannot be reassigned."""
        scheme = ReferenceScheme("file")

        with pytest.raises(AttributeError):
            scheme.value = "bad scheme"  # type: ignore[misc]

        assert scheme.value == "file"

    def test_equality_and_hash_use_exact_value(self) -> None:
        """Schemes are equal when their values are identical."""
        assert ReferenceScheme("file") == ReferenceScheme("file")
        assert hash(ReferenceScheme("file")) == hash(ReferenceScheme("file"))
        assert ReferenceScheme("file") != ReferenceScheme("https")
        assert ReferenceScheme("File") != ReferenceScheme("file")

    def test_ordering_is_ordinal(self) -> None:
        """Schemes sort by their values."""
        schemes = [ReferenceScheme(v) for v in ["https", "File", "file", "tx"]]
        assert [s.value for s in sorted(schemes)] == ["File", "file", "https", "tx"]

    def test_str_returns_value(self) -> None:
        """str() gives the bare scheme."""
        assert str(ReferenceScheme("hello-2")) == "hello-2"

    def test_well_known_schemes(self) -> None:
        """Common schemes are available as constants."""
        assert FILE.value == "file"
        assert HTTPS.value == "https"
        assert TX.value == "tx"


class TestSchemePrefix:
    """Tests for building and stripping the scheme prefix of a reference."""

    @pytest.mark.parametrize("value", ["hello", "h", "h0t", "hello-world"])
    def test_prefix_helpers(self, value: str) -> None:
        """prefix, matches, with_prefix and strip_prefix agree with each other."""
        scheme = ReferenceScheme(value)

        assert scheme.prefix == f"{value}://"
        assert scheme.matches(f"{value}://hello:world")
        assert scheme.matches(f"{value}://")
        assert not scheme.matches(value)
        assert not scheme.matches(f"{value}hello://world")
        assert scheme.with_prefix("hello/world") == f"{value}://hello/world"
        assert scheme.strip_prefix(f"{value}://hello/world") == "hello/world"

    def test_matching_is_case_sensitive(self) -> None:
        """Case folding is left to whoever resolves the reference."""
        assert not FILE.matches("FILE://readme.txt")

    def test_strip_prefix_rejects_other_schemes(self) -> None:
        """Stripping a prefix that is not there is an error."""
        with pytest.raises(ValueError, match="does not use scheme 'file'"):
            FILE.strip_prefix("https://example.com")
