"""Tests for space-separated numeric array parsing."""

import numpy as np
import pytest

from clflut import ArrayParseError, XmlSyntaxError, parse_space_separated


class TestParseSpaceSeparated:
    """Test parse_space_separated()."""

    def test_unsigned_integers(self):
        """Test that tokens are parsed in source order."""
        result = parse_space_separated("1 2 3", np.uint32)

        assert result.dtype == np.uint32
        np.testing.assert_array_equal(result, [1, 2, 3])

    def test_empty_string(self):
        """Test that empty input yields an empty array."""
        assert len(parse_space_separated("", np.uint32)) == 0
        assert len(parse_space_separated(None, np.float32)) == 0

    def test_whitespace_only(self):
        """Test that whitespace-only input yields an empty array."""
        assert len(parse_space_separated(" \n\t  ", np.float32)) == 0

    def test_mixed_whitespace_runs(self):
        """Test splitting on runs of spaces, tabs and newlines."""
        result = parse_space_separated("\n  0.0 0.5\t\t1.0\n  1.5  \n", np.float32)
        np.testing.assert_allclose(result, [0.0, 0.5, 1.0, 1.5])

    def test_float_forms(self):
        """Test exponent and special float literals."""
        result = parse_space_separated("1e-3 -2.5E2 inf nan", np.float32)

        assert result[0] == pytest.approx(1e-3)
        assert result[1] == -250.0
        assert np.isposinf(result[2])
        assert np.isnan(result[3])

    def test_invalid_token_named(self):
        """Test that the offending token is reported."""
        with pytest.raises(ArrayParseError) as exc_info:
            parse_space_separated("1 a 3", np.uint32)

        assert exc_info.value.token == "a"
        assert "'a'" in str(exc_info.value)
        assert exc_info.value.reason

    def test_first_bad_token_wins(self):
        """Test that parsing stops at the first bad token."""
        with pytest.raises(ArrayParseError) as exc_info:
            parse_space_separated("1 x y", np.uint32)
        assert exc_info.value.token == "x"

    def test_unsigned_rejects_negative(self):
        """Test that negative values fail for unsigned dtypes."""
        with pytest.raises(ArrayParseError) as exc_info:
            parse_space_separated("4 -1", np.uint32)
        assert exc_info.value.token == "-1"

    @pytest.mark.parametrize("token", ["-0", "-00"])
    def test_unsigned_rejects_minus_zero(self, token):
        """Test that any minus sign fails for unsigned dtypes."""
        with pytest.raises(ArrayParseError) as exc_info:
            parse_space_separated(f"1 {token}", np.uint32)
        assert exc_info.value.token == token

    def test_unsigned_accepts_plus_sign(self):
        np.testing.assert_array_equal(parse_space_separated("+7", np.uint32), [7])

    def test_signed_accepts_minus(self):
        np.testing.assert_array_equal(parse_space_separated("-3 -0", np.int32), [-3, 0])

    def test_integer_overflow(self):
        """Test that values beyond the dtype range fail."""
        with pytest.raises(ArrayParseError):
            parse_space_separated("4294967296", np.uint32)

    def test_integer_rejects_decimal(self):
        """Test that a decimal token is not an integer."""
        with pytest.raises(ArrayParseError):
            parse_space_separated("1.5", np.uint32)

    def test_float_rejects_garbage(self):
        """Test invalid float tokens."""
        with pytest.raises(ArrayParseError) as exc_info:
            parse_space_separated("0.1 0.2x", np.float32)
        assert exc_info.value.token == "0.2x"

    @pytest.mark.parametrize("token", ["\u0661\u0662", "\uff11.5", "1e\u0663"])
    def test_float_rejects_non_ascii_digits(self, token):
        """Test that only ASCII digits are accepted in float tokens."""
        with pytest.raises(ArrayParseError) as exc_info:
            parse_space_separated(token, np.float32)
        assert exc_info.value.token == token

    def test_float_leading_and_trailing_point(self):
        np.testing.assert_allclose(parse_space_separated(".5 2. +1", np.float32), [0.5, 2.0, 1.0])

    def test_float_special_value_spellings(self):
        result = parse_space_separated("Infinity -INF NaN", np.float32)
        assert np.isposinf(result[0])
        assert np.isneginf(result[1])
        assert np.isnan(result[2])

    @pytest.mark.parametrize("token", ["1e", "e5", ".", "1.2.3", "0x10", "infinit"])
    def test_float_rejects_malformed(self, token):
        with pytest.raises(ArrayParseError):
            parse_space_separated(token, np.float32)

    def test_digit_separators_rejected(self):
        """Test that Python-only underscore separators are rejected."""
        with pytest.raises(ArrayParseError):
            parse_space_separated("1_000", np.float32)
        with pytest.raises(ArrayParseError):
            parse_space_separated("1_000", np.uint32)

    def test_float32_overflow_saturates(self):
        """Test that out-of-range floats become infinity."""
        result = parse_space_separated("1e300 -1e300", np.float32)
        assert np.isposinf(result[0])
        assert np.isneginf(result[1])

    def test_unsupported_dtype(self):
        """Test that non-numeric dtypes are refused."""
        with pytest.raises(TypeError):
            parse_space_separated("1 2", np.bool_)

    def test_parse_error_is_syntax_error(self):
        """Test that array errors belong to the parse stage."""
        assert issubclass(ArrayParseError, XmlSyntaxError)
