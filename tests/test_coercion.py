"""Tests for value coercion."""

import math

import pytest

from textrecords.coercion import coerce_value, format_value
from textrecords.errors import CoercionError
from textrecords.types import ScalarType


class TestCoerceValue:
    def test_string_is_identity(self):
        assert coerce_value("Albert Einstein", ScalarType.STRING) == "Albert Einstein"
        assert coerce_value("", ScalarType.STRING) == ""

    @pytest.mark.parametrize("text,expected", [("100", 100), ("-7", -7), ("+3", 3), ("007", 7)])
    def test_integer(self, text, expected):
        assert coerce_value(text, ScalarType.INTEGER) == expected

    @pytest.mark.parametrize("text", ["", "1.5", "abc", " 1", "1 ", "1_000", "0x10"])
    def test_integer_rejects(self, text):
        with pytest.raises(CoercionError) as exc_info:
            coerce_value(text, ScalarType.INTEGER)
        assert exc_info.value.text == text
        assert exc_info.value.scalar is ScalarType.INTEGER

    @pytest.mark.parametrize(
        "text,expected",
        [("1.5", 1.5), ("-2", -2.0), (".5", 0.5), ("3.", 3.0), ("1e3", 1000.0), ("2.5E-1", 0.25)],
    )
    def test_float(self, text, expected):
        assert coerce_value(text, ScalarType.FLOAT) == expected

    def test_float_special_values(self):
        assert coerce_value("inf", ScalarType.FLOAT) == math.inf
        assert coerce_value("-Infinity", ScalarType.FLOAT) == -math.inf
        assert math.isnan(coerce_value("nan", ScalarType.FLOAT))

    @pytest.mark.parametrize("text", ["", "1,5", "one", "1.2.3", "e5"])
    def test_float_rejects(self, text):
        with pytest.raises(CoercionError):
            coerce_value(text, ScalarType.FLOAT)

    def test_boolean(self):
        assert coerce_value("true", ScalarType.BOOLEAN) is True
        assert coerce_value("False", ScalarType.BOOLEAN) is False

    @pytest.mark.parametrize("text", ["yes", "1", "", "t"])
    def test_boolean_rejects(self, text):
        with pytest.raises(CoercionError):
            coerce_value(text, ScalarType.BOOLEAN)

    def test_error_message_names_text_and_type(self):
        with pytest.raises(CoercionError, match="'abc'.*integer"):
            coerce_value("abc", ScalarType.INTEGER)

    def test_coercion_error_is_value_error(self):
        with pytest.raises(ValueError):
            coerce_value("abc", ScalarType.INTEGER)


class TestFormatValue:
    def test_canonical_text(self):
        assert format_value("x y", ScalarType.STRING) == "x y"
        assert format_value(-42, ScalarType.INTEGER) == "-42"
        assert format_value(0.1, ScalarType.FLOAT) == "0.1"
        assert format_value(True, ScalarType.BOOLEAN) == "true"
        assert format_value(False, ScalarType.BOOLEAN) == "false"

    def test_float_text_has_no_exponent(self):
        assert format_value(1e20, ScalarType.FLOAT) == "100000000000000000000"
        assert format_value(1e-7, ScalarType.FLOAT) == "0.0000001"
        assert format_value(-2.5e-3, ScalarType.FLOAT) == "-0.0025"
        assert format_value(1.0, ScalarType.FLOAT) == "1.0"
        assert format_value(3, ScalarType.FLOAT) == "3.0"
        assert format_value(-math.inf, ScalarType.FLOAT) == "-inf"

    @pytest.mark.parametrize(
        "value", [0.1, 1e-300, 1e20, 1.7976931348623157e308, 123456789.125, -0.0, math.inf]
    )
    def test_float_text_reads_back(self, value):
        text = format_value(value, ScalarType.FLOAT)
        assert coerce_value(text, ScalarType.FLOAT) == value
