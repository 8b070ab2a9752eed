"""Tests for display-text parsing and number stringification."""
from __future__ import annotations

import math

import pytest

from numtext import number_to_text, parse_number


class TestParseNumber:

    @pytest.mark.parametrize("text, expected", [
        ("0", 0.0),
        ("42", 42.0),
        ("-42", -42.0),
        ("12.", 12.0),
        ("0.5", 0.5),
        (".5", 0.5),
        ("-0.", -0.0),
        ("1e+21", 1e21),
        ("1.5e-7", 1.5e-7),
        ("5abc", 5.0),
        ("  7 ", 7.0),
    ])
    def test_parses_numeric_prefix(self, text, expected):
        assert parse_number(text) == expected

    @pytest.mark.parametrize("text", ["Error", "", "-", ".", "NaN", "abc"])
    def test_unparseable_is_none(self, text):
        assert parse_number(text) is None

    def test_infinity(self):
        assert parse_number("Infinity") == math.inf
        assert parse_number("-Infinity") == -math.inf


class TestNumberToText:

    @pytest.mark.parametrize("value, expected", [
        (0.0, "0"),
        (-0.0, "0"),
        (579.0, "579"),
        (-3.0, "-3"),
        (3.5, "3.5"),
        (0.1, "0.1"),
        (5790.0, "5790"),
        (0.30000000000000004, "0.30000000000000004"),
        (1e20, "100000000000000000000"),
        (1e21, "1e+21"),
        (1.5e22, "1.5e+22"),
        (0.000001, "0.000001"),
        (1e-7, "1e-7"),
        (-2.5e-8, "-2.5e-8"),
    ])
    def test_browser_layout(self, value, expected):
        assert number_to_text(value) == expected

    def test_non_finite(self):
        assert number_to_text(math.inf) == "Infinity"
        assert number_to_text(-math.inf) == "-Infinity"
        assert number_to_text(math.nan) == "NaN"

    @pytest.mark.parametrize("value", [1.0, 0.25, 123.456, 1e-10, 9.87e30])
    def test_parse_recovers_value(self, value):
        assert parse_number(number_to_text(value)) == value
