"""Test class NumberFormatter."""

import math
import sys

import pytest

from number_formatter import NumberFormatter


def test_floating_point_artifacts_are_hidden():
    """0.1 + 0.2 shows as 0.3."""
    assert NumberFormatter.format(0.1 + 0.2) == "0.3"
    assert NumberFormatter.format(1.1 * 3) == "3.3"


@pytest.mark.parametrize("value,expected", [
    (math.nan, "Error"),
    (math.inf, "Infinity"),
    (-math.inf, "-Infinity"),
    (0.0, "0"),
    (-0.0, "0"),
])
def test_special_values(value, expected):
    assert NumberFormatter.format(value) == expected


@pytest.mark.parametrize("value,expected", [
    (18.0, "18"),
    (-8.0, "-8"),
    (2.5, "2.5"),
    (1 / 3, "0.333333333"),
    (2 / 3, "0.666666666"),
    (123456.789, "123456.789"),
    (9999999999.0, "9999999999"),
    (0.00001, "0.00001"),
    (0.0000015, "0.0000015"),
])
def test_plain_notation(value, expected):
    assert NumberFormatter.format(value) == expected


@pytest.mark.parametrize("value,expected", [
    (12345678901, "1.23456789e+10"),
    (1e10, "1e+10"),
    (-2.5e15, "-2.5e+15"),
    (1e-8, "1e-8"),
    (1.5e-7, "1.5e-7"),
    (1.23456789e-7, "1.23456789e-7"),
    (-9.87654321e-7, "-9.87654321e-7"),
    (1.2345e-12, "1.2345e-12"),
    (sys.float_info.max, "1.797693135e+308"),
])
def test_scientific_notation(value, expected):
    text = NumberFormatter.format(value)
    assert "e" in text
    assert text == expected


def test_decimal_places_fit_significant_digits():
    """Integer digits plus decimal digits never exceed the budget."""
    text = NumberFormatter.format(12345.6789012)
    integer_part, decimal_part = text.split(".")
    assert len(integer_part) + len(decimal_part) <= NumberFormatter.MAX_SIGNIFICANT_DIGITS
    assert text == "12345.6789"


def test_round_to_precision():
    assert NumberFormatter.round_to_precision(0.1 + 0.2, 10) == 0.3
    assert NumberFormatter.round_to_precision(0, 10) == 0
    assert NumberFormatter.round_to_precision(123456789012, 3) == 123000000000


@pytest.mark.parametrize("text,expected", [
    ("", True),
    ("-", True),
    (".", True),
    ("-.", True),
    ("12", True),
    ("12.", True),
    ("-0.5", True),
    (".25", True),
    ("1.2.3", False),
    ("--1", False),
    ("1e5", False),
    ("abc", False),
    ("٣", False),
    ("1٣", False),
    ("-٠.٥", False),
])
def test_is_valid_input(text, expected):
    assert NumberFormatter.is_valid_input(text) is expected


@pytest.mark.parametrize("text,expected", [
    ("12.", "12."),
    ("-", "-"),
    ("1e12", "1e+12"),
    ("0.30000000000000004e0", "0.3"),
    ("abc", "0"),
    ("nan", "0"),
])
def test_format_input(text, expected):
    assert NumberFormatter.format_input(text) == expected


@pytest.mark.parametrize("value,expected", [
    (0, 1),
    (100, 1),
    (123.45, 5),
    (-0.5, 1),
    (1 / 3, 16),
])
def test_significant_digits(value, expected):
    assert NumberFormatter.significant_digits(value) == expected
