"""Test ArbitraryPrecisionCalculatorEngine and MPMathProvider."""

import pytest
from mpmath import mp

from arbitrary_precision_engine import ArbitraryPrecisionCalculatorEngine, MPMathProvider
from calculator_errors import CalculatorError, ErrorKind


@pytest.fixture
def engine():
    return ArbitraryPrecisionCalculatorEngine(initial_digits=20, precision_step=10)


@pytest.mark.parametrize("expr,expected", [
    ("(2+3)*4-sqrt(16)/2", "18"),
    ("2^3^2", "512"),
    ("10-5-2", "3"),
    ("(-2)^3", "-8"),
    ("0.1+0.2", "0.3"),
    ("factorial(15)", "1307674368000"),
])
def test_evaluate(engine, expr, expected):
    assert engine.evaluate(expr) == expected


def test_uses_initial_digits(engine):
    assert engine.evaluate("1/3") == "0." + "3" * 20
    assert engine.working_digits == 20


def test_request_more_precision(engine):
    assert not engine.can_expand_precision()
    engine.evaluate("2/3")
    assert engine.can_expand_precision()
    text = engine.request_more_precision()
    assert engine.working_digits == 30
    assert text == "0." + "6" * 29 + "7"


def test_request_more_precision_without_previous(engine):
    with pytest.raises(CalculatorError) as info:
        engine.request_more_precision()
    assert info.value.kind is ErrorKind.INVALID_EXPRESSION


def test_evaluate_resets_digits(engine):
    engine.evaluate("1/7")
    engine.request_more_precision()
    engine.evaluate("1/3")
    assert engine.working_digits == 20


def test_degrees(engine):
    assert engine.evaluate("sin(30)", "deg") == "0.5"
    assert engine.evaluate("sin(0)", "rad") == "0"


def test_large_values_use_scientific_notation(engine):
    assert "e" in engine.evaluate("2^100+0.5")


@pytest.mark.parametrize("expr,kind", [
    ("1/0", ErrorKind.DIVISION_BY_ZERO),
    ("ln(-1)", ErrorKind.INVALID_DOMAIN),
    ("sqrt(-2)", ErrorKind.INVALID_DOMAIN),
    ("factorial(-1)", ErrorKind.INVALID_FACTORIAL_INPUT),
    ("(1+2", ErrorKind.MISMATCHED_PARENTHESES),
])
def test_errors_match_float_engine(engine, expr, kind):
    with pytest.raises(CalculatorError) as info:
        engine.evaluate(expr)
    assert info.value.kind is kind


def test_negative_base_fractional_exponent(engine):
    assert engine.evaluate("(-8)^0.5") == "Error"


def test_provider_power_of_zero():
    assert MPMathProvider.power(mp.mpf(0), mp.mpf(-1)) == mp.inf


def test_provider_factorial_of_large_integer():
    value = MPMathProvider.factorial(mp.mpf(6000))
    assert mp.isfinite(value)
    assert value > mp.mpf("1e20000")
