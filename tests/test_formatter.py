import math

import pytest

from KeypadCalc.MathEngine import format_number, to_display, to_number
from KeypadCalc import error as E


@pytest.mark.parametrize("value, expected", [
    (0.0, "0"),
    (-0.0, "0"),
    (12.0, "12"),
    (100.0, "100"),
    (-2.5, "-2.5"),
    (123.456, "123.456"),
    (0.1 + 0.2, "0.3"),
    (1 / 3, "0.333333333333"),
    (2 / 3, "0.666666666667"),
    (1e-8, "0.00000001"),
    (999999999999.0, "999999999999"),
])
def test_fixed_notation(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize("value, expected", [
    (1e12, "1.000000e12"),
    (-1.5e15, "-1.500000e15"),
    (1234567890123.0, "1.234568e12"),
    (1e-9, "1.000000e-9"),
    (999999999999.6, "1.000000e12"),
    (-999999999999.7, "-1.000000e12"),
    (2.5e-12, "2.500000e-12"),
])
def test_scientific_notation(value, expected):
    assert format_number(value) == expected


@pytest.mark.parametrize("value", [math.inf, -math.inf, math.nan])
def test_non_finite_is_error_token(value):
    assert format_number(value) == "Erro"
    assert format_number(value, E.error_token(english=True)) == "Error"


@pytest.mark.parametrize("value", [0.5, 10.25, 1e-8, 3.14159, 1 / 7, 123456.7, -42.1, 99999999999.5])
def test_fixed_notation_has_no_trailing_zeros(value):
    formatted = format_number(value)
    assert not formatted.endswith(".")
    if "." in formatted:
        assert not formatted.endswith("0")


def test_formatter_uses_dot_and_display_uses_comma():
    assert format_number(2.5) == "2.5"
    assert to_display(2.5) == "2,5"
    assert to_display(1e-9) == "1,000000e-9"


def test_to_number_reads_decimal_comma():
    assert to_number("-12,5") == -12.5
    assert to_number("0,") == 0.0
    assert to_number("7") == 7.0
