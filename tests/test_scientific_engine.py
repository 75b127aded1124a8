import math

import pytest

from KeypadCalc import ScientificEngine
from KeypadCalc import error as E


@pytest.mark.parametrize("operator, a, b, expected", [
    ("+", 2.0, 3.0, 5.0),
    ("-", 2.0, 3.0, -1.0),
    ("*", 2.5, 4.0, 10.0),
    ("/", 7.0, 2.0, 3.5),
])
def test_apply_operator(operator, a, b, expected):
    assert ScientificEngine.apply_operator(operator, a, b) == expected


def test_division_by_zero():
    with pytest.raises(E.NonFiniteResult) as excinfo:
        ScientificEngine.apply_operator("/", 5.0, 0.0)
    assert excinfo.value.code == "3003"


def test_overflow_is_non_finite():
    with pytest.raises(E.NonFiniteResult) as excinfo:
        ScientificEngine.apply_operator("*", 1e200, 1e200)
    assert excinfo.value.code == "3026"


def test_unknown_operator():
    with pytest.raises(E.CalculationError) as excinfo:
        ScientificEngine.apply_operator("^", 2.0, 3.0)
    assert excinfo.value.code == "3004"
    assert not isinstance(excinfo.value, E.NonFiniteResult)


def test_check_finite():
    assert ScientificEngine.check_finite(1.5) == 1.5
    with pytest.raises(E.NonFiniteResult) as excinfo:
        ScientificEngine.check_finite(math.nan)
    assert excinfo.value.code == "3028"
    with pytest.raises(E.NonFiniteResult):
        ScientificEngine.check_finite(-math.inf)


def test_percent():
    assert ScientificEngine.percent(10.0) == 0.1
    assert ScientificEngine.percent(10.0, base=200.0) == 20.0


def test_reciprocal():
    assert ScientificEngine.reciprocal(4.0) == 0.25
    with pytest.raises(E.NonFiniteResult):
        ScientificEngine.reciprocal(0.0)


def test_square():
    assert ScientificEngine.square(-3.0) == 9.0
    with pytest.raises(E.NonFiniteResult):
        ScientificEngine.square(1e200)


def test_square_root():
    assert ScientificEngine.square_root(2.25) == 1.5
    with pytest.raises(E.NonFiniteResult) as excinfo:
        ScientificEngine.square_root(-1.0)
    assert excinfo.value.code == "3027"


def test_errors_are_math_errors():
    # The engine catches MathError, so every kernel failure must be one
    assert issubclass(E.NonFiniteResult, E.CalculationError)
    assert issubclass(E.CalculationError, E.MathError)
    assert issubclass(E.ConfigurationError, E.MathError)


def test_describe():
    error = E.NonFiniteResult("Division by zero", code="3003")
    assert E.describe(error) == "Error 3003: Division by Zero"
    assert E.describe(E.MathError("odd", code="1234")) == "Error 1234: Unknown error"
