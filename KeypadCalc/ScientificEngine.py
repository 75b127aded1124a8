# ScientificEngine
"""""
Arithmetic kernels used by the calculator engine.

Every function takes and returns plain floats. A result that is not
finite (overflow, division by zero, square root of a negative number)
never leaves this module: it is raised as E.NonFiniteResult with its
error code, so MathEngine can switch the calculator into the error state.
"""""
import math

from . import error as E


def check_finite(value, equation=None):
    """Return value unchanged, or raise NonFiniteResult for inf / NaN."""
    if math.isnan(value):
        raise E.NonFiniteResult("Result is not a number.", code="3028", equation=equation)
    if math.isinf(value):
        raise E.NonFiniteResult("Number too big.", code="3026", equation=equation)
    return value


def add(a, b):
    return a + b


def subtract(a, b):
    return a - b


def multiply(a, b):
    return a * b


def divide(a, b):
    if b == 0:
        raise E.NonFiniteResult("Division by zero", code="3003", equation=f"{a} / {b}")
    return a / b


BINARY_OPERATIONS = {
    "+": add,
    "-": subtract,
    "*": multiply,
    "/": divide,
}


def apply_operator(operator, a, b):
    """Apply one of + - * / to two floats and check the result."""
    try:
        operation = BINARY_OPERATIONS[operator]
    except KeyError:
        raise E.CalculationError(f"Unknown operator: {operator}", code="3004")

    try:
        result = operation(a, b)
    except OverflowError:
        raise E.NonFiniteResult("Number too big.", code="3026", equation=f"{a} {operator} {b}")
    return check_finite(result, equation=f"{a} {operator} {b}")


def percent(value, base=None):
    # With a pending operation the percentage is taken of the left operand
    if base is None:
        return check_finite(value / 100)
    return check_finite(base * value / 100, equation=f"{base} * {value} / 100")


def reciprocal(value):
    if value == 0:
        raise E.NonFiniteResult("Division by zero", code="3003", equation=f"1 / {value}")
    return check_finite(1 / value, equation=f"1 / {value}")


def square(value):
    return check_finite(value * value, equation=f"{value}^2")


def square_root(value):
    if value < 0:
        raise E.NonFiniteResult("Square root of a negative number", code="3027", equation=f"√({value})")
    return check_finite(math.sqrt(value), equation=f"√({value})")

