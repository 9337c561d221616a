"""Rules for runtime values.

Lox values are represented directly by Python objects:

    nil       None
    boolean   bool
    number    float
    string    str
    callable  LoxCallable (functions, natives, classes)
    instance  LoxInstance
    array     LoxArray

Because `bool` is a subclass of `int` and both compare equal to floats in
Python, every rule here checks kinds explicitly instead of relying on
Python's own equality and ordering.
"""

__all__ = [
    "is_truthy",
    "is_equal",
    "is_number",
    "stringify",
    "to_number",
]

import math
import re


_NUMERIC_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")


def is_truthy(value):
    """Only nil and false are falsy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_number(value):
    """True for Lox numbers, which excludes booleans."""
    return isinstance(value, float) and not isinstance(value, bool)


def is_equal(left, right):
    """Equality without coercion.

    Nil equals only nil. Other values are equal when they share a kind and a
    value. Functions, classes, instances and arrays are equal only to
    themselves.
    """
    if left is None or right is None:
        return left is right
    if type(left) is not type(right):
        return False
    if isinstance(left, (bool, float, str)):
        return left == right
    return left is right


def to_number(value):
    """Best effort numeric coercion used by cross kind comparisons.

    Args:
        value: (object) Runtime value

    Returns:
        (float | None) The coerced number, or None when not coercible
    """
    if isinstance(value, bool):
        return 1.0 if value else 0.0
    if isinstance(value, float):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _NUMERIC_RE.match(text):
            return float(text)
    return None


def stringify(value):
    """Canonical text of a runtime value.

    This is what `print` shows and what `+` uses when concatenating.
    """
    match value:
        case None:
            return "nil"
        case True:
            return "true"
        case False:
            return "false"
        case float():
            return _format_number(value)
        case str():
            return value
    return str(value)


def _format_number(number):
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer():
        return str(int(number))
    return repr(number)
