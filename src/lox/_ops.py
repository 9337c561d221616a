"""Perform builtin operators on runtime values.

Arithmetic is strict and raises a LoxRuntimeError for operands of the wrong
kind. Ordering is soft: operands of different kinds are compared through
numeric coercion, and anything that cannot be coerced compares false.

There is a function here for each kind of operator node.
"""

__all__ = [
    "math_binary",
    "math_unary",
    "add",
    "compare",
    "equality",
]

import math
import operator

import lox


_MATH = {
    "-": operator.sub,
    "*": operator.mul,
}

_COMPARE = {
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}


def math_binary(op, left, right):
    """Arithmetic binary operation on two numbers.

    Division follows IEEE-754, so dividing by zero gives an infinity or NaN.

    Args:
        op: (Token) Operator token, one of `-` `*` `/`
        left: (object) Left value
        right: (object) Right value

    Returns:
        (float) Result of operation

    Raises:
        LoxRuntimeError: If either operand is not a number
    """
    if not lox.is_number(left) or not lox.is_number(right):
        raise lox.LoxRuntimeError(op, "Operands must be numbers.")

    if op.lexeme == "/":
        return _divide(left, right)
    return _MATH[op.lexeme](left, right)


def _divide(left, right):
    if right == 0.0:
        if left == 0.0 or math.isnan(left):
            return math.nan
        # Sign of zero matters, 1 / -0 is -Infinity
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


def math_unary(op, right):
    """Numeric negation.

    Raises:
        LoxRuntimeError: If the operand is not a number
    """
    if not lox.is_number(right):
        raise lox.LoxRuntimeError(op, "Operand must be a number.")
    return -right


def add(op, left, right):
    """The `+` operator.

    Two numbers are added. When either operand is a string the other is
    converted with `stringify` and the two are concatenated.

    Raises:
        LoxRuntimeError: For any other combination of operands
    """
    if lox.is_number(left) and lox.is_number(right):
        return left + right
    if isinstance(left, str) or isinstance(right, str):
        return lox.stringify(left) + lox.stringify(right)
    raise lox.LoxRuntimeError(op, "Operands must be two numbers or two strings.")


def compare(op, left, right):
    """Ordering comparison.

    Numbers, strings and booleans compare natively against their own kind,
    nil against nil compares as equal. Mixed kinds are coerced to numbers,
    booleans to 0 and 1 and numeric looking strings by parsing them. When a
    side cannot be coerced the comparison is simply false.

    Args:
        op: (Token) Operator token, one of `<` `<=` `>` `>=`
        left: (object) Left value
        right: (object) Right value

    Returns:
        (bool) Result of comparison
    """
    func = _COMPARE[op.lexeme]

    if left is None and right is None:
        return func(0, 0)
    if type(left) is type(right) and isinstance(left, (bool, float, str)):
        return func(left, right)

    lnum = lox.to_number(left)
    rnum = lox.to_number(right)
    if lnum is None or rnum is None:
        return False
    return func(lnum, rnum)


def equality(op, left, right):
    """The `==` and `!=` operators."""
    equal = lox.is_equal(left, right)
    if op.lexeme == "!=":
        return not equal
    return equal
