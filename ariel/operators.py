"""Operator semantics for Ariel values.

Prefix operators take one evaluated operand, infix operators two operands
of the same type. Integers are signed 64-bit: results wrap on overflow,
division truncates toward zero and the remainder takes the sign of the
dividend.
"""

from __future__ import annotations

from typing import Dict, Optional

from .errors import (
    new_error, DIVIDE_BY_ZERO, ILLEGAL_OPERATION, ILLEGAL_OPERATOR, TYPE_MISMATCH,
)
from .types import (
    Value, BoolVal, CharVal, FloatVal, IntVal, StringVal, type_name,
)


INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1
_INT64_MASK = (1 << 64) - 1

COMPOUND_OPS: Dict[str, str] = {
    '+=': '+',
    '-=': '-',
    '*=': '*',
    '/=': '/',
    '%=': '%',
    '&=': '&',
    '^=': '^',
    '|=': '|',
    '<<=': '<<',
    '>>=': '>>',
}


def wrap_int64(n: int) -> int:
    return ((n - INT64_MIN) & _INT64_MASK) + INT64_MIN


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


def _trunc_mod(a: int, b: int) -> int:
    r = abs(a) % abs(b)
    return -r if a < 0 else r


def _compare(op: str, a, b) -> Optional[BoolVal]:
    if op == '<':
        return BoolVal(a < b)
    if op == '<=':
        return BoolVal(a <= b)
    if op == '==':
        return BoolVal(a == b)
    if op == '!=':
        return BoolVal(a != b)
    if op == '>=':
        return BoolVal(a >= b)
    if op == '>':
        return BoolVal(a > b)
    return None


def _illegal_operator(op: str, left: Value, right: Value) -> Value:
    return new_error(ILLEGAL_OPERATOR,
                     f"illegal operator: {type_name(left)} {op} {type_name(right)}")


def apply_prefix(op: str, operand: Value) -> Value:
    """Apply prefix operator `op` to an already evaluated operand."""
    if op == '!':
        if isinstance(operand, BoolVal):
            return BoolVal(not operand.value)
    elif op == '-':
        if isinstance(operand, IntVal):
            return IntVal(wrap_int64(-operand.value))
        if isinstance(operand, FloatVal):
            return FloatVal(-operand.value)
    elif op == '+':
        if isinstance(operand, IntVal):
            return IntVal(wrap_int64(abs(operand.value)))
        if isinstance(operand, FloatVal):
            return FloatVal(abs(operand.value))
    elif op == '~':
        if isinstance(operand, IntVal):
            return IntVal(~operand.value)
    else:
        return new_error(ILLEGAL_OPERATION, f"unknown prefix operator: {op}")
    return new_error(ILLEGAL_OPERATION, f"illegal operation: {op}{type_name(operand)}")


def apply_infix(op: str, left: Optional[Value], right: Optional[Value]) -> Value:
    """Apply infix operator `op` to two evaluated operands of one type."""
    if type_name(left) != type_name(right):
        return new_error(TYPE_MISMATCH,
                         f"mismatched types: {type_name(left)} {op} {type_name(right)}")
    if isinstance(left, CharVal):
        return infix_char(op, left, right)
    if isinstance(left, IntVal):
        return infix_int(op, left, right)
    if isinstance(left, FloatVal):
        return infix_float(op, left, right)
    if isinstance(left, StringVal):
        return infix_string(op, left, right)
    if isinstance(left, BoolVal):
        return infix_bool(op, left, right)
    return new_error(ILLEGAL_OPERATOR,
                     f"invalid expression types: {type_name(left)} {op} {type_name(right)}")


def infix_char(op: str, left: CharVal, right: CharVal) -> Value:
    result = _compare(op, left.value, right.value)
    if result is not None:
        return result
    if op == '+':
        return StringVal(left.value + right.value)
    return _illegal_operator(op, left, right)


def infix_int(op: str, left: IntVal, right: IntVal) -> Value:
    a, b = left.value, right.value
    result = _compare(op, a, b)
    if result is not None:
        return result
    if op == '+':
        return IntVal(wrap_int64(a + b))
    if op == '-':
        return IntVal(wrap_int64(a - b))
    if op == '*':
        return IntVal(wrap_int64(a * b))
    if op in ('/', '%'):
        if b == 0:
            return new_error(DIVIDE_BY_ZERO, "divide by zero error")
        if op == '/':
            return IntVal(wrap_int64(_trunc_div(a, b)))
        return IntVal(_trunc_mod(a, b))
    if op == '&':
        return IntVal(a & b)
    if op == '^':
        return IntVal(a ^ b)
    if op == '|':
        return IntVal(a | b)
    if op in ('<<', '>>'):
        if b < 0:
            return new_error(ILLEGAL_OPERATOR, f"negative shift count: {b}")
        if op == '<<':
            return IntVal(0 if b >= 64 else wrap_int64(a << b))
        return IntVal(a >> min(b, 63))
    return _illegal_operator(op, left, right)


def infix_float(op: str, left: FloatVal, right: FloatVal) -> Value:
    a, b = left.value, right.value
    result = _compare(op, a, b)
    if result is not None:
        return result
    if op == '+':
        return FloatVal(a + b)
    if op == '-':
        return FloatVal(a - b)
    if op == '*':
        return FloatVal(a * b)
    if op == '/':
        if b == 0.0:
            return new_error(DIVIDE_BY_ZERO, "divide by zero error")
        return FloatVal(a / b)
    return _illegal_operator(op, left, right)


def infix_string(op: str, left: StringVal, right: StringVal) -> Value:
    result = _compare(op, left.value, right.value)
    if result is not None:
        return result
    if op == '+':
        return StringVal(left.value + right.value)
    return _illegal_operator(op, left, right)


def infix_bool(op: str, left: BoolVal, right: BoolVal) -> Value:
    if op == '==':
        return BoolVal(left.value == right.value)
    if op == '!=':
        return BoolVal(left.value != right.value)
    if op == '&&':
        return BoolVal(left.value and right.value)
    if op == '||':
        return BoolVal(left.value or right.value)
    return _illegal_operator(op, left, right)
