"""Value helpers for Dash.

Every Dash runtime value is a Python ``str``. Integers are stored in their
decimal rendering and booleans as ``"1"``/``"0"``. Arithmetic works on
64-bit signed integers, so values are parsed on the way in and range
checked on the way out.
"""

from __future__ import annotations

from dataclasses import dataclass
import re


I64_MIN = -(2 ** 63)
I64_MAX = 2 ** 63 - 1

TRUE = '1'
FALSE = '0'

# optional sign followed by ASCII digits, nothing else
_INTEGER_RE = re.compile(r'[+-]?[0-9]+\Z')


@dataclass
class ErrorVal:
    """A runtime error value: a kind name plus a human readable message."""
    name: str
    message: str


def to_integer(value: str) -> int:
    """Parse a value as a 64-bit signed integer.

    Raises ValueError when the string is not an integer or does not fit.
    """
    if not _INTEGER_RE.match(value):
        raise ValueError(f'invalid digit found in {value!r}')
    number = int(value)
    if not I64_MIN <= number <= I64_MAX:
        raise ValueError(f'number too large to fit in target type: {value!r}')
    return number


def check_i64(number: int) -> int:
    if not I64_MIN <= number <= I64_MAX:
        raise OverflowError(f'integer overflow: {number}')
    return number


def from_integer(number: int) -> str:
    return str(number)


def from_bool(flag: bool) -> str:
    return TRUE if flag else FALSE


def truncating_div(a: int, b: int) -> int:
    """Integer division rounding toward zero."""
    if b == 0:
        raise ZeroDivisionError('attempt to divide by zero')
    quotient = abs(a) // abs(b)
    if (a < 0) != (b < 0):
        quotient = -quotient
    return quotient


def is_truthy(value: str) -> bool:
    # if-statement rule
    return value not in ('0', '', 'false')


def loop_continues(value: str) -> bool:
    # while-statement rule: only the exact string "0" stops a loop
    return value != FALSE
