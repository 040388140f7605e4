"""Lenient value coercion.

Field values come back from the wire as strings, so numbers and booleans are
only ever recovered here. Every helper is total: bad input yields ``nan`` (or
``True`` for :func:`is_falsy`), never an exception.

Numeric parsing follows the prefix rules of JavaScript's ``parseInt`` and
``parseFloat``, which is what IDs produced by other clients expect:

    parse_int("10.5")      -> 10
    parse_int("10", 2)     -> 2
    parse_int("0x1f", 16)  -> 31
    parse_float("1.5e3px") -> 1500.0
    parse_int("abc")       -> nan
"""

from __future__ import annotations

import math
import re
from typing import Any, Union

Number = Union[int, float]

NAN = float("nan")

_DIGITS = "0123456789abcdefghijklmnopqrstuvwxyz"

# below the smallest int-from-string digit limit CPython allows (640)
_EXACT_DIGITS = 600
# leading digits kept when approximating a longer run
_APPROX_DIGITS = 20

_FLOAT_PREFIX = re.compile(
    r"[+-]?(?:Infinity|(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?)"
)


def parse_int(text: str, base: int = 10) -> Number:
    """Parse the leading integer of ``text`` in ``base``.

    A base of 0 means 10, or 16 when the text carries a ``0x`` prefix.
    Bases outside 2..36 yield ``nan``.

    Runs longer than 600 digits come back as an approximate float (or
    ``inf`` once out of range) rather than an exact int, so untrusted
    input cannot trip the interpreter's digit limit.
    """
    s = text.lstrip()
    sign = 1
    if s[:1] in ("+", "-"):
        if s[0] == "-":
            sign = -1
        s = s[1:]

    strip_prefix = True
    if base != 0:
        if base < 2 or base > 36:
            return NAN
        if base != 16:
            strip_prefix = False
    else:
        base = 10
    if strip_prefix and s[:2] in ("0x", "0X"):
        s = s[2:]
        base = 16

    # ASCII only: int() rejects look-alikes such as U+212A that lower() to "k"
    valid = _DIGITS[:base] + _DIGITS[10:base].upper()
    end = 0
    while end < len(s) and s[end] in valid:
        end += 1
    if end == 0:
        return NAN
    if end <= _EXACT_DIGITS:
        return sign * int(s[:end], base)

    head = int(s[:_APPROX_DIGITS], base)
    try:
        return sign * float(head) * float(base) ** (end - _APPROX_DIGITS)
    except OverflowError:
        return sign * math.inf


def parse_float(text: str) -> float:
    """Parse the leading decimal number of ``text``."""
    m = _FLOAT_PREFIX.match(text.lstrip())
    if m is None:
        return NAN
    return float(m.group(0).replace("Infinity", "inf"))


def is_number(value: Any) -> bool:
    # bool is an int subclass but never counts as a number here
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def to_number(value: Any, as_float: bool = False, base: int = 10) -> Number:
    """Coerce one stored field value to a number.

    Strings are parsed, numbers pass through, anything else is ``nan``.
    """
    if isinstance(value, str):
        return parse_float(value) if as_float else parse_int(value, base)
    if is_number(value):
        return value
    return NAN


def is_falsy(value: Any) -> bool:
    """True for values dropped by falsy compression.

    That is ``None``, ``False``, zero, ``nan``, ``""`` and empty sequences.
    """
    if isinstance(value, float) and math.isnan(value):
        return True
    return not value
