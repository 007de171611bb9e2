"""
Exact rounding over decimal numeral strings.

Numerals coming back from the solver (or handed in by callers) may carry far
more digits than a double can hold, so nothing here goes through ``float``:
the integer part is treated as a digit string and incremented with carry
propagation when rounding moves away from zero.
"""

from __future__ import annotations

import math
import re
from typing import Tuple, Union

from lpsolver.core.errors import InvalidDecimalFormat

_NUMERAL_RE = re.compile(r"^([+-]?)(\d*)(?:\.(\d*))?$")
_EXPONENT_RE = re.compile(r"^([+-]?)(\d*)(?:\.(\d*))?[eE]([+-]?\d+)$")

Numeric = Union[int, float, str]


def _split(s: str) -> Tuple[bool, str, str]:
    """Return (negative, integer digits, fraction digits) of a plain numeral."""
    if not isinstance(s, str):
        raise InvalidDecimalFormat(f"Expected a numeral string, got {type(s).__name__}.")
    m = _NUMERAL_RE.match(s.strip())
    if m is None or not (m.group(2) or m.group(3)):
        raise InvalidDecimalFormat(f"'{s}' is not a decimal numeral.")
    sign, int_part, frac_part = m.group(1), m.group(2), m.group(3) or ""
    int_part = int_part.lstrip("0") or "0"
    return sign == "-", int_part, frac_part


def _increment(digits: str) -> str:
    out = list(digits)
    i = len(out) - 1
    while i >= 0:
        if out[i] == "9":
            out[i] = "0"
            i -= 1
        else:
            out[i] = chr(ord(out[i]) + 1)
            return "".join(out)
    return "1" + "".join(out)


def _signed(negative: bool, digits: str) -> str:
    if negative and digits != "0":
        return "-" + digits
    return digits


def _to_integer(s: str, mode: str) -> str:
    negative, int_part, frac_part = _split(s)
    if not frac_part.strip("0"):
        return _signed(negative, int_part)

    if mode == "round":
        away = frac_part[0] >= "5"
    elif mode == "ceil":
        away = not negative
    else:
        away = negative

    if away:
        int_part = _increment(int_part)
    return _signed(negative, int_part)


def bn_round(s: str) -> str:
    """Nearest integer; a fraction of exactly one half rounds away from zero."""
    return _to_integer(s, "round")


def bn_ceil(s: str) -> str:
    return _to_integer(s, "ceil")


def bn_floor(s: str) -> str:
    return _to_integer(s, "floor")


def _shift(negative: bool, int_part: str, frac_part: str, exponent: int) -> str:
    digits = int_part + frac_part
    point = len(int_part) + exponent
    if point <= 0:
        digits = "0" * (1 - point) + digits
        point = 1
    elif point > len(digits):
        digits = digits + "0" * (point - len(digits))
    int_digits = digits[:point].lstrip("0") or "0"
    frac_digits = digits[point:].rstrip("0")
    body = int_digits + ("." + frac_digits if frac_digits else "")
    if negative and body.strip("0.") != "":
        return "-" + body
    return body


def normalize_numeral(value: Numeric) -> str:
    """Plain numeral string for an int, float or numeral string (never scientific)."""
    if isinstance(value, bool):
        raise InvalidDecimalFormat("Booleans are not numerals.")
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        if not math.isfinite(value):
            raise InvalidDecimalFormat(f"'{value}' is not a finite numeral.")
        value = repr(value)
    if not isinstance(value, str):
        raise InvalidDecimalFormat(f"Expected a numeral, got {type(value).__name__}.")

    text = value.strip()
    m = _EXPONENT_RE.match(text)
    if m is not None:
        if not (m.group(2) or m.group(3)):
            raise InvalidDecimalFormat(f"'{value}' is not a decimal numeral.")
        return _shift(
            m.group(1) == "-", m.group(2) or "0", m.group(3) or "", int(m.group(4))
        )

    negative, int_part, frac_part = _split(text)
    return _shift(negative, int_part, frac_part, 0)


def compare(a: str, b: str) -> int:
    """Exact three-way comparison of two numerals: -1, 0 or 1."""
    na, ia, fa = _split(normalize_numeral(a))
    nb, ib, fb = _split(normalize_numeral(b))
    if ia == "0" and not fa.strip("0"):
        na = False
    if ib == "0" and not fb.strip("0"):
        nb = False
    if na != nb:
        return -1 if na else 1

    width = max(len(fa), len(fb))
    ka = (ia.rjust(len(ib), "0"), fa.ljust(width, "0"))
    kb = (ib.rjust(len(ia), "0"), fb.ljust(width, "0"))
    if ka == kb:
        return 0
    magnitude = 1 if ka > kb else -1
    return -magnitude if na else magnitude


def is_unit(s: str) -> bool:
    """Whether the numeral's magnitude is exactly one."""
    negative, int_part, frac_part = _split(normalize_numeral(s))
    return int_part == "1" and not frac_part.strip("0")


def is_negative(s: str) -> bool:
    return compare(s, "0") < 0


def format_fixed(x: float, precision: int) -> str:
    """Render a solver float with exactly `precision` fractional digits."""
    text = f"{x:.{precision}f}"
    if text.startswith("-") and not text.strip("-0."):
        return text[1:]
    return text
