"""
Line primitives - classification and conversion.

A line is one interval of a scale, written as text in one of the five
LineType notations. Cents and decimal (frequency ratio) are the two
canonical numeric forms; every notation converts to both.

    3/2      ratio
    7\\12    7 steps of 12-EDO
    1,5      decimal ratio, comma as separator
    700      cents
    701.955  cents, as in Scala files
"""

from __future__ import annotations

import math
import re
from decimal import Decimal

from chuk_mcp_tuning.constants import LineType
from chuk_mcp_tuning.errors import InvalidLineError

_RATIO = re.compile(r"^\d+/\d+$")
_N_OF_EDO = re.compile(r"^-?\d+\\\d+$")
_COMMADECIMAL = re.compile(r"^(?:\d+,\d*|\d*,\d+)$")


def get_line_type(line: str) -> LineType:
    """
    Classify a line by its syntax.

    Total: anything that is not a ratio, N-of-EDO or commadecimal is
    treated as cents. A number with a period is cents, never a frequency
    ratio; decimal ratios are written with a comma. LineType.DECIMAL is
    never returned.
    """
    text = str(line).strip()
    if _RATIO.match(text):
        return LineType.RATIO
    if _N_OF_EDO.match(text):
        return LineType.N_OF_EDO
    if _COMMADECIMAL.match(text):
        return LineType.COMMADECIMAL
    return LineType.CENTS


def decimal_to_cents(ratio: float) -> float:
    """1200 * log2(ratio)."""
    return 1200 * math.log2(ratio)


def cents_to_decimal(cents: float) -> float:
    """2 ^ (cents / 1200)."""
    return 2 ** (cents / 1200)


def parse_ratio(line: str) -> tuple[int, int]:
    """'3/2' -> (3, 2)."""
    numerator, denominator = line.strip().split("/")
    return int(numerator), int(denominator)


def parse_n_of_edo(line: str) -> tuple[int, int]:
    """'7\\12' -> (7, 12)."""
    degree, edo = line.strip().split("\\")
    return int(degree), int(edo)


def ratio_to_decimal(line: str) -> float:
    numerator, denominator = parse_ratio(line)
    return numerator / denominator


def n_of_edo_to_decimal(line: str) -> float:
    degree, edo = parse_n_of_edo(line)
    return 2 ** (degree / edo)


def n_of_edo_to_cents(line: str) -> float:
    degree, edo = parse_n_of_edo(line)
    return 1200 * degree / edo


def commadecimal_to_decimal(line: str) -> float:
    """'1,5' -> 1.5. Plain decimals pass through unchanged."""
    try:
        return float(line.strip().replace(",", "."))
    except ValueError as e:
        raise InvalidLineError(line) from e


def decimal_to_commadecimal(value: float) -> str:
    """1.5 -> '1,5'; whole numbers keep a fractional part: 2.0 -> '2,0'."""
    text = repr(float(value))
    if "e" in text:
        # no exponent: 1e+16 would read back as cents
        text = format(Decimal(text), "f")
        if "." not in text:
            text += ".0"
    return text.replace(".", ",")


def _parse_cents(line: str) -> float:
    try:
        return float(line.strip())
    except ValueError as e:
        raise InvalidLineError(line) from e


def line_to_decimal(line: str) -> float:
    """Convert any line to a frequency ratio."""
    line_type = get_line_type(line)

    if line_type == LineType.RATIO:
        return ratio_to_decimal(line)
    elif line_type == LineType.N_OF_EDO:
        return n_of_edo_to_decimal(line)
    elif line_type in (LineType.DECIMAL, LineType.COMMADECIMAL):
        return commadecimal_to_decimal(line)
    return cents_to_decimal(_parse_cents(line))


def line_to_cents(line: str) -> float:
    """Convert any line to cents."""
    line_type = get_line_type(line)

    if line_type == LineType.N_OF_EDO:
        return n_of_edo_to_cents(line)
    elif line_type == LineType.CENTS:
        return _parse_cents(line)
    return decimal_to_cents(line_to_decimal(line))
