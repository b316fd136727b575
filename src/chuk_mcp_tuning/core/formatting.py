"""
Number formatting compatible with the published file formats.

The exported files are compared byte for byte against files written by
existing tools, which format numbers the way JavaScript does. Python's
own formatting differs in a few places:

- f"{x:.6f}" rounds ties to even; Number#toFixed rounds them away from zero
- str(440.0) is '440.0'; Number#toString gives '440'
- round() is banker's rounding; Math.round rounds half up
"""

from __future__ import annotations

import math
from decimal import ROUND_HALF_UP, Decimal


def to_fixed(value: float, digits: int) -> str:
    """Fixed-point string, ties rounded away from zero on the exact binary value."""
    if value == 0:
        value = 0.0  # no '-0.000000'
    quantum = Decimal(1).scaleb(-digits)
    return format(Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP), "f")


def js_round(value: float) -> int:
    """Round half up, towards positive infinity."""
    return math.floor(value + 0.5)


def number_to_string(value: float) -> str:
    """Shortest round-trip representation, without '.0' on whole numbers."""
    if float(value).is_integer() and abs(value) < 1e21:
        return str(int(value))
    return repr(float(value))
