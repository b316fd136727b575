"""
Line algebra - stacking, powers, modulo and chord inversion.

Operations keep the notation of their operands whenever the result can be
written exactly in it (ratio with ratio, EDO step with EDO step) and fall
back to cents otherwise.
"""

from __future__ import annotations

import logging
import math
import re

from chuk_mcp_tuning.constants import ErrorMessages, LineType
from chuk_mcp_tuning.core.formatting import to_fixed
from chuk_mcp_tuning.core.lines import (
    decimal_to_commadecimal,
    get_line_type,
    line_to_cents,
    line_to_decimal,
    parse_n_of_edo,
    parse_ratio,
    ratio_to_decimal,
)
from chuk_mcp_tuning.core.numbers import get_lcm, get_lcm_array, math_modulo, simplify_ratio

logger = logging.getLogger(__name__)

_CHORD = re.compile(r"^([1-9]\d*:)+[1-9]\d*$")


def stack_ratios(ratio1: str, ratio2: str) -> str:
    """Multiply two ratios, reduced: '3/2' + '4/3' -> '2/1'."""
    n1, d1 = parse_ratio(ratio1)
    n2, d2 = parse_ratio(ratio2)
    numerator, denominator = simplify_ratio(n1 * n2, d1 * d2)
    return f"{numerator}/{denominator}"


def stack_n_of_edos(n_of_edo1: str, n_of_edo2: str) -> str:
    """Add two EDO steps over the LCM of their divisions: '1\\2' + '1\\3' -> '5\\6'."""
    degree1, edo1 = parse_n_of_edo(n_of_edo1)
    degree2, edo2 = parse_n_of_edo(n_of_edo2)
    new_edo = get_lcm(edo1, edo2)
    new_degree = (new_edo // edo1) * degree1 + (new_edo // edo2) * degree2
    degree, edo = simplify_ratio(new_degree, new_edo)
    return f"{degree}\\{edo}"


def stack_lines(line1: str, line2: str) -> str:
    """
    Stack two intervals (interval addition).

    - ratio + ratio keeps ratio notation
    - EDO step + EDO step keeps EDO notation
    - a commadecimal first operand gives a commadecimal
    - anything else is summed in cents, 6 decimals
    """
    type1 = get_line_type(line1)
    type2 = get_line_type(line2)

    if type1 == LineType.RATIO and type2 == LineType.RATIO:
        return stack_ratios(line1, line2)
    elif type1 == LineType.N_OF_EDO and type2 == LineType.N_OF_EDO:
        return stack_n_of_edos(line1, line2)
    elif type1 in (LineType.DECIMAL, LineType.COMMADECIMAL):
        return decimal_to_commadecimal(line_to_decimal(line1) * line_to_decimal(line2))

    return to_fixed(line_to_cents(line1) + line_to_cents(line2), 6)


def stack_self(line: str, num_stacks: float) -> str:
    """
    Stack an interval on itself num_stacks times (a power function).

    Whole num_stacks keep the notation of ratios, EDO steps and
    commadecimals; a ratio raised to 0 is '1/1', negative powers flip the
    ratio and ratio results are reduced.

    Anything else falls back to cents(line) * (1 + num_stacks). The
    (1 + num_stacks) factor is kept as is for compatibility with existing
    scales and has not been confirmed as intended.
    """
    line_type = get_line_type(line)
    whole = float(num_stacks).is_integer()

    if whole and line_type in (LineType.DECIMAL, LineType.COMMADECIMAL):
        return decimal_to_commadecimal(line_to_decimal(line) ** int(num_stacks))
    elif whole and line_type == LineType.RATIO:
        stacks = int(num_stacks)
        if stacks == 0:
            return "1/1"
        numerator, denominator = parse_ratio(line)
        if stacks < 0:
            numerator, denominator = denominator, numerator
        numerator, denominator = simplify_ratio(numerator ** abs(stacks), denominator ** abs(stacks))
        return f"{numerator}/{denominator}"
    elif whole and line_type == LineType.N_OF_EDO:
        degree, edo = parse_n_of_edo(line)
        return f"{degree * int(num_stacks)}\\{edo}"

    return to_fixed(line_to_cents(line) * (1 + num_stacks), 6)


def modulo_line(line: str, mod_line: str) -> str:
    """
    Reduce line into the period given by mod_line (usually the octave).

    '9/4' mod '2/1' -> '9/8'; '14\\12' mod '12\\12' -> '2\\12'. An EDO
    step modulo an octave in any notation stays an EDO step. Other mixed
    notations are reduced in cents.
    """
    line_type = get_line_type(line)
    mod_type = get_line_type(mod_line)

    if line_type == LineType.RATIO and mod_type == LineType.RATIO:
        periods = math.floor(math.log(ratio_to_decimal(line)) / math.log(ratio_to_decimal(mod_line)))
        return stack_ratios(line, stack_self(mod_line, -periods))
    elif line_type == LineType.N_OF_EDO and mod_type == LineType.N_OF_EDO:
        degree, edo = parse_n_of_edo(line)
        mod_degree, mod_edo = parse_n_of_edo(mod_line)
        lcm_edo = get_lcm(edo, mod_edo)
        reduced = (degree * lcm_edo // edo) % (mod_degree * lcm_edo // mod_edo)
        return f"{reduced}\\{lcm_edo}"
    elif line_type == LineType.N_OF_EDO and line_to_decimal(mod_line) == 2:
        degree, edo = parse_n_of_edo(line)
        return f"{degree % edo}\\{edo}"

    return to_fixed(math_modulo(line_to_cents(line), line_to_cents(mod_line)), 6)


def invert_chord(chord: str) -> str | None:
    """
    Invert the interval order of a chord: '4:5:6' -> '10:12:15'.

    The steps between adjacent tones are reversed and stacked again from
    1/1, then scaled to whole numbers by the LCM of the denominators.

    Returns None (and logs a warning) if chord is not like '4:5:6'.
    """
    if not _CHORD.match(chord):
        logger.warning(ErrorMessages.INVALID_CHORD.format(chord=chord))
        return None

    tones = [int(tone) for tone in chord.split(":")]
    steps = [(upper, lower) for lower, upper in zip(tones, tones[1:])]
    steps.reverse()

    intervals = [(1, 1)]
    for step_numerator, step_denominator in steps:
        numerator, denominator = intervals[-1]
        intervals.append(simplify_ratio(step_numerator * numerator, step_denominator * denominator))

    lcm = get_lcm_array([denominator for _, denominator in intervals[1:]])
    return ":".join(str(numerator * lcm // denominator) for numerator, denominator in intervals)
