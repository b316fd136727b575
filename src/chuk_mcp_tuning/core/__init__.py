"""
Core tuning primitives - the Radix layer.

These are the mathematical invariants that everything else composes on:
- numbers: primes, factorization, GCD/LCM, prime limits
- lines: the five line notations, classification, cents/decimal conversion
- algebra: stacking, powers, modulo and chord inversion of lines
- pitch: PitchClass, MIDI note <-> frequency, note names
"""

from chuk_mcp_tuning.core.algebra import (
    invert_chord,
    modulo_line,
    stack_lines,
    stack_n_of_edos,
    stack_ratios,
    stack_self,
)
from chuk_mcp_tuning.core.lines import (
    cents_to_decimal,
    commadecimal_to_decimal,
    decimal_to_cents,
    decimal_to_commadecimal,
    get_line_type,
    line_to_cents,
    line_to_decimal,
)
from chuk_mcp_tuning.core.numbers import (
    PRIMES,
    closest_prime,
    get_gcd,
    get_lcm,
    get_lcm_array,
    get_prime_factors,
    get_prime_limit,
    get_prime_limit_of_ratio,
    get_primes_of_ratio,
    is_prime,
    next_prime,
    prev_prime,
    simplify_ratio,
    simplify_ratio_string,
)
from chuk_mcp_tuning.core.pitch import PitchClass, ftom, midi_note_number_to_name, mtof

__all__ = [
    # Numbers
    "PRIMES",
    "is_prime",
    "next_prime",
    "prev_prime",
    "closest_prime",
    "get_prime_factors",
    "get_prime_limit",
    "get_prime_limit_of_ratio",
    "get_primes_of_ratio",
    "get_gcd",
    "get_lcm",
    "get_lcm_array",
    "simplify_ratio",
    "simplify_ratio_string",
    # Lines
    "get_line_type",
    "decimal_to_cents",
    "cents_to_decimal",
    "commadecimal_to_decimal",
    "decimal_to_commadecimal",
    "line_to_cents",
    "line_to_decimal",
    # Algebra
    "stack_ratios",
    "stack_n_of_edos",
    "stack_lines",
    "stack_self",
    "modulo_line",
    "invert_chord",
    # Pitch
    "PitchClass",
    "mtof",
    "ftom",
    "midi_note_number_to_name",
]
