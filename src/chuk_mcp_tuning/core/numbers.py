"""
Number theory primitives - primes, factorization, GCD/LCM.

Everything here is pure and works on plain ints. The prime table is built
once at import time and never mutated.
"""

from __future__ import annotations

import math
from collections.abc import Iterable, Sequence

PRIME_TABLE_LIMIT = 10_000


def _sieve(limit: int) -> tuple[int, ...]:
    flags = bytearray([1]) * limit
    flags[0:2] = b"\x00\x00"
    for n in range(2, math.isqrt(limit - 1) + 1):
        if flags[n]:
            flags[n * n :: n] = bytearray(len(range(n * n, limit, n)))
    return tuple(n for n in range(limit) if flags[n])


# All primes below PRIME_TABLE_LIMIT, ascending
PRIMES: tuple[int, ...] = _sieve(PRIME_TABLE_LIMIT)


def math_modulo(number: float, modulo: float) -> float:
    """Modulo whose result takes the sign of the modulus."""
    return ((number % modulo) + modulo) % modulo


def sum_of_array(values: Iterable[float]) -> float:
    """Sum of the values (0 for an empty iterable)."""
    return sum(values, 0)


def clamp(minimum: float, maximum: float, value: float) -> float:
    """Restrict value to [minimum, maximum]."""
    if value < minimum:
        return minimum
    if value > maximum:
        return maximum
    return value


def reciprocal(ratio: str) -> str:
    """Swap numerator and denominator of a ratio string: '3/2' -> '2/3'."""
    return "/".join(reversed(ratio.split("/")))


def is_prime(number: int) -> bool:
    """Trial division by the table primes up to floor(sqrt(number))."""
    if number < 2:
        return False
    root = math.isqrt(number)
    for prime in PRIMES:
        if prime > root:
            break
        if number % prime == 0:
            return False
    return True


def _primes_not_above(number: int) -> int:
    """Count of table primes <= number."""
    count = 0
    while count < len(PRIMES) and PRIMES[count] <= number:
        count += 1
    return count


def prev_prime(number: int) -> int:
    """Greatest table prime <= number (2 for number < 2)."""
    if number < 2:
        return 2
    return PRIMES[_primes_not_above(number) - 1]


def next_prime(number: int) -> int:
    """Smallest table prime strictly greater than number (2 for number < 2)."""
    if number < 2:
        return 2
    return PRIMES[_primes_not_above(number)]


def closest_prime(number: int) -> int:
    """
    The prime nearest to number.

    Returns number itself if it is prime. On a tie the lower prime wins.
    """
    if number < 2:
        return 2
    if is_prime(number):
        return number

    following = next_prime(number)
    previous = prev_prime(number)
    if abs(following - number) < abs(previous - number):
        return following
    return previous


def get_prime_factors(number: int) -> list[int] | int:
    """
    Prime factorization as an exponent vector.

    Index i holds the exponent of PRIMES[i]; the vector stops at the largest
    prime factor. 12 -> [2, 1] (2^2 * 3).

    Note: returns the scalar 1 (not a list) for an input of 1. Callers that
    need a vector must special-case it.

    Raises:
        ValueError: if number has a prime factor beyond the prime table
    """
    num = math.floor(number)
    if num == 1:
        return 1

    factors: list[int] = []
    remaining = num
    for index, prime in enumerate(PRIMES):
        if prime > remaining:
            break
        factors.append(0)
        while remaining % prime == 0:
            remaining //= prime
            factors[index] += 1

    if remaining > 1:
        raise ValueError(f"{num} has a prime factor above {PRIMES[-1]}")
    return factors


def _factor_vector(number: int) -> list[int]:
    factors = get_prime_factors(number)
    return [] if isinstance(factors, int) else factors


def get_prime_limit(number: int) -> int:
    """Largest prime factor of number. 1 has prime limit 1."""
    factors = _factor_vector(number)
    if not factors:
        return 1
    return PRIMES[len(factors) - 1]


def get_prime_limit_of_ratio(numerator: int, denominator: int) -> int:
    """The larger of the numerator and denominator prime limits."""
    return max(get_prime_limit(numerator), get_prime_limit(denominator))


def get_primes_of_ratio(numerator: int, denominator: int) -> tuple[int, int, int]:
    """Returns (ratio prime limit, numerator prime limit, denominator prime limit)."""
    numerator_limit = 1 if numerator == 1 else get_prime_limit(numerator)
    denominator_limit = 1 if denominator == 1 else get_prime_limit(denominator)
    return max(numerator_limit, denominator_limit), numerator_limit, denominator_limit


def get_gcd(a: int, b: int) -> int:
    """Greatest common divisor (recursive Euclid)."""
    if a == 0 or b == 0:
        return a + b
    if a == 1 or b == 1:
        return 1
    if a == b:
        return a
    return get_gcd(b, a % b)


def get_lcm(a: int, b: int) -> int:
    """Least common multiple, 0 if either argument is 0."""
    if a == 0 or b == 0:
        return 0
    gcd = get_gcd(a, b)
    return (max(a, b) // gcd) * min(a, b)


def get_lcm_array(values: Sequence[int]) -> int:
    """LCM of many numbers from the highest power of each prime across them."""
    vectors = [_factor_vector(value) for value in values]
    width = max((len(vector) for vector in vectors), default=0)

    lcm = 1
    for index in range(width):
        exponent = max(vector[index] if index < len(vector) else 0 for vector in vectors)
        lcm *= PRIMES[index] ** exponent
    return lcm


def simplify_ratio(numerator: int, denominator: int) -> tuple[int, int]:
    """Reduce a ratio by the GCD of its terms."""
    gcd = get_gcd(numerator, denominator)
    return numerator // gcd, denominator // gcd


def simplify_ratio_string(ratio: str) -> str:
    """'6/4' -> '3/2'."""
    numerator, denominator = (int(part) for part in ratio.split("/"))
    return "/".join(str(term) for term in simplify_ratio(numerator, denominator))
