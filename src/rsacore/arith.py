"""Integer arithmetic underpinning the RSA core.

Python integers are already arbitrary-precision, so this module only adds what RSA needs on top of them: a strict
decimal parser, square-and-multiply modular exponentiation, the Extended Euclidean Algorithm and modular inversion.

Typical usage example:

    n = parse_int("3233")
    c = mod_pow(65, 17, n)
    d = mod_inverse(17, 3120)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import re

from rsacore.errors import InvalidNumberFormat
from rsacore.errors import NoModularInverse

# int() on its own would also accept "1_000", "٣" and friends.
_DECIMAL = re.compile(r"[+-]?[0-9]+")


def parse_int(text: str) -> int:
    """Parse a decimal string into an integer.

    Args:
        text: Decimal digits with an optional sign. Surrounding whitespace is ignored.

    Returns:
        The parsed integer.

    Raises:
        InvalidNumberFormat: If `text` is not a plain decimal integer.
    """
    if not isinstance(text, str):
        raise InvalidNumberFormat(f"Expected a decimal string, got {type(text).__name__}")
    stripped = text.strip()
    if not _DECIMAL.fullmatch(stripped):
        raise InvalidNumberFormat(f"Malformed decimal integer: {text!r}")
    return int(stripped)


def format_int(value: int) -> str:
    """Format an integer as a decimal string, the inverse of `parse_int`."""
    return str(value)


def mod_pow(base: int, exponent: int, modulus: int) -> int:
    """Computes `base**exponent % modulus` by binary square-and-multiply.

    Every product is reduced right away, so intermediate values never grow past `modulus**2`.

    Args:
        base: The base, any integer.
        exponent: The exponent. Must be >= 0.
        modulus: The modulus. Must be >= 1.

    Returns:
        The result in range `[0, modulus)`.

    Raises:
        ValueError: If `modulus` or `exponent` is out of range.
    """
    if modulus < 1:
        raise ValueError("Modulus must be >= 1")
    if exponent < 0:
        raise ValueError("Exponent must be >= 0")
    if modulus == 1:
        return 0
    result = 1
    base %= modulus
    while exponent > 0:
        if exponent & 1:
            result = (result * base) % modulus
        exponent >>= 1
        base = (base * base) % modulus
    return result


def extended_gcd(a: int, b: int) -> tuple[int, int, int]:
    """Implements the Extended Euclidean Algorithm.

    Such that a*x + b*y = g = gcd(a, b). Iterative, so multi-thousand-bit operands stay within the stack. For
    non-negative operands the coefficients match the recursive definition (recurse on `(b % a, a)`, base case
    `(b, 0, 1)` for `a == 0`), so the loop runs over `(b, a)` and swaps on return. A negative gcd is flipped, along
    with both coefficients.

    Args:
        a: The first integer.
        b: The second integer.

    Returns:
        Greatest common divisor of the two integers (never negative), as well as the Bezout coefficients of `a` and
        `b`.
    """
    r0, r1 = b, a
    s0, s1, t0, t1 = 1, 0, 0, 1
    while r1 != 0:
        q = r0 // r1
        r0, r1 = r1, r0 - q * r1
        s0, s1 = s1, s0 - q * s1
        t0, t1 = t1, t0 - q * t1
    if r0 < 0:
        return -r0, -t0, -s0
    return r0, t0, s0


def mod_inverse(a: int, m: int) -> int:
    """Finds `x` in `[0, m)` such that `(a * x) % m == 1`.

    Args:
        a: The value to invert.
        m: The modulus. Must be >= 1.

    Returns:
        The modular inverse of `a`.

    Raises:
        NoModularInverse: If `a` and `m` are not coprime.
    """
    g, x, _ = extended_gcd(a, m)
    if g != 1:
        raise NoModularInverse(a, m)
    return x % m
