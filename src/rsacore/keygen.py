"""Key pair generation, either from random primes of a requested size or from two caller-supplied primes.

Both entry points share one continuation, `build_key_pair`, which derives the modulus, the totient, a public
exponent coprime to the totient and the matching private exponent. Generation is split into two public stages,
`generate_prime_pair` and `build_key_pair`, so callers running it in the background can report which stage they are
waiting on.

Typical usage example:

    pair = generate_from_bits(1024)
    pair = generate_from_primes(61, 53)

    stop = threading.Event()
    p, q = generate_prime_pair(2048, cancel=stop)
    pair = build_key_pair(p, q)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import random

from rsacore.arith import extended_gcd
from rsacore.arith import mod_inverse
from rsacore.errors import NoSuitableExponent
from rsacore.errors import NotPrime
from rsacore.errors import PrimesNotDistinct
from rsacore.keys import KeyPair
from rsacore.keys import PrivateKey
from rsacore.keys import PublicKey
from rsacore.primes import Cancellable
from rsacore.primes import DEFAULT_LIMITS
from rsacore.primes import generate_prime
from rsacore.primes import is_prime
from rsacore.primes import SearchLimits
from rsacore.primes import secure_random

logger = logging.getLogger(__name__)

PREFERRED_EXPONENT = 65537
CONVENTIONAL_EXPONENTS = (17, 257, 65537)
# 4 bits would split into two 2-bit primes, and 3 is the only one.
MIN_KEY_BITS = 5


def _coprime(e: int, phi: int) -> bool:
    return e < phi and extended_gcd(e, phi)[0] == 1


def select_exponent(phi: int, rng: random.SystemRandom | None = None, limits: SearchLimits = DEFAULT_LIMITS) -> int:
    """Pick a public exponent `e` with `1 < e < phi` and `gcd(e, phi) == 1`.

    Prefers 65537. Otherwise draws up to `limits.exponent_attempts` random odd values in `[3, phi - 1]`, then tries
    the conventional exponents, and at last walks the odd numbers upwards from 65537.

    Args:
        phi: The totient of the modulus.
        rng: Secure random source.
        limits: Search bounds.

    Returns:
        The public exponent.

    Raises:
        NoSuitableExponent: If no exponent below `phi` is coprime to it.
    """
    rng = secure_random(rng)
    if _coprime(PREFERRED_EXPONENT, phi):
        return PREFERRED_EXPONENT

    if phi > 3:
        for _ in range(limits.exponent_attempts):
            e = rng.randrange(3, phi)
            if e % 2 == 0:
                e += 1
            if _coprime(e, phi):
                return e

    logger.warning("No random public exponent found for phi=%d, trying conventional exponents", phi)
    for e in CONVENTIONAL_EXPONENTS:
        if _coprime(e, phi):
            return e

    e = PREFERRED_EXPONENT
    while e < phi:
        if _coprime(e, phi):
            return e
        e += 2
    raise NoSuitableExponent(phi)


def generate_prime_pair(bits: int,
                        rng: random.SystemRandom | None = None,
                        limits: SearchLimits = DEFAULT_LIMITS,
                        cancel: Cancellable | None = None) -> tuple[int, int]:
    """Generates two distinct primes whose sizes add up to `bits`.

    The first prime gets `bits // 2` bits, the second the remainder.

    Args:
        bits: Requested modulus size. Must be >= 5.
        rng: Secure random source.
        limits: Search bounds.
        cancel: Optional event aborting the search.

    Returns:
        The primes `(p, q)`, with `p != q`.

    Raises:
        ValueError: If `bits` is too small to split into two primes.
        GenerationCancelled: If `cancel` gets set during the search.
    """
    if bits < MIN_KEY_BITS:
        raise ValueError(f"Key size must be at least {MIN_KEY_BITS} bits")
    rng = secure_random(rng)
    p_bits = bits // 2
    q_bits = bits - p_bits
    logger.debug("Generating %d-bit prime p", p_bits)
    p = generate_prime(p_bits, rng, limits, cancel)
    logger.debug("Generating %d-bit prime q", q_bits)
    q = generate_prime(q_bits, rng, limits, cancel)
    while p == q:  # (Un)Likely story.
        q = generate_prime(q_bits, rng, limits, cancel)
    return p, q


def build_key_pair(p: int,
                   q: int,
                   rng: random.SystemRandom | None = None,
                   limits: SearchLimits = DEFAULT_LIMITS) -> KeyPair:
    """Derives a key pair from two distinct primes.

    Args:
        p: The first prime.
        q: The second prime.
        rng: Secure random source for the exponent selection.
        limits: Search bounds.

    Returns:
        The assembled key pair.

    Raises:
        NoSuitableExponent: If the totient is too small to have a public exponent.
    """
    n = p * q
    phi = (p - 1) * (q - 1)
    logger.debug("Selecting public exponent for a %d-bit modulus", n.bit_length())
    e = select_exponent(phi, rng, limits)
    logger.debug("Computing private exponent")
    d = mod_inverse(e, phi)
    return KeyPair(PublicKey(e, n), PrivateKey(d, n))


def generate_from_bits(bits: int,
                       rng: random.SystemRandom | None = None,
                       limits: SearchLimits = DEFAULT_LIMITS,
                       cancel: Cancellable | None = None) -> KeyPair:
    """Generates an RSA key pair from fresh random primes.

    Args:
        bits: Requested modulus size. Must be >= 5.
        rng: Secure random source.
        limits: Search bounds.
        cancel: Optional event aborting the prime search.

    Returns:
        A new key pair.
    """
    rng = secure_random(rng)
    logger.info("Starting %d-bit key generation", bits)
    p, q = generate_prime_pair(bits, rng, limits, cancel)
    pair = build_key_pair(p, q, rng, limits)
    logger.info("Key generation complete")
    return pair


def generate_from_primes(p: int,
                         q: int,
                         rng: random.SystemRandom | None = None,
                         limits: SearchLimits = DEFAULT_LIMITS) -> KeyPair:
    """Generates an RSA key pair from two caller-supplied primes.

    Both values are vetted with the primality test before use.

    Args:
        p: The first prime.
        q: The second prime.
        rng: Secure random source.
        limits: Search bounds.

    Returns:
        A new key pair.

    Raises:
        NotPrime: If `p` or `q` fails the primality test.
        PrimesNotDistinct: If `p == q`.
    """
    rng = secure_random(rng)
    for candidate in (p, q):
        if not is_prime(candidate, limits.primality_rounds, rng):
            raise NotPrime(candidate)
    if p == q:
        raise PrimesNotDistinct(p)
    return build_key_pair(p, q, rng, limits)
