"""Primality testing and random prime generation.

Hosts the probabilistic (Miller-Rabin) primality test used both to manufacture primes and to vet caller-supplied
ones, the random prime generator, and the knobs both of them share: the search limits and the secure random source.

Typical usage example:

    is_prime(7919)
    p = generate_prime(512)
    p = generate_prime(512, limits=DEFAULT_LIMITS._replace(prime_candidates=500))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import logging
import random
import secrets
import typing

from rsacore.arith import mod_pow
from rsacore.errors import GenerationCancelled

logger = logging.getLogger(__name__)


class SearchLimits(typing.NamedTuple):
    """Upper bounds for the retry loops of the prime and exponent searches.

    Attributes:
        prime_candidates: Random candidates drawn before the prime search switches to an incremental walk.
        exponent_attempts: Random public exponents drawn before falling back to conventional ones.
        primality_rounds: Miller-Rabin witnesses per primality test.
    """
    prime_candidates: int = 100
    exponent_attempts: int = 100
    primality_rounds: int = 40


DEFAULT_LIMITS = SearchLimits()


class Cancellable(typing.Protocol):
    """Anything that can signal cancellation, usually a `threading.Event`."""

    def is_set(self) -> bool:
        ...


def secure_random(rng: random.SystemRandom | None = None) -> random.SystemRandom:
    """Validates the random source used for generation, defaulting to the OS CSPRNG.

    General-purpose generators such as `random.Random` are predictable and thus rejected outright.

    Args:
        rng: The source to validate. If None, a new `secrets.SystemRandom` is used.

    Returns:
        A cryptographically secure random source.

    Raises:
        TypeError: If `rng` is not a `random.SystemRandom` (or subclass) instance.
    """
    if rng is None:
        return secrets.SystemRandom()
    if not isinstance(rng, random.SystemRandom):
        raise TypeError(f"A cryptographically secure random source is required, got {type(rng).__name__}")
    return rng


def check_cancelled(cancel: Cancellable | None) -> None:
    """Raises GenerationCancelled if `cancel` has been set."""
    if cancel is not None and cancel.is_set():
        raise GenerationCancelled("Generation was cancelled")


def _sieve(n: int = 1000) -> list[int]:
    """Implements the Sieve of Eratosthenes.

    Uses the textbook Sieve of Eratosthenes, sieving odd numbers only and stopping at the root of `n`.

    Args:
        n: The number up to which to generate primes. Must be >= 0.

    Returns:
        A list of primes up to `n`.
    """
    if n < 2:
        return []
    i_size = (n - 1) // 2
    candidate: list[bool] = [True] * i_size
    for i in range(int(n**0.5) // 2):
        if candidate[i]:
            r = 2 * i + 3
            for j in range((r * r - 3) // 2, i_size, r):
                candidate[j] = False
    return [2] + [(no * 2 + 3) for no, ele in enumerate(candidate) if ele]


SMALL_PRIMES: tuple[int, ...] = tuple(_sieve(1000))


def _trial_division(no: int) -> bool:
    """Check the provided `no` against the known small primes.

    Runs a fast pre-check before Miller-Rabin by using modulo division on the primes below 1000.

    Args:
         no: The number to check. Must be >= 2.

    Returns:
        False if `no` cannot be prime, True otherwise.
    """
    for prime in SMALL_PRIMES:
        if prime * prime > no:
            return True
        if no % prime == 0:
            return False
    return True


def _miller_rabin(w: int, rounds: int, rng: random.SystemRandom) -> bool:
    """Perform the Miller-Rabin primality test.

    Args:
        w: Odd integer > 3 to be tested.
        rounds: Number of random witnesses to try.
        rng: Source of the witnesses.

    Returns:
        True if `w` is probably prime, False otherwise.
    """
    tw = w - 1
    r = (tw & -tw).bit_length() - 1
    d = tw >> r
    for _ in range(rounds):
        a = rng.randrange(2, w - 1)
        x = mod_pow(a, d, w)
        if x == 1 or x == tw:
            continue
        for _ in range(r - 1):
            x = mod_pow(x, 2, w)
            if x == tw:
                break
            if x == 1:
                return False
        else:
            return False
    return True


def is_prime(n: int, rounds: int = 40, rng: random.SystemRandom | None = None) -> bool:
    """Probabilistic primality test.

    Trial division by the small primes weeds out most composites before `rounds` Miller-Rabin witnesses are tried.
    A composite passes with probability below 4**-rounds.

    Args:
        n: The candidate.
        rounds: Number of Miller-Rabin witnesses.
        rng: Secure random source for the witnesses.

    Returns:
        True if `n` is probably prime, False if it is certainly composite (or below 2).

    Raises:
        TypeError: If `rng` is not a secure random source.
    """
    rng = secure_random(rng)
    if n <= 1:
        return False
    if n in (2, 3):
        return True
    if n % 2 == 0:
        return False
    if not _trial_division(n):
        return False
    return _miller_rabin(n, rounds, rng)


def generate_prime(bits: int,
                   rng: random.SystemRandom | None = None,
                   limits: SearchLimits = DEFAULT_LIMITS,
                   cancel: Cancellable | None = None) -> int:
    """Generate a probable prime of exactly `bits` bits.

    Draws random odd candidates with the top bit set until one passes `is_prime`. After
    `limits.prime_candidates` misses it walks upwards in steps of two from a fresh random start instead, wrapping
    around to the bottom of the range when it runs past the top.

    Args:
        bits: Bit length of the prime. Must be >= 2.
        rng: Secure random source.
        limits: Search bounds.
        cancel: Optional event, checked before every candidate.

    Returns:
        A probable prime `p` with `p.bit_length() == bits`.

    Raises:
        ValueError: If `bits` is below 2.
        TypeError: If `rng` is not a secure random source.
        GenerationCancelled: If `cancel` gets set during the search.
    """
    if bits < 2:
        raise ValueError("Prime size must be at least 2 bits")
    rng = secure_random(rng)
    msk = (1 << (bits - 1)) | 1

    for _ in range(limits.prime_candidates):
        check_cancelled(cancel)
        candidate = rng.getrandbits(bits) | msk
        if is_prime(candidate, limits.primality_rounds, rng):
            return candidate

    logger.warning("No %d-bit prime among %d random candidates, falling back to incremental search", bits,
                   limits.prime_candidates)
    low, high = 1 << (bits - 1), (1 << bits) - 1
    candidate = rng.getrandbits(bits) | msk
    while True:
        check_cancelled(cancel)
        if is_prime(candidate, limits.primality_rounds, rng):
            return candidate
        candidate += 2
        if candidate > high:
            candidate = low | 1
