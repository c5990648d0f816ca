"""Error taxonomy shared by every rsacore module.

Each error kind also subclasses the builtin exception that matches its nature, so callers catching `ValueError` or
`RuntimeError` keep working, while callers that need to tell the kinds apart can catch the specific class.
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0


class RSACoreError(Exception):
    """Base class of every error raised deliberately by rsacore."""


class InvalidNumberFormat(RSACoreError, ValueError):
    """A decimal string could not be parsed into an integer."""


class NotPrime(RSACoreError, ValueError):
    """A caller-supplied value failed the primality test.

    Attributes:
        value: The rejected value.
    """

    def __init__(self, value: int) -> None:
        super().__init__(f"{value} is not a prime number")
        self.value = value


class NoModularInverse(RSACoreError, ValueError):
    """No modular inverse exists as `gcd(a, m) != 1`.

    Attributes:
        a: The value to be inverted.
        m: The modulus.
    """

    def __init__(self, a: int, m: int) -> None:
        super().__init__(f"{a} has no inverse modulo {m}")
        self.a = a
        self.m = m


class PrimesNotDistinct(RSACoreError, ValueError):
    """Both primes of a key pair are the same value.

    Attributes:
        value: The repeated prime.
    """

    def __init__(self, value: int) -> None:
        super().__init__("The two primes must be distinct")
        self.value = value


class MessageOutOfRange(RSACoreError, ValueError):
    """A message byte does not fit below the modulus of the encrypting key."""


class NoSuitableExponent(RSACoreError, RuntimeError):
    """No public exponent below `phi` is coprime to it.

    Attributes:
        phi: The totient the search ran against.
    """

    def __init__(self, phi: int) -> None:
        super().__init__(f"Could not find a suitable public exponent for phi={phi}")
        self.phi = phi


class InvalidKeyFormat(RSACoreError, ValueError):
    """A key text block is missing its markers or one of its fields."""


class DecryptionFailed(RSACoreError, RuntimeError):
    """A ciphertext token could not be decrypted with the given key."""


class GenerationCancelled(RSACoreError, RuntimeError):
    """Key or prime generation was abandoned through its cancel event."""
