"""Self-contained textbook RSA: key generation, byte-wise encryption and key text blocks.

Provides RSA key pair generation from random primes or from two supplied primes, per-byte encryption and
decryption, a human-readable key text format and a PKCS#1 export for public keys. Under the hood it carries its own
modular arithmetic, Miller-Rabin primality test and random prime generation.

Typical usage example:

    pair = generate_from_bits(1024)
    token = encrypt("Hi there!", pair.public_key)
    text = decrypt(token, pair.private_key)
    print(format_public_key(pair.public_key))
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
from rsacore.arith import extended_gcd
from rsacore.arith import format_int
from rsacore.arith import mod_inverse
from rsacore.arith import mod_pow
from rsacore.arith import parse_int
from rsacore.cipher import decrypt
from rsacore.cipher import decrypt_bytes
from rsacore.cipher import encrypt
from rsacore.errors import DecryptionFailed
from rsacore.errors import GenerationCancelled
from rsacore.errors import InvalidKeyFormat
from rsacore.errors import InvalidNumberFormat
from rsacore.errors import MessageOutOfRange
from rsacore.errors import NoModularInverse
from rsacore.errors import NoSuitableExponent
from rsacore.errors import NotPrime
from rsacore.errors import PrimesNotDistinct
from rsacore.errors import RSACoreError
from rsacore.keygen import build_key_pair
from rsacore.keygen import generate_from_bits
from rsacore.keygen import generate_from_primes
from rsacore.keygen import generate_prime_pair
from rsacore.keygen import select_exponent
from rsacore.keys import format_private_key
from rsacore.keys import format_public_key
from rsacore.keys import KeyPair
from rsacore.keys import parse_private_key
from rsacore.keys import parse_public_key
from rsacore.keys import PrivateKey
from rsacore.keys import PublicKey
from rsacore.pkcs1 import from_pkcs1_pem
from rsacore.pkcs1 import to_pkcs1_pem
from rsacore.primes import DEFAULT_LIMITS
from rsacore.primes import generate_prime
from rsacore.primes import is_prime
from rsacore.primes import SearchLimits

__version__ = "0.1.0"
__all__ = [
    "KeyPair",
    "PublicKey",
    "PrivateKey",
    "SearchLimits",
    "DEFAULT_LIMITS",
    "parse_int",
    "format_int",
    "mod_pow",
    "extended_gcd",
    "mod_inverse",
    "is_prime",
    "generate_prime",
    "select_exponent",
    "generate_prime_pair",
    "build_key_pair",
    "generate_from_bits",
    "generate_from_primes",
    "encrypt",
    "decrypt",
    "decrypt_bytes",
    "format_public_key",
    "format_private_key",
    "parse_public_key",
    "parse_private_key",
    "to_pkcs1_pem",
    "from_pkcs1_pem",
    "RSACoreError",
    "InvalidNumberFormat",
    "NotPrime",
    "PrimesNotDistinct",
    "MessageOutOfRange",
    "NoModularInverse",
    "NoSuitableExponent",
    "InvalidKeyFormat",
    "DecryptionFailed",
    "GenerationCancelled",
]
