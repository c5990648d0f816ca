"""Byte-wise "textbook" RSA encryption and decryption.

Every byte of the message is encrypted on its own as `c = m**e mod n`. The cipher values are joined as decimal strings
and the result is base64 encoded into a single text-safe token.

Warning! The scheme uses no padding, so equal plaintext bytes map to equal cipher values under the same key and byte
frequencies leak. It is kept for compatibility with existing tokens and for teaching; it is not semantically secure.

Typical usage example:

    token = encrypt("Hi there!", pair.public_key)
    text = decrypt(token, pair.private_key)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii
import logging
import warnings

from rsacore.arith import format_int
from rsacore.arith import mod_pow
from rsacore.arith import parse_int
from rsacore.errors import DecryptionFailed
from rsacore.errors import InvalidNumberFormat
from rsacore.errors import MessageOutOfRange
from rsacore.keys import PrivateKey
from rsacore.keys import PublicKey

logger = logging.getLogger(__name__)

DELIMITER = ","


def encrypt(message: str | bytes, public_key: PublicKey, encoding: str = "utf-8") -> str:
    """Use the public key to encrypt the message, one byte at a time.

    Args:
        message: The message to encrypt. Text is encoded with `encoding` first.
        public_key: The recipient's public key.
        encoding: Text encoding for `str` messages.

    Returns:
        Base64 encoded ciphertext token.

    Raises:
        MessageOutOfRange: If a byte of the message is out of range for the key's modulus.
    """
    warnings.warn("Per-byte RSA encryption is not semantically secure! Please use with care.", RuntimeWarning)
    data = message.encode(encoding) if isinstance(message, str) else bytes(message)
    e, n = public_key
    if data and max(data) >= n:
        raise MessageOutOfRange("Message representative must be in range [0, mod-1]")
    logger.debug("Encrypting %d bytes under a %d-bit modulus", len(data), n.bit_length())
    joined = DELIMITER.join(format_int(mod_pow(m, e, n)) for m in data)
    return base64.b64encode(joined.encode("ascii")).decode("ascii")


def decrypt_bytes(token: str | bytes, private_key: PrivateKey) -> bytes:
    """Decrypts a ciphertext token into the raw message bytes.

    Args:
        token: Base64 encoded ciphertext, as produced by `encrypt`.
        private_key: The private key matching the encrypting public key.

    Returns:
        The decrypted bytes.

    Raises:
        DecryptionFailed: If the token is malformed or does not belong to the key.
    """
    if isinstance(token, str):
        token = token.strip()
    try:
        joined = base64.b64decode(token, validate=True).decode("ascii")
    except (binascii.Error, ValueError) as exc:
        raise DecryptionFailed("Ciphertext is not a valid token.") from exc
    if not joined:
        return b""

    d, n = private_key
    result = bytearray()
    for field in joined.split(DELIMITER):
        try:
            c = parse_int(field)
        except InvalidNumberFormat as exc:
            raise DecryptionFailed("Ciphertext contains a malformed value.") from exc
        if not 0 <= c < n:
            raise DecryptionFailed("Ciphertext value out of range for the key.")
        m = mod_pow(c, d, n)
        if m > 0xFF:
            raise DecryptionFailed("Decryption error.")
        result.append(m)
    return bytes(result)


def decrypt(token: str | bytes, private_key: PrivateKey, encoding: str = "utf-8") -> str:
    """Decrypts a ciphertext token back into text.

    Args:
        token: Base64 encoded ciphertext, as produced by `encrypt`.
        private_key: The private key matching the encrypting public key.
        encoding: Text encoding the message was encrypted with.

    Returns:
        The decrypted message.

    Raises:
        DecryptionFailed: If the token is malformed, does not belong to the key or is not valid text.
    """
    data = decrypt_bytes(token, private_key)
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as exc:
        raise DecryptionFailed("Decrypted payload is not valid text.") from exc
