"""PKCS#1 interop for public keys.

Converts a `PublicKey` to and from the DER `RSAPublicKey` structure of RFC 8017, wrapped in PEM armor, so keys made
here can be loaded by OpenSSL and friends. Only the public half is supported: the PKCS#1 private key structure needs
the primes and CRT components, which a key pair does not keep.

Typical usage example:

    pem = to_pkcs1_pem(pair.public_key)
    pub = from_pkcs1_pem(pem)
"""
# Copyright (c) 2025-present Tech. TTGames
# SPDX-License-Identifier: EPL-2.0
import base64
import binascii

from pyasn1 import error
from pyasn1.codec.der import decoder
from pyasn1.codec.der import encoder
from pyasn1.codec.native import encoder as localize
from pyasn1_modules import rfc8017

from rsacore.errors import InvalidKeyFormat
from rsacore.keys import KEY_MARKERS
from rsacore.keys import PublicKey


def write_pem(data: bytes, kind: str = "PUBLIC") -> str:
    """Wraps DER data in PEM armor, base64 wrapped at 64 columns."""
    header, footer = KEY_MARKERS[kind]
    payload = base64.b64encode(data).decode("ascii")
    lines = [payload[i:i + 64] for i in range(0, len(payload), 64)]
    return "\n".join([header, *lines, footer]) + "\n"


def read_pem(text: str, kind: str = "PUBLIC") -> bytes:
    """Strips the PEM armor off `text` and decodes the payload.

    Raises:
        InvalidKeyFormat: If the armor does not match `kind` or the payload is not base64.
    """
    header, footer = KEY_MARKERS[kind]
    lines = [line.strip() for line in text.strip().splitlines()]
    if not lines or lines[0] != header:
        raise InvalidKeyFormat(f"PEM does not start with {header}")
    if lines[-1] != footer:
        raise InvalidKeyFormat(f"PEM does not contain footer: {footer}")
    try:
        return base64.b64decode("".join(lines[1:-1]), validate=True)
    except binascii.Error as exc:
        raise InvalidKeyFormat("PEM payload is not valid base64") from exc


def to_pkcs1_pem(key: PublicKey) -> str:
    """Exports the public key as a PKCS#1 `RSA PUBLIC KEY` PEM block."""
    keydata = rfc8017.RSAPublicKey()
    keydata["modulus"] = key.n
    keydata["publicExponent"] = key.e
    return write_pem(encoder.encode(keydata))


def from_pkcs1_pem(text: str) -> PublicKey:
    """Imports a public key from a PKCS#1 `RSA PUBLIC KEY` PEM block.

    Raises:
        InvalidKeyFormat: If the armor, the base64 or the DER structure is invalid.
    """
    payload = read_pem(text)
    try:
        keydata, rest = decoder.decode(payload, asn1Spec=rfc8017.RSAPublicKey())
    except error.PyAsn1Error as exc:
        raise InvalidKeyFormat("PEM payload is not a PKCS#1 RSAPublicKey") from exc
    if rest:
        raise InvalidKeyFormat("Trailing data after the PKCS#1 RSAPublicKey")
    pykeyd = localize.encode(keydata)
    return PublicKey(pykeyd["publicExponent"], pykeyd["modulus"])
