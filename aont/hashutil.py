from __future__ import annotations

"""Digest providers used as the transform's E() function.

A provider exposes ``digest_length`` (the block size L of every package it
produces) and ``digest(data)``, which always returns exactly L bytes. Providers
hold no state between calls, so one instance can be shared across threads.

Three families are available:

- plain digests from ``hashlib`` (SHA-1, SHA-2, SHA-3, BLAKE2)
- HMAC over a public token, which allows weak hashes to be used safely
- AES-CMAC over a public key, the block-cipher flavour of E()

The HMAC token and CMAC key are *public* parameters: publishing them alongside
the package keeps the transform keyless.
"""

import hashlib
import hmac
from typing import Dict, Optional

from Cryptodome.Cipher import AES
from Cryptodome.Hash import CMAC

from .constants import (
    HASH_SHA1,
    HASH_SHA256,
    HASH_SHA512,
    HASH_SHA3_256,
    HASH_BLAKE2S,
    HASH_BLAKE2B,
    HASH_HMAC_SHA1,
    HASH_HMAC_SHA256,
    HASH_AES_CMAC,
    HASH_PRIVATE_USE,
)
from .errors import HashProviderError, InputError, UnsupportedHashError


_HASHLIB_IDS: Dict[str, int] = {
    "sha1": HASH_SHA1,
    "sha256": HASH_SHA256,
    "sha512": HASH_SHA512,
    "sha3_256": HASH_SHA3_256,
    "blake2s": HASH_BLAKE2S,
    "blake2b": HASH_BLAKE2B,
}

_HMAC_IDS: Dict[str, int] = {
    "sha1": HASH_HMAC_SHA1,
    "sha256": HASH_HMAC_SHA256,
}

# Block length implied by each registered id, for parsing headerless payloads
_DIGEST_LENGTHS: Dict[int, int] = {
    HASH_SHA1: 20,
    HASH_SHA256: 32,
    HASH_SHA512: 64,
    HASH_SHA3_256: 32,
    HASH_BLAKE2S: 32,
    HASH_BLAKE2B: 64,
    HASH_HMAC_SHA1: 20,
    HASH_HMAC_SHA256: 32,
    HASH_AES_CMAC: 16,
}

_BLAKE2 = ("blake2s", "blake2b")


class HashProvider:
    """Base class for digest providers.

    Subclasses set ``hash_id``, ``name`` and ``digest_length`` and implement
    ``_compute``. Errors raised by the underlying primitive surface as
    ``HashProviderError``.
    """

    hash_id: int = HASH_PRIVATE_USE
    name: str = "abstract"
    digest_length: int = 0

    def digest(self, data: bytes) -> bytes:
        try:
            out = self._compute(bytes(data))
        except (ValueError, TypeError, OSError) as e:
            raise HashProviderError(f"{self.name} digest failed: {e}") from e
        if len(out) != self.digest_length:
            raise HashProviderError(
                f"{self.name} returned {len(out)} bytes, expected {self.digest_length}"
            )
        return out

    def _compute(self, data: bytes) -> bytes:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, hash_id=0x{self.hash_id:02x}, L={self.digest_length})"


class HashlibProvider(HashProvider):
    def __init__(self, name: str, *, digest_size: Optional[int] = None, hash_id: Optional[int] = None):
        if name not in _HASHLIB_IDS and hash_id is None:
            raise UnsupportedHashError(f"no registered hash id for {name!r}")
        if digest_size is not None and name not in _BLAKE2:
            raise InputError(f"{name} has a fixed digest size")
        self.name = name
        self._digest_size = digest_size
        try:
            self.digest_length = self._new(b"").digest_size
        except ValueError as e:
            # e.g. FIPS builds refusing an algorithm, or an unknown name
            raise HashProviderError(f"{name} unavailable: {e}") from e
        if hash_id is None:
            # A truncated BLAKE2 digest cannot share the id of the full one
            if digest_size is not None and self.digest_length != _DIGEST_LENGTHS[_HASHLIB_IDS[name]]:
                hash_id = HASH_PRIVATE_USE
            else:
                hash_id = _HASHLIB_IDS[name]
        self.hash_id = hash_id

    def _new(self, data: bytes):
        if self.name in _BLAKE2 and self._digest_size is not None:
            return getattr(hashlib, self.name)(data, digest_size=self._digest_size)
        return hashlib.new(self.name, data)

    def _compute(self, data: bytes) -> bytes:
        return self._new(data).digest()


class HmacProvider(HashProvider):
    def __init__(self, name: str, key: bytes):
        if name not in _HMAC_IDS:
            raise UnsupportedHashError(f"HMAC over {name!r} is not supported")
        if not key:
            raise InputError("HMAC provider needs a non-empty public token")
        self.name = f"hmac-{name}"
        self.hash_id = _HMAC_IDS[name]
        self.key = bytes(key)
        self._algo = name
        try:
            self.digest_length = hmac.new(self.key, b"", name).digest_size
        except ValueError as e:
            raise HashProviderError(f"{self.name} unavailable: {e}") from e

    def _compute(self, data: bytes) -> bytes:
        return hmac.new(self.key, data, self._algo).digest()


class CmacProvider(HashProvider):
    name = "aes-cmac"
    hash_id = HASH_AES_CMAC
    digest_length = AES.block_size

    def __init__(self, key: bytes):
        if len(key) not in AES.key_size:
            raise InputError(f"AES-CMAC key must be 16, 24 or 32 bytes, got {len(key)}")
        self.key = bytes(key)

    def _compute(self, data: bytes) -> bytes:
        return CMAC.new(self.key, msg=data, ciphermod=AES).digest()


def default_digest_length(hash_id: int) -> int:
    try:
        return _DIGEST_LENGTHS[hash_id]
    except KeyError:
        raise UnsupportedHashError(f"unknown hash id 0x{hash_id:02x}") from None


def provider_for_id(hash_id: int, *, key: Optional[bytes] = None) -> HashProvider:
    """Build the provider registered under ``hash_id``.

    Args:
        hash_id: One-byte identifier as stored in a package header.
        key: Public HMAC token or CMAC key for keyed ids; ignored otherwise.
    """
    for name, hid in _HASHLIB_IDS.items():
        if hid == hash_id:
            return HashlibProvider(name)
    for name, hid in _HMAC_IDS.items():
        if hid == hash_id:
            if key is None:
                raise InputError(f"hmac-{name} needs its public token")
            return HmacProvider(name, key)
    if hash_id == HASH_AES_CMAC:
        if key is None:
            raise InputError("aes-cmac needs its public key")
        return CmacProvider(key)
    raise UnsupportedHashError(f"unknown hash id 0x{hash_id:02x}")


def provider_for_name(name: str, *, key: Optional[bytes] = None) -> HashProvider:
    lname = name.lower().replace("-", "_")
    if lname in _HASHLIB_IDS:
        return provider_for_id(_HASHLIB_IDS[lname])
    if lname.startswith("hmac_") and lname[5:] in _HMAC_IDS:
        return provider_for_id(_HMAC_IDS[lname[5:]], key=key)
    if lname == "aes_cmac":
        return provider_for_id(HASH_AES_CMAC, key=key)
    raise UnsupportedHashError(f"unknown hash algorithm {name!r}")
