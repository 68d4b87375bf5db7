"""
aont — Rivest's package transform (an all-or-nothing transform).

A message is split into digest-sized blocks, masked with a keystream derived
from a random seed, and followed by a key block that hides the seed behind the
XOR of every block's checksum. All blocks are needed to decode; any proper
subset is useless.

- Digest providers: hashlib digests, HMAC over a public token, AES-CMAC over a
  public key (aont.hashutil).
- Encode/decode of in-memory messages (aont.package).
- Optional 9-byte header and byte serialization (aont.wire).

The transform has no secret key and no integrity check. It is a building block
for chaffing-and-winnowing style schemes, not encryption.
"""

from .errors import (
    AontError,
    InputError,
    BlockCountOverflow,
    MissingBlocks,
    MalformedBlock,
    HashProviderError,
    UnsupportedHashError,
)
from .hashutil import HashProvider, HashlibProvider, HmacProvider, CmacProvider, provider_for_id, provider_for_name
from .package import EncodedPackage, encode, decode

__version__ = "0.1"

__all__ = [
    "constants",
    "blocks",
    "prng",
    "package",
    "wire",
    "hashutil",
    "encode",
    "decode",
    "EncodedPackage",
    "HashProvider",
    "HashlibProvider",
    "HmacProvider",
    "CmacProvider",
    "provider_for_id",
    "provider_for_name",
    "AontError",
    "InputError",
    "BlockCountOverflow",
    "MissingBlocks",
    "MalformedBlock",
    "HashProviderError",
    "UnsupportedHashError",
]
