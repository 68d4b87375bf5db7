from __future__ import annotations

import struct
from typing import Optional, Tuple

from .constants import HEADER_SIZE, HEADER_STRUCT, MAX_MESSAGE_LENGTH
from .errors import InputError, MalformedBlock, UnsupportedHashError
from .hashutil import HashProvider, default_digest_length
from .package import EncodedPackage


# Layout (big endian): original_length u64, hash_id u8, then the s+1 blocks
# back to back. Without the header, both fields travel out of band.


def pack_header(original_length: int, hash_id: int) -> bytes:
    if not 0 <= original_length <= MAX_MESSAGE_LENGTH:
        raise InputError(f"original length {original_length} does not fit the header")
    try:
        return HEADER_STRUCT.pack(original_length, hash_id)
    except struct.error as e:
        raise InputError(f"bad header field: {e}") from e


def unpack_header(data: bytes) -> Tuple[int, int]:
    if len(data) < HEADER_SIZE:
        raise InputError(f"header needs {HEADER_SIZE} bytes, got {len(data)}")
    original_length, hash_id = HEADER_STRUCT.unpack_from(data)
    return original_length, hash_id


def to_bytes(package: EncodedPackage, *, header: bool = True) -> bytes:
    body = b"".join(package.blocks)
    if not header:
        return body
    return pack_header(package.original_length, package.hash_id) + body


def from_bytes(
    data: bytes,
    *,
    provider: Optional[HashProvider] = None,
    original_length: Optional[int] = None,
    hash_id: Optional[int] = None,
) -> EncodedPackage:
    """Parse a serialized package.

    With neither ``original_length`` nor ``hash_id`` given, ``data`` must start
    with a header. Otherwise both must be given and ``data`` is the bare block
    sequence. The block length comes from ``provider`` when supplied, else from
    the registered length for the hash id.
    """
    if original_length is None and hash_id is None:
        original_length, hash_id = unpack_header(data)
        body = memoryview(data)[HEADER_SIZE:]
    elif original_length is None or hash_id is None:
        raise InputError("headerless packages need both original_length and hash_id")
    else:
        body = memoryview(data)

    if provider is not None:
        if provider.hash_id != hash_id:
            raise UnsupportedHashError(
                f"payload uses hash id 0x{hash_id:02x}, provider is {provider.name} (0x{provider.hash_id:02x})"
            )
        length = provider.digest_length
    else:
        length = default_digest_length(hash_id)

    if len(body) % length:
        raise MalformedBlock(f"{len(body)} payload bytes is not a whole number of {length}-byte blocks")
    blocks = tuple(bytes(body[off:off + length]) for off in range(0, len(body), length))
    return EncodedPackage(blocks, original_length, hash_id)
