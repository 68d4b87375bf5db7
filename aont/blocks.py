from __future__ import annotations

from typing import Iterable, List, Tuple

from .constants import INDEX_WIDTH, MAX_INDEX, MAX_MESSAGE_LENGTH
from .errors import BlockCountOverflow, InputError, MalformedBlock


def xor_bytes(a: bytes, b: bytes) -> bytes:
    if len(a) != len(b):
        raise MalformedBlock(f"cannot combine blocks of {len(a)} and {len(b)} bytes")
    return (int.from_bytes(a, "big") ^ int.from_bytes(b, "big")).to_bytes(len(a), "big")


def xor_sum(blocks: Iterable[bytes], length: int) -> bytes:
    """XOR-fold ``blocks``; the empty sum is the all-zero block."""
    acc = 0
    for blk in blocks:
        if len(blk) != length:
            raise MalformedBlock(f"expected a {length}-byte block, got {len(blk)}")
        acc ^= int.from_bytes(blk, "big")
    return acc.to_bytes(length, "big")


def max_blocks(length: int) -> int:
    # Indices narrower than INDEX_WIDTH lose their high bytes when fitted to
    # the block, so the usable range shrinks with them.
    if length < INDEX_WIDTH:
        return min(MAX_INDEX, (1 << (8 * length)) - 1)
    return MAX_INDEX


def encode_index(index: int, length: int) -> bytes:
    """Return the 1-based ``index`` as a big-endian u32 fitted to ``length`` bytes.

    Wider blocks are zero-extended on the left; narrower blocks keep the
    low-order bytes.
    """
    if not 1 <= index <= max_blocks(length):
        raise BlockCountOverflow(f"block index {index} not representable in a {length}-byte block")
    raw = index.to_bytes(INDEX_WIDTH, "big")
    if length >= INDEX_WIDTH:
        return bytes(length - INDEX_WIDTH) + raw
    return raw[INDEX_WIDTH - length:]


def block_count(original_length: int, length: int) -> int:
    return -(-original_length // length)


def split(message: bytes, length: int) -> Tuple[List[bytes], int]:
    """Cut ``message`` into ``length``-byte blocks, zero-padding the last one.

    Returns the blocks and the original message length.
    """
    if length <= 0:
        raise InputError(f"block length must be positive, got {length}")
    n = len(message)
    if n > MAX_MESSAGE_LENGTH:
        raise InputError(f"message of {n} bytes does not fit the 8-byte length field")
    count = block_count(n, length)
    if count > max_blocks(length):
        raise BlockCountOverflow(f"{count} blocks exceed the index limit of {max_blocks(length)}")
    view = memoryview(message)
    blocks = [bytes(view[off:off + length]) for off in range(0, n, length)]
    if blocks and len(blocks[-1]) < length:
        blocks[-1] = blocks[-1] + bytes(length - len(blocks[-1]))
    return blocks, n


def join(blocks: Iterable[bytes], original_length: int) -> bytes:
    data = b"".join(blocks)
    if original_length < 0 or original_length > len(data):
        raise InputError(f"original length {original_length} exceeds the {len(data)} bytes available")
    return data[:original_length]
