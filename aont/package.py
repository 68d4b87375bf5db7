from __future__ import annotations

"""Rivest's package transform.

Encoding masks every message block with a keystream derived from a fresh
random seed, then hides the seed in a trailing key block:

    m'_i = m_i XOR H(K0 XOR i)             for i = 1..s
    c_i  = H(m'_i XOR i)
    K'   = K0 XOR c_1 XOR ... XOR c_s

Recovering ``K0`` needs every ``c_i`` and therefore every pseudo-message block,
so a package missing any block (or holding one out of place) reveals nothing
about the message. The transform is keyless and carries no integrity check:
altered block contents decode to garbage without raising.
"""

import logging
import os
from dataclasses import dataclass
from typing import Callable, Sequence, Tuple

from .blocks import block_count, encode_index, join, max_blocks, split, xor_bytes, xor_sum
from .errors import BlockCountOverflow, InputError, MalformedBlock, MissingBlocks, UnsupportedHashError
from .hashutil import HashProvider
from .prng import Keystream


log = logging.getLogger(__name__)

RandomSource = Callable[[int], bytes]


@dataclass(frozen=True)
class EncodedPackage:
    blocks: Tuple[bytes, ...]
    original_length: int
    hash_id: int

    def __post_init__(self):
        object.__setattr__(self, "blocks", tuple(bytes(b) for b in self.blocks))

    @property
    def block_count(self) -> int:
        return len(self.blocks)

    @property
    def message_blocks(self) -> Tuple[bytes, ...]:
        return self.blocks[:-1]

    @property
    def key_block(self) -> bytes:
        if not self.blocks:
            raise MissingBlocks(1, 0)
        return self.blocks[-1]


def checksum(block: bytes, index: int, provider: HashProvider) -> bytes:
    """Index-bound checksum of pseudo-message block ``index``."""
    return provider.digest(xor_bytes(block, encode_index(index, len(block))))


def _checksum_sum(blocks: Sequence[bytes], provider: HashProvider) -> bytes:
    return xor_sum(
        (checksum(blk, i, provider) for i, blk in enumerate(blocks, start=1)),
        provider.digest_length,
    )


def encode(message: bytes, provider: HashProvider, random_source: RandomSource = os.urandom) -> EncodedPackage:
    """Apply the package transform to ``message``.

    Args:
        message: Bytes to transform; may be empty.
        provider: Digest provider; its length L sets the block size.
        random_source: Callable returning ``n`` cryptographically secure
            random bytes. Called once per encode to draw the seed.

    Returns:
        An ``EncodedPackage`` of ``ceil(len(message) / L) + 1`` blocks.
    """
    length = provider.digest_length
    blocks, original_length = split(message, length)

    seed = random_source(length)
    if len(seed) != length:
        raise InputError(f"random source returned {len(seed)} bytes, expected {length}")

    stream = Keystream(provider, seed)
    pseudo = [xor_bytes(m, k) for m, k in zip(blocks, stream.blocks(len(blocks)))]
    key_block = xor_bytes(seed, _checksum_sum(pseudo, provider))

    log.debug("encoded %d bytes into %d+1 blocks with %s", original_length, len(pseudo), provider.name)
    return EncodedPackage(tuple(pseudo) + (key_block,), original_length, provider.hash_id)


def _check_package(package: EncodedPackage, provider: HashProvider) -> int:
    if package.hash_id != provider.hash_id:
        raise UnsupportedHashError(
            f"package uses hash id 0x{package.hash_id:02x}, provider is {provider.name} (0x{provider.hash_id:02x})"
        )
    length = provider.digest_length
    if package.original_length < 0:
        raise InputError(f"negative original length {package.original_length}")
    count = block_count(package.original_length, length)
    if count > max_blocks(length):
        raise BlockCountOverflow(f"{count} blocks exceed the index limit of {max_blocks(length)}")
    if package.block_count != count + 1:
        raise MissingBlocks(count + 1, package.block_count)
    for pos, blk in enumerate(package.blocks):
        if len(blk) != length:
            raise MalformedBlock(f"block {pos} is {len(blk)} bytes, expected {length}")
    return count


def recover_seed(package: EncodedPackage, provider: HashProvider) -> bytes:
    """Return the seed K0 hidden in a complete package."""
    _check_package(package, provider)
    return xor_bytes(package.key_block, _checksum_sum(package.message_blocks, provider))


def decode(package: EncodedPackage, provider: HashProvider) -> bytes:
    """Invert ``encode``. Requires every block, in order.

    Raises:
        MissingBlocks: the block count does not match the original length.
        MalformedBlock: a block is not exactly L bytes long.
        UnsupportedHashError: ``provider`` is not the package's hash.
    """
    seed = recover_seed(package, provider)
    pseudo = package.message_blocks
    stream = Keystream(provider, seed)
    blocks = [xor_bytes(m, k) for m, k in zip(pseudo, stream.blocks(len(pseudo)))]
    log.debug("decoded %d+1 blocks into %d bytes with %s", len(pseudo), package.original_length, provider.name)
    return join(blocks, package.original_length)
