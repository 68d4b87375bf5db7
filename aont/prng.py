from __future__ import annotations

from typing import Iterator

from .blocks import encode_index, xor_bytes
from .errors import MalformedBlock
from .hashutil import HashProvider


def generate(seed: bytes, index: int, provider: HashProvider) -> bytes:
    """Mask block ``index`` (1-based): H(seed XOR index)."""
    return provider.digest(xor_bytes(seed, encode_index(index, len(seed))))


class Keystream:
    """Hash-derived mask blocks for one seed."""

    def __init__(self, provider: HashProvider, seed: bytes):
        if len(seed) != provider.digest_length:
            raise MalformedBlock(f"seed must be {provider.digest_length} bytes, got {len(seed)}")
        self.provider = provider
        self.seed = bytes(seed)

    def block(self, index: int) -> bytes:
        return generate(self.seed, index, self.provider)

    def blocks(self, count: int) -> Iterator[bytes]:
        for i in range(1, count + 1):
            yield self.block(i)
