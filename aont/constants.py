import struct


# Wire format version. Version 1 combines per-block checksums by XOR
# (Rivest's construction); hash ids below are scoped to this version.
FORMAT_VERSION = 1

# Optional package header: original length u64, hash id u8 (big endian)
HEADER_STRUCT = struct.Struct(">QB")
HEADER_SIZE = HEADER_STRUCT.size
MAX_MESSAGE_LENGTH = (1 << 64) - 1

# Block indices are 1-based u32 values in network order
INDEX_WIDTH = 4
MAX_INDEX = (1 << (8 * INDEX_WIDTH)) - 1


# Hash ids (plain digests)
HASH_SHA1 = 0x01
HASH_SHA256 = 0x02
HASH_SHA512 = 0x03
HASH_SHA3_256 = 0x04
HASH_BLAKE2S = 0x05
HASH_BLAKE2B = 0x06

# Keyed constructions; the key is public and travels outside the header
HASH_HMAC_SHA1 = 0x41
HASH_HMAC_SHA256 = 0x42
HASH_AES_CMAC = 0x81

# Reserved for ad hoc providers (test doubles, experiments)
HASH_PRIVATE_USE = 0xF0
