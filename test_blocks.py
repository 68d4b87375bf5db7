from __future__ import annotations

import unittest

from aont.blocks import block_count, encode_index, join, max_blocks, split, xor_bytes, xor_sum
from aont.errors import BlockCountOverflow, InputError, MalformedBlock


class SplitJoinTests(unittest.TestCase):
    def test_pads_only_final_block(self):
        blocks, n = split(b"0123456789", 4)
        self.assertEqual(n, 10)
        self.assertEqual(blocks, [b"0123", b"4567", b"89\x00\x00"])

    def test_exact_multiple_has_no_padding(self):
        blocks, n = split(b"abcdefgh", 4)
        self.assertEqual(blocks, [b"abcd", b"efgh"])
        self.assertEqual(n, 8)

    def test_empty_message(self):
        blocks, n = split(b"", 20)
        self.assertEqual(blocks, [])
        self.assertEqual(n, 0)

    def test_join_trims_padding(self):
        blocks, n = split(b"hello world", 8)
        self.assertEqual(join(blocks, n), b"hello world")
        self.assertEqual(join([], 0), b"")

    def test_join_rejects_length_beyond_blocks(self):
        with self.assertRaises(InputError):
            join([b"abcd"], 5)

    def test_block_count(self):
        self.assertEqual(block_count(0, 20), 0)
        self.assertEqual(block_count(1, 20), 1)
        self.assertEqual(block_count(20, 20), 1)
        self.assertEqual(block_count(21, 20), 2)

    def test_split_rejects_too_many_blocks(self):
        # One-byte blocks can only index 255 of them
        split(bytes(255), 1)
        with self.assertRaises(BlockCountOverflow):
            split(bytes(256), 1)

    def test_split_rejects_bad_length(self):
        with self.assertRaises(InputError):
            split(b"abc", 0)


class IndexEncodingTests(unittest.TestCase):
    def test_wide_block_is_zero_extended(self):
        self.assertEqual(encode_index(1, 20), bytes(19) + b"\x01")
        self.assertEqual(encode_index(0x01020304, 8), b"\x00\x00\x00\x00\x01\x02\x03\x04")

    def test_four_byte_block_is_exact(self):
        self.assertEqual(encode_index(258, 4), b"\x00\x00\x01\x02")

    def test_narrow_block_keeps_low_bytes(self):
        self.assertEqual(encode_index(0x0102, 2), b"\x01\x02")

    def test_index_range(self):
        with self.assertRaises(BlockCountOverflow):
            encode_index(0, 20)
        with self.assertRaises(BlockCountOverflow):
            encode_index(256, 1)
        with self.assertRaises(BlockCountOverflow):
            encode_index(1 << 32, 32)
        self.assertEqual(max_blocks(1), 255)
        self.assertEqual(max_blocks(2), 65535)
        self.assertEqual(max_blocks(20), (1 << 32) - 1)


class XorTests(unittest.TestCase):
    def test_xor_bytes(self):
        self.assertEqual(xor_bytes(b"\x0f\xf0", b"\xff\xff"), b"\xf0\x0f")
        self.assertEqual(xor_bytes(b"", b""), b"")

    def test_xor_bytes_length_mismatch(self):
        with self.assertRaises(MalformedBlock):
            xor_bytes(b"ab", b"abc")

    def test_xor_sum_identity_and_fold(self):
        self.assertEqual(xor_sum([], 4), bytes(4))
        self.assertEqual(xor_sum([b"\x01\x00", b"\x03\x00", b"\x00\x05"], 2), b"\x02\x05")
        with self.assertRaises(MalformedBlock):
            xor_sum([b"\x01"], 2)


if __name__ == "__main__":
    unittest.main()
