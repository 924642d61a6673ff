#! /usr/bin/env python3

"""Tests for decomposing device responses"""

import unittest

from lisklib.devices.ledger_lisk.response import decompose_response, read_u16_field
from lisklib.errors import MalformedResponseError


class TestDecomposeResponse(unittest.TestCase):
    def test_fields(self):
        resp = bytes.fromhex("03" "0100aa" "0000" "0300616263")
        self.assertEqual(decompose_response(resp), [b"\xaa", b"", b"abc"])

    def test_no_fields(self):
        self.assertEqual(decompose_response(b"\x00"), [])

    def test_trailing_bytes_ignored(self):
        self.assertEqual(decompose_response(bytes.fromhex("010100aaffff")), [b"\xaa"])

    def test_checksum_response(self):
        fields = decompose_response(bytes.fromhex("020200b129" "02000000"))
        self.assertEqual([read_u16_field(f) for f in fields], [0x29b1, 0])

    def test_long_field(self):
        data = bytes(range(256)) * 2
        resp = b"\x01" + len(data).to_bytes(2, "little") + data
        self.assertEqual(decompose_response(resp), [data])

    def test_malformed(self):
        for resp in ["", "01", "0105", "010500aabb", "020100aa0200bb", "ff"]:
            with self.subTest(resp=resp):
                with self.assertRaises(MalformedResponseError):
                    decompose_response(bytes.fromhex(resp))

    def test_short_u16_field(self):
        with self.assertRaises(MalformedResponseError):
            read_u16_field(b"\x01")

if __name__ == "__main__":
    unittest.main()
