#!/usr/bin/env python3
"""
Canonical Encoding Tests for tbDEX DevTools

Tests JSON/base64url segment encoding, determinism and decode failures.
"""

import os
import sys
import unittest

# Add src directory to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from tbdex_devtools.encoding import (
    canonical_json,
    decode_to_bytes,
    decode_to_object,
    encode_bytes,
    encode_object,
)
from tbdex_devtools.errors import ErrorCodes, MalformedTokenError


class TestEncodeObject(unittest.TestCase):
    """Test object encoding"""

    def test_known_header_encoding(self):
        """Test that a header encodes to sorted, compact JSON"""
        encoded = encode_object({"kid": "k", "alg": "ES256K"})
        self.assertEqual(decode_to_bytes(encoded), b'{"alg":"ES256K","kid":"k"}')

    def test_no_padding(self):
        """Test that encoded segments never carry padding"""
        for value in [{}, {"a": 1}, {"ab": "cd"}, {"abc": [1, 2, 3]}]:
            self.assertNotIn("=", encode_object(value))

    def test_url_safe_alphabet(self):
        """Test that encoded segments use the URL-safe alphabet"""
        encoded = encode_object({"data": "\xff\xfe>>>???"})
        self.assertNotIn("+", encoded)
        self.assertNotIn("/", encoded)

    def test_deterministic(self):
        """Test that equal values encode to equal strings regardless of key order"""
        first = {"iss": "did:example:alice", "sub": "did:example:bob", "nested": {"b": 2, "a": 1}}
        second = {"nested": {"a": 1, "b": 2}, "sub": "did:example:bob", "iss": "did:example:alice"}

        self.assertEqual(encode_object(first), encode_object(first))
        self.assertEqual(encode_object(first), encode_object(second))

    def test_round_trip(self):
        """Test decode_to_object inverts encode_object"""
        values = [
            {"beep": "boop"},
            {"vc": {"type": ["VerifiableCredential", "YoloCredential"], "n": 1.5, "ok": True, "none": None}},
            {"unicode": "Ephraim Bartholomew Winthrop é中"},
            [1, "two", {"three": 3}],
            "plain string",
        ]
        for value in values:
            self.assertEqual(decode_to_object(encode_object(value)), value)

    def test_canonical_json(self):
        """Test canonical JSON text"""
        self.assertEqual(canonical_json({"b": 1, "a": [True, None]}), '{"a":[true,null],"b":1}')


class TestEncodeBytes(unittest.TestCase):
    """Test raw byte encoding"""

    def test_bytes_round_trip(self):
        """Test that raw bytes survive encoding"""
        for data in [b"", b"\x00", b"\x00\x01", b"\xfb\xff\xfe", bytes(range(256))]:
            self.assertEqual(decode_to_bytes(encode_bytes(data)), data)

    def test_known_value(self):
        """Test a known base64url value"""
        self.assertEqual(encode_bytes(b"\xfb\xff"), "-_8")


class TestDecodeFailures(unittest.TestCase):
    """Test malformed segment handling"""

    def test_invalid_alphabet(self):
        """Test rejection of characters outside base64url"""
        for text in ["abc+", "abc/", "ab=c", "a b", "abc="]:
            with self.assertRaises(MalformedTokenError) as context:
                decode_to_bytes(text)
            self.assertEqual(context.exception.code, ErrorCodes.MALFORMED_TOKEN)

    def test_invalid_length(self):
        """Test rejection of impossible segment lengths"""
        with self.assertRaises(MalformedTokenError):
            decode_to_bytes("abcde")

    def test_not_json(self):
        """Test rejection of valid base64url that is not JSON"""
        with self.assertRaises(MalformedTokenError):
            decode_to_object(encode_bytes(b"definitely not json"))

    def test_not_utf8(self):
        """Test rejection of bytes that are not UTF-8"""
        with self.assertRaises(MalformedTokenError):
            decode_to_object(encode_bytes(b"\xff\xfe\xfd"))

    def test_decode_error_is_chained(self):
        """Test that the underlying decode error is kept as the cause"""
        with self.assertRaises(MalformedTokenError) as context:
            decode_to_object(encode_bytes(b"{not json"))
        self.assertIsInstance(context.exception.__cause__, ValueError)

    def test_non_string_input(self):
        """Test rejection of non-string input"""
        with self.assertRaises(MalformedTokenError):
            decode_to_bytes(None)


if __name__ == "__main__":
    unittest.main()
