"""Unit tests for canonical JSON, base64url and multihash helpers."""

from __future__ import annotations

import hashlib

import pytest

from didforge.core.hasher import (
    UnsupportedHashAlgorithmError,
    b64url_decode,
    b64url_encode,
    canonical_json_bytes,
    encoded_multihash,
    is_supported_hash_algorithm,
    multihash,
)


class TestCanonicalJson:
    def test_sorted_and_compact(self):
        assert canonical_json_bytes({"b": 1, "a": [1, 2]}) == b'{"a":[1,2],"b":1}'

    def test_key_order_does_not_matter(self):
        assert canonical_json_bytes({"x": 1, "y": 2}) == canonical_json_bytes({"y": 2, "x": 1})


class TestBase64Url:
    def test_unpadded(self):
        assert b64url_encode(b"\xfb\xff") == "-_8"

    def test_decode_accepts_unpadded(self):
        assert b64url_decode("-_8") == b"\xfb\xff"

    def test_decode_rejects_garbage(self):
        with pytest.raises(ValueError):
            b64url_decode("not base64!")


class TestMultihash:
    def test_sha256_prefix(self):
        value = multihash(b"abc", "SHA256")
        assert value[:2] == bytes([0x12, 32])
        assert value[2:] == hashlib.sha256(b"abc").digest()

    def test_sha512_prefix(self):
        value = multihash(b"abc", "SHA512")
        assert value[:2] == bytes([0x13, 64])

    def test_unsupported_algorithm(self):
        with pytest.raises(UnsupportedHashAlgorithmError):
            multihash(b"abc", "MD5")

    def test_supported_names(self):
        assert is_supported_hash_algorithm("SHA256")
        assert not is_supported_hash_algorithm("sha256")

    def test_encoded_multihash_length(self):
        # 34 bytes of SHA-256 multihash encode to 46 base64url characters
        assert len(encoded_multihash({"a": 1}, "SHA256")) == 46
