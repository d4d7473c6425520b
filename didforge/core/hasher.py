"""Canonical serialization and hashing helpers for Sidetree requests.

Sidetree encodes every hash as a multihash (code, length, digest) in
unpadded base64url, computed over canonical JSON bytes.
"""

from __future__ import annotations

import base64
import hashlib
import json
from typing import Any

# Multihash codes by the algorithm names used in consortium policy.
MULTIHASH_CODES: dict[str, int] = {
    "SHA256": 0x12,
    "SHA512": 0x13,
}

_HASHLIB_NAMES: dict[str, str] = {
    "SHA256": "sha256",
    "SHA512": "sha512",
}


class UnsupportedHashAlgorithmError(ValueError):
    """Raised for a hash algorithm name with no multihash mapping."""


def is_supported_hash_algorithm(name: str) -> bool:
    """Return ``True`` if *name* is a recognized hash algorithm identifier."""
    return name in MULTIHASH_CODES


def canonical_json_bytes(obj: Any) -> bytes:
    """Produce canonical JSON bytes — deterministic, sorted, compact."""
    return json.dumps(
        obj, sort_keys=True, separators=(",", ":"), ensure_ascii=True
    ).encode("utf-8")


def b64url_encode(data: bytes) -> str:
    """Unpadded base64url, as used by JWK and Sidetree."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def b64url_decode(text: str) -> bytes:
    """Decode unpadded (or padded) base64url.

    Raises ``ValueError`` on characters outside the base64url alphabet.
    """
    padded = text + "=" * (-len(text) % 4)
    return base64.b64decode(padded, altchars=b"-_", validate=True)


def multihash(data: bytes, algorithm: str) -> bytes:
    """Return the multihash of *data* under *algorithm* (e.g. ``"SHA256"``)."""
    if not is_supported_hash_algorithm(algorithm):
        raise UnsupportedHashAlgorithmError(
            f"unsupported hash algorithm {algorithm!r}"
        )
    digest = hashlib.new(_HASHLIB_NAMES[algorithm], data).digest()
    return bytes([MULTIHASH_CODES[algorithm], len(digest)]) + digest


def encoded_multihash(obj: Any, algorithm: str) -> str:
    """base64url multihash of the canonical JSON of *obj*."""
    return b64url_encode(multihash(canonical_json_bytes(obj), algorithm))
