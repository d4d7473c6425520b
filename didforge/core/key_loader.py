"""Key loader — private JWK artifacts into verifiable key material.

Supported keys
--------------
- ``OKP`` / ``Ed25519``: loaded with PyNaCl (libsodium).
- ``EC`` / ``P-256``: loaded with ``cryptography``.

The public key is always derived from the private scalar ``d``.  When the
JWK also declares ``x`` (and ``y``), they must match the derived key,
otherwise the artifact is rejected.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import nacl.exceptions
import nacl.signing
from cryptography.hazmat.primitives.asymmetric import ec

from didforge.core.errors import KeyFormatError, KeyReadError
from didforge.core.hasher import b64url_decode, b64url_encode
from didforge.models.keys import PublicJWK

logger = logging.getLogger(__name__)

SUPPORTED_CURVES: dict[str, set[str]] = {
    "OKP": {"Ed25519"},
    "EC": {"P-256"},
}

_P256_COORDINATE_SIZE = 32


class KeyMaterial:
    """A loaded private key and the public JWK derived from it.

    Owned by the caller that loaded it.  Never serialized: only
    :meth:`public_jwk` leaves this object.
    """

    __slots__ = ("_private_key", "_public", "key_id")

    def __init__(self, private_key: Any, public: PublicJWK, key_id: str) -> None:
        self._private_key = private_key
        self._public = public
        self.key_id = key_id

    @property
    def kty(self) -> str:
        return self._public.kty

    @property
    def crv(self) -> str:
        return self._public.crv

    def public_jwk(self) -> PublicJWK:
        """Return the public half of the key."""
        return self._public

    def __repr__(self) -> str:
        return f"KeyMaterial(kty={self.kty!r}, crv={self.crv!r}, kid={self.key_id!r})"


def load_private_key_jwk(path: Path | str) -> KeyMaterial:
    """Read and decode the private JWK at *path*.

    Raises
    ------
    KeyReadError
        If the file cannot be read.
    KeyFormatError
        If the contents are not a supported, self-consistent private JWK.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise KeyReadError(path, exc.strerror or str(exc)) from exc

    try:
        jwk = json.loads(raw)
    except (json.JSONDecodeError, UnicodeDecodeError) as exc:
        raise KeyFormatError(path, f"invalid JSON: {exc}") from exc

    if not isinstance(jwk, dict):
        raise KeyFormatError(path, "expected a JSON object")

    material = _decode_jwk(path, jwk)
    logger.debug("Loaded %s/%s key %s from %s", material.kty, material.crv,
                 material.key_id, path)
    return material


# ---------------------------------------------------------------------------
# Decoding
# ---------------------------------------------------------------------------


def _decode_jwk(path: Path, jwk: dict[str, Any]) -> KeyMaterial:
    kty = _required_str(path, jwk, "kty")
    crv = _required_str(path, jwk, "crv")
    if crv not in SUPPORTED_CURVES.get(kty, set()):
        raise KeyFormatError(path, f"unsupported key type/curve {kty}/{crv}")

    d = _decode_param(path, jwk, "d")
    key_id = jwk.get("kid")
    if key_id is None:
        key_id = ""
    elif not isinstance(key_id, str):
        raise KeyFormatError(path, "'kid' must be a string")

    if kty == "OKP":
        private_key, public = _ed25519_from_seed(path, d, key_id)
    else:
        private_key, public = _p256_from_scalar(path, d, key_id)

    _check_declared(path, jwk, public, "x")
    if public.y is not None:
        _check_declared(path, jwk, public, "y")
    return KeyMaterial(private_key, public, key_id)


def _ed25519_from_seed(
    path: Path, seed: bytes, key_id: str
) -> tuple[nacl.signing.SigningKey, PublicJWK]:
    try:
        signing_key = nacl.signing.SigningKey(seed)
    except (nacl.exceptions.ValueError, nacl.exceptions.TypeError) as exc:
        raise KeyFormatError(path, f"invalid Ed25519 private key: {exc}") from exc
    public = PublicJWK(
        kty="OKP",
        crv="Ed25519",
        x=b64url_encode(signing_key.verify_key.encode()),
        kid=key_id or None,
    )
    return signing_key, public


def _p256_from_scalar(
    path: Path, scalar: bytes, key_id: str
) -> tuple[ec.EllipticCurvePrivateKey, PublicJWK]:
    if len(scalar) != _P256_COORDINATE_SIZE:
        raise KeyFormatError(path, "invalid P-256 private key length")
    try:
        private_key = ec.derive_private_key(
            int.from_bytes(scalar, "big"), ec.SECP256R1()
        )
    except ValueError as exc:
        raise KeyFormatError(path, f"invalid P-256 private key: {exc}") from exc
    numbers = private_key.public_key().public_numbers()
    public = PublicJWK(
        kty="EC",
        crv="P-256",
        x=b64url_encode(numbers.x.to_bytes(_P256_COORDINATE_SIZE, "big")),
        y=b64url_encode(numbers.y.to_bytes(_P256_COORDINATE_SIZE, "big")),
        kid=key_id or None,
    )
    return private_key, public


# ---------------------------------------------------------------------------
# Field helpers
# ---------------------------------------------------------------------------


def _required_str(path: Path, jwk: dict[str, Any], name: str) -> str:
    value = jwk.get(name)
    if not isinstance(value, str) or not value:
        raise KeyFormatError(path, f"missing required field {name!r}")
    return value


def _decode_param(path: Path, jwk: dict[str, Any], name: str) -> bytes:
    value = _required_str(path, jwk, name)
    try:
        return b64url_decode(value)
    except ValueError as exc:
        raise KeyFormatError(path, f"field {name!r} is not base64url") from exc


def _check_declared(
    path: Path, jwk: dict[str, Any], public: PublicJWK, name: str
) -> None:
    """A declared public coordinate must match the one derived from ``d``."""
    if name not in jwk:
        return
    declared = _decode_param(path, jwk, name)
    if declared != b64url_decode(getattr(public, name)):
        raise KeyFormatError(path, f"field {name!r} does not match private key")
