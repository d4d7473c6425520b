"""Shared test fixtures for didforge."""

from __future__ import annotations

import json
import os
from collections.abc import Callable
from pathlib import Path
from typing import Any

import nacl.signing
import pytest

from didforge.core.hasher import b64url_encode
from didforge.models.consortium import Configuration
from didforge.models.did import CreateDIDOptions


# ---------------------------------------------------------------------------
# DID client double
# ---------------------------------------------------------------------------


class StubDIDClient:
    """Records every ``create_did`` call and returns ``did:test:<domain>``.

    Raises ``RuntimeError`` for domains listed in ``fail_on``.
    """

    def __init__(self, fail_on: tuple[str, ...] = (), did: str | None = None) -> None:
        self.fail_on = set(fail_on)
        self.did = did
        self.calls: list[tuple[str, CreateDIDOptions]] = []
        self.closed = False

    def create_did(self, domain: str, options: CreateDIDOptions) -> dict[str, Any]:
        self.calls.append((domain, options))
        if domain in self.fail_on:
            raise RuntimeError("failed to send create sidetree request: refused")
        return {
            "id": self.did or f"did:test:{domain}",
            "publicKey": [{"id": options.key_id, "jwk": options.public_key.model_dump()}],
        }

    @property
    def domains(self) -> list[str]:
        return [domain for domain, _ in self.calls]

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> StubDIDClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


@pytest.fixture
def stub_client() -> StubDIDClient:
    """A DID client that always succeeds."""
    return StubDIDClient()


# ---------------------------------------------------------------------------
# Key and configuration files
# ---------------------------------------------------------------------------


def ed25519_jwk(kid: str = "key1") -> dict[str, str]:
    """A fresh private Ed25519 JWK."""
    signing_key = nacl.signing.SigningKey.generate()
    return {
        "kty": "OKP",
        "kid": kid,
        "d": b64url_encode(signing_key.encode()),
        "crv": "Ed25519",
        "x": b64url_encode(signing_key.verify_key.encode()),
    }


@pytest.fixture
def write_jwk(tmp_path: Path) -> Callable[..., Path]:
    """Factory fixture: write a JWK (fresh Ed25519 by default) to a file."""
    counter = iter(range(1000))

    def _factory(jwk: dict[str, Any] | str | None = None, name: str | None = None) -> Path:
        path = tmp_path / (name or f"jwk-{next(counter)}.json")
        if jwk is None:
            jwk = ed25519_jwk()
        path.write_text(jwk if isinstance(jwk, str) else json.dumps(jwk))
        return path

    return _factory


def consortium_policy() -> dict[str, Any]:
    return {
        "cache": {"max_age": 2419200},
        "num_queries": 2,
        "history_hash": "SHA256",
        "sidetree": {
            "hash_algorithm": "SHA256",
            "key_algorithm": "NotARealAlg2018",
            "max_encoded_hash_length": 100,
            "max_operation_size": 8192,
        },
    }


def member_data(domain: str, key_path: Path | str, **overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "domain": domain,
        "policy": {"cache": {"max_age": 604800}},
        "endpoints": [
            f"http://endpoints.{domain}/peer1/",
            f"http://endpoints.{domain}/peer2/",
        ],
        "privateKeyJwkPath": str(key_path),
    }
    data.update(overrides)
    return data


@pytest.fixture
def make_config_data(write_jwk: Callable[..., Path]) -> Callable[..., dict[str, Any]]:
    """Factory fixture: a configuration document with one key file per member."""

    def _factory(*domains: str, consortium: str = "consortium.net") -> dict[str, Any]:
        domains = domains or ("stakeholder.one",)
        return {
            "consortium_data": {"domain": consortium, "policy": consortium_policy()},
            "members_data": [member_data(d, write_jwk()) for d in domains],
        }

    return _factory


@pytest.fixture
def write_config_file(tmp_path: Path) -> Callable[[dict[str, Any] | str], Path]:
    """Factory fixture: write a configuration document and return its path."""

    def _factory(data: dict[str, Any] | str) -> Path:
        path = tmp_path / "consortium-config.json"
        path.write_text(data if isinstance(data, str) else json.dumps(data))
        return path

    return _factory


@pytest.fixture
def configuration(make_config_data: Callable[..., dict[str, Any]]) -> Configuration:
    """A two-member configuration with valid key files."""
    return Configuration.model_validate(
        make_config_data("stakeholder.one", "stakeholder.two")
    )


@pytest.fixture
def isolated_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Path:
    """Drop DID_METHOD_CLI_* variables and run from the test's temporary directory."""
    for name in list(os.environ):
        if name.startswith("DID_METHOD_CLI_"):
            monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path
