"""DID client bridge — the anchoring service behind a one-method protocol.

Bridge boundary
---------------
The pipeline depends only on ``DIDClient``: any object with
``create_did(domain, options) -> dict`` can anchor DIDs, so tests
substitute a stub for the network client.

``SidetreeClient`` is the production backend.  It wraps the stakeholder's
public key in a Sidetree ``create`` operation, POSTs it to the Sidetree
service over ``httpx`` and returns the DID document from the response.  It
never retries; retry policy, if any, belongs to the caller of the CLI.
"""

from __future__ import annotations

import json
import logging
import ssl
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import httpx

from didforge.core.hasher import (
    b64url_encode,
    canonical_json_bytes,
    encoded_multihash,
    is_supported_hash_algorithm,
)
from didforge.models.did import CreateDIDOptions

logger = logging.getLogger(__name__)

PUBLIC_KEY_TYPE = "JwsVerificationKey2020"
PUBLIC_KEY_PURPOSES = ["general", "auth"]


# ---------------------------------------------------------------------------
# Protocol
# ---------------------------------------------------------------------------


@runtime_checkable
class DIDClient(Protocol):
    """Capability to anchor a DID for a domain.

    Implementations raise on any failure; the pipeline treats every
    exception as fatal for the run.
    """

    def create_did(self, domain: str, options: CreateDIDOptions) -> dict[str, Any]:
        """Anchor a DID for *domain* and return its DID document."""
        ...


# ---------------------------------------------------------------------------
# Sidetree backend
# ---------------------------------------------------------------------------


class SidetreeClientError(RuntimeError):
    """Raised when a Sidetree create operation cannot be completed."""


def build_tls_context(
    use_system_cert_pool: bool, ca_certs: Sequence[Path] = ()
) -> ssl.SSLContext:
    """Build the TLS context for talking to the Sidetree service.

    With *use_system_cert_pool* the platform trust store is loaded; the
    certificates in *ca_certs* are always added on top.
    """
    if use_system_cert_pool:
        context = ssl.create_default_context()
    else:
        context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    for ca_cert in ca_certs:
        context.load_verify_locations(cafile=str(ca_cert))
    return context


def build_create_request(options: CreateDIDOptions) -> dict[str, Any]:
    """Build a Sidetree ``create`` operation for the public key in *options*.

    The public key document is the only patch; its multihash serves as both
    update and recovery commitment.
    """
    algorithm = options.hash_algorithm
    if not is_supported_hash_algorithm(algorithm):
        raise SidetreeClientError(f"unsupported hash algorithm {algorithm!r}")

    public_jwk = options.public_key.model_dump(exclude_none=True, exclude={"kid"})
    document = {
        "publicKeys": [
            {
                "id": options.key_id,
                "type": PUBLIC_KEY_TYPE,
                "purposes": list(PUBLIC_KEY_PURPOSES),
                "jwk": public_jwk,
            }
        ]
    }
    commitment = encoded_multihash(public_jwk, algorithm)
    delta = {
        "patches": [{"action": "replace", "document": document}],
        "updateCommitment": commitment,
    }
    suffix_data = {
        "deltaHash": encoded_multihash(delta, algorithm),
        "recoveryCommitment": commitment,
    }
    for name, value in (("commitment", commitment),
                        ("deltaHash", suffix_data["deltaHash"])):
        if len(value) > options.max_encoded_hash_length:
            raise SidetreeClientError(
                f"encoded {name} is {len(value)} characters, "
                f"limit is {options.max_encoded_hash_length}"
            )

    return {
        "type": "create",
        "suffixData": b64url_encode(canonical_json_bytes(suffix_data)),
        "delta": b64url_encode(canonical_json_bytes(delta)),
    }


class SidetreeClient:
    """``DIDClient`` backed by a Sidetree REST endpoint.

    Parameters
    ----------
    url:
        The Sidetree operations endpoint create requests are POSTed to.
    verify:
        TLS verification passed to ``httpx`` — ``True``, ``False`` or an
        ``ssl.SSLContext`` from :func:`build_tls_context`.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional ``httpx`` transport (``httpx.MockTransport`` in tests).
    """

    def __init__(
        self,
        url: str,
        *,
        verify: ssl.SSLContext | bool = True,
        timeout: float = 10.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._url = url
        self._http = httpx.Client(verify=verify, timeout=timeout, transport=transport)

    @property
    def url(self) -> str:
        return self._url

    def create_did(self, domain: str, options: CreateDIDOptions) -> dict[str, Any]:
        """POST a create operation for *domain* and return the DID document."""
        body = canonical_json_bytes(build_create_request(options))
        if len(body) > options.max_operation_size:
            raise SidetreeClientError(
                f"create operation is {len(body)} bytes, "
                f"limit is {options.max_operation_size}"
            )

        logger.debug("POST %s create operation for %s (%d bytes)",
                     self._url, domain, len(body))
        try:
            response = self._http.post(
                self._url,
                content=body,
                headers={"Content-Type": "application/json"},
            )
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise SidetreeClientError(
                f"failed to send create sidetree request: "
                f"HTTP {exc.response.status_code}: {exc.response.text.strip()}"
            ) from exc
        except httpx.HTTPError as exc:
            raise SidetreeClientError(
                f"failed to send create sidetree request: {exc}"
            ) from exc

        return self._parse_document(response)

    @staticmethod
    def _parse_document(response: httpx.Response) -> dict[str, Any]:
        """Extract the DID document, unwrapping a resolution result."""
        try:
            payload = response.json()
        except json.JSONDecodeError as exc:
            raise SidetreeClientError(
                f"failed to parse sidetree response: {exc}"
            ) from exc
        if isinstance(payload, dict) and isinstance(payload.get("didDocument"), dict):
            payload = payload["didDocument"]
        if not isinstance(payload, dict):
            raise SidetreeClientError("sidetree response is not a DID document")
        return payload

    def close(self) -> None:
        """Release the underlying HTTP connection pool."""
        self._http.close()

    def __enter__(self) -> SidetreeClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
