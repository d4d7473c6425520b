"""DID creator — one anchored DID per stakeholder, all or nothing.

Members are processed one at a time, in document order.  The first failure
(key loading, policy, or the DID client) aborts the run; DIDs anchored for
earlier members are discarded without compensation on the remote service.
"""

from __future__ import annotations

import logging

from didforge.bridge.did_client import DIDClient
from didforge.core.errors import DIDCreationError, KeyLoadError
from didforge.core.hasher import is_supported_hash_algorithm
from didforge.core.key_loader import KeyMaterial, load_private_key_jwk
from didforge.models.consortium import Configuration, MemberData, SidetreeParams
from didforge.models.did import AnchoredDID, CreateDIDOptions

logger = logging.getLogger(__name__)

DEFAULT_KEY_ID = "key1"


class DIDCreator:
    """Anchors a DID for every member of a configuration.

    Parameters
    ----------
    client:
        The anchoring backend.  Called once per member, never retried.
    """

    def __init__(self, client: DIDClient) -> None:
        self._client = client

    def create_dids(self, configuration: Configuration) -> dict[str, AnchoredDID]:
        """Return ``{domain: AnchoredDID}`` in member document order.

        Raises
        ------
        KeyLoadError
            ``KeyReadError`` or ``KeyFormatError`` naming the member domain.
        DIDCreationError
            If the policy is unusable or the client fails for a member.
        """
        check_history_hashes(configuration)
        consortium_sidetree = configuration.consortium_data.policy.sidetree
        dids: dict[str, AnchoredDID] = {}
        for member in configuration.members_data:
            dids[member.domain] = self.create_did(member, consortium_sidetree)
        return dids

    def create_did(
        self, member: MemberData, consortium_sidetree: SidetreeParams
    ) -> AnchoredDID:
        """Load the member's key and anchor its DID."""
        try:
            key = load_private_key_jwk(member.private_key_jwk_path)
        except KeyLoadError as exc:
            raise exc.for_domain(member.domain) from exc

        options = creation_options(
            member.domain, key, member.policy.sidetree or consortium_sidetree
        )
        try:
            document = self._client.create_did(member.domain, options)
        except Exception as exc:
            raise DIDCreationError(member.domain, str(exc) or type(exc).__name__) from exc

        did = document.get("id") if isinstance(document, dict) else None
        if not isinstance(did, str) or not did:
            raise DIDCreationError(member.domain, "DID document has no 'id'")

        logger.info("Anchored %s for %s", did, member.domain)
        return AnchoredDID(
            domain=member.domain,
            did=did,
            document=document,
            public_key=options.public_key,
        )


def check_history_hashes(configuration: Configuration) -> None:
    """Reject an unrecognized ``history_hash`` before anything is anchored.

    Checks the consortium policy, then each member policy that sets one.
    """
    consortium = configuration.consortium_data
    policies = [(consortium.domain, consortium.policy.history_hash)]
    policies += [
        (member.domain, member.policy.history_hash)
        for member in configuration.members_data
        if member.policy.history_hash is not None
    ]
    for domain, history_hash in policies:
        if not is_supported_hash_algorithm(history_hash):
            raise DIDCreationError(domain, f"unsupported history hash {history_hash!r}")


def creation_options(
    domain: str, key: KeyMaterial, sidetree: SidetreeParams
) -> CreateDIDOptions:
    """Build client options from a key and the effective Sidetree params."""
    if not is_supported_hash_algorithm(sidetree.hash_algorithm):
        raise DIDCreationError(
            domain, f"unsupported sidetree hash algorithm {sidetree.hash_algorithm!r}"
        )
    return CreateDIDOptions(
        public_key=key.public_jwk(),
        key_id=key.key_id or DEFAULT_KEY_ID,
        hash_algorithm=sidetree.hash_algorithm,
        max_encoded_hash_length=sidetree.max_encoded_hash_length,
        max_operation_size=sidetree.max_operation_size,
    )
