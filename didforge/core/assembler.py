"""Config assembler — merges configuration and anchored DIDs into documents.

Produces one document per domain: the consortium file first, then one
stakeholder file per member in document order.  Pure: no I/O.
"""

from __future__ import annotations

from collections.abc import Mapping

from didforge.core.errors import AssemblyError
from didforge.models.consortium import Configuration
from didforge.models.did import AnchoredDID
from didforge.models.documents import (
    ConsortiumFile,
    MemberListElement,
    OutputDocument,
    StakeholderFile,
)


def assemble(
    configuration: Configuration, dids: Mapping[str, AnchoredDID]
) -> dict[str, OutputDocument]:
    """Return ``{domain: document}`` with ``1 + len(members_data)`` entries.

    Raises ``AssemblyError`` if *dids* lacks a member domain or a domain
    occurs twice; both mean the caller broke the DID creation contract.
    """
    consortium = configuration.consortium_data
    members: list[MemberListElement] = []
    documents: dict[str, OutputDocument] = {}

    for member in configuration.members_data:
        anchored = dids.get(member.domain)
        if anchored is None:
            raise AssemblyError(f"no anchored DID for member {member.domain}")
        if member.domain == consortium.domain or member.domain in documents:
            raise AssemblyError(f"duplicate domain {member.domain}")

        members.append(
            MemberListElement(
                domain=member.domain,
                did=anchored.did,
                public_key=anchored.public_key,
            )
        )
        documents[member.domain] = StakeholderFile(
            domain=member.domain,
            did=anchored.did,
            policy=member.policy,
            endpoints=list(member.endpoints),
            did_document=anchored.document,
        )

    consortium_file = ConsortiumFile(
        domain=consortium.domain,
        policy=consortium.policy,
        members=members,
    )
    return {consortium.domain: consortium_file, **documents}
