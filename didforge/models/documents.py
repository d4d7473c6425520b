"""Output documents — one per domain, written as ``<domain>.json``."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict

from didforge.models.consortium import ConsortiumPolicy, MemberPolicy
from didforge.models.keys import PublicJWK


class MemberListElement(BaseModel):
    """A stakeholder entry in the consortium file."""

    model_config = ConfigDict(frozen=True)

    domain: str
    did: str
    public_key: PublicJWK


class ConsortiumFile(BaseModel):
    """The consortium-level file: network policy and the member list.

    Members appear in the order of the input ``members_data``.
    """

    model_config = ConfigDict(frozen=True)

    domain: str
    policy: ConsortiumPolicy
    members: list[MemberListElement] = []


class StakeholderFile(BaseModel):
    """A stakeholder file: its own policy, endpoints and anchored DID."""

    model_config = ConfigDict(frozen=True)

    domain: str
    did: str
    policy: MemberPolicy
    endpoints: list[str]
    did_document: dict[str, Any]


OutputDocument = ConsortiumFile | StakeholderFile
