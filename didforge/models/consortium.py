"""Consortium configuration models — the input document, decoded.

The consortium policy is complete; each member's policy is a partial copy of
it where every field is independently overridable.  An unset member field is
absent, not zero, and is never filled in from the consortium policy.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator


class CachePolicy(BaseModel):
    """How long resolvers may cache a consortium or stakeholder file."""

    model_config = ConfigDict(frozen=True)

    max_age: int = Field(ge=0)  # seconds


class SidetreeParams(BaseModel):
    """Sidetree protocol parameters used when anchoring DIDs."""

    model_config = ConfigDict(frozen=True)

    hash_algorithm: str
    key_algorithm: str
    max_encoded_hash_length: int = Field(gt=0)
    max_operation_size: int = Field(gt=0)


class ConsortiumPolicy(BaseModel):
    """Network-wide policy published in the consortium file."""

    model_config = ConfigDict(frozen=True)

    cache: CachePolicy
    num_queries: int = Field(ge=1)
    history_hash: str
    sidetree: SidetreeParams


class MemberPolicy(BaseModel):
    """Per-stakeholder overrides of the consortium policy.

    Every field defaults to ``None`` (absent).
    """

    model_config = ConfigDict(frozen=True)

    cache: CachePolicy | None = None
    num_queries: int | None = Field(default=None, ge=1)
    history_hash: str | None = None
    sidetree: SidetreeParams | None = None


class ConsortiumData(BaseModel):
    """The trust anchor: consortium domain and its policy."""

    model_config = ConfigDict(frozen=True)

    domain: str = Field(min_length=1)
    policy: ConsortiumPolicy


class MemberData(BaseModel):
    """One stakeholder: domain, policy overrides, endpoints and signing key."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    domain: str = Field(min_length=1)
    policy: MemberPolicy = MemberPolicy()
    endpoints: list[str] = Field(min_length=1)
    private_key_jwk_path: Path = Field(alias="privateKeyJwkPath")


class Configuration(BaseModel):
    """A decoded consortium configuration document.

    Constructed once per run and read-only thereafter.
    """

    model_config = ConfigDict(frozen=True)

    consortium_data: ConsortiumData
    members_data: list[MemberData] = []

    @model_validator(mode="after")
    def _domains_unique(self) -> Configuration:
        seen = {self.consortium_data.domain}
        for member in self.members_data:
            if member.domain in seen:
                raise ValueError(f"duplicate domain {member.domain!r}")
            seen.add(member.domain)
        return self
