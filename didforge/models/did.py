"""DID creation models — the request options and the anchored result."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from didforge.models.keys import PublicJWK


class CreateDIDOptions(BaseModel):
    """Options handed to a ``DIDClient`` for one stakeholder.

    Derived from the stakeholder's effective Sidetree parameters and the
    public key of its signing key.
    """

    model_config = ConfigDict(frozen=True)

    public_key: PublicJWK
    key_id: str
    hash_algorithm: str
    max_encoded_hash_length: int = Field(gt=0)
    max_operation_size: int = Field(gt=0)


class AnchoredDID(BaseModel):
    """A DID document returned by the anchoring service for one domain.

    The document is opaque apart from its ``id``, which is copied to ``did``.
    """

    model_config = ConfigDict(frozen=True)

    domain: str
    did: str
    document: dict[str, Any]
    public_key: PublicJWK
