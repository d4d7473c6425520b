"""Public key models."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PublicJWK(BaseModel):
    """The public half of a stakeholder signing key, in JWK form.

    ``y`` is only present for ``EC`` keys.  Private parameters are never
    part of this model.
    """

    model_config = ConfigDict(frozen=True)

    kty: str
    crv: str
    x: str
    y: str | None = None
    kid: str | None = None
