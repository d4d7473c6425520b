"""didforge data models — all Pydantic v2, all frozen (immutable)."""

from didforge.models.config import BootstrapParameters
from didforge.models.consortium import (
    CachePolicy,
    Configuration,
    ConsortiumData,
    ConsortiumPolicy,
    MemberData,
    MemberPolicy,
    SidetreeParams,
)
from didforge.models.did import AnchoredDID, CreateDIDOptions
from didforge.models.documents import (
    ConsortiumFile,
    MemberListElement,
    OutputDocument,
    StakeholderFile,
)
from didforge.models.keys import PublicJWK

__all__ = [
    # consortium
    "CachePolicy",
    "SidetreeParams",
    "ConsortiumPolicy",
    "MemberPolicy",
    "ConsortiumData",
    "MemberData",
    "Configuration",
    # keys
    "PublicJWK",
    # did
    "CreateDIDOptions",
    "AnchoredDID",
    # documents
    "MemberListElement",
    "ConsortiumFile",
    "StakeholderFile",
    "OutputDocument",
    # config
    "BootstrapParameters",
]
