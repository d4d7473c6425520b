"""didforge: consortium DID network bootstrap.

Turns one consortium configuration document into a mutually consistent set
of configuration files:
  - ``<consortium-domain>.json``: network policy and the member list
  - ``<member-domain>.json``: member policy, endpoints and anchored DID
Each member DID is anchored through a Sidetree service from the member's
private signing key (Ed25519 or P-256 JWK).  The run is all or nothing: no
file is written unless every member's DID was anchored.
"""

__version__ = "0.1.0"
__description__ = "Consortium DID network configuration bootstrap"

from didforge.core.orchestrator import ConfigOrchestrator
from didforge.cli.app import app as cli

__all__ = ["ConfigOrchestrator", "cli", "__version__"]
