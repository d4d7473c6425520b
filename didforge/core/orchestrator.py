"""Pipeline orchestrator — the entry point for a bootstrap run.

Wires the configuration loader, DID creator, assembler and writer into one
sequential run:

1. Load and decode the configuration document.
2. Anchor one DID per member, in document order.
3. Assemble one document per domain.
4. Write ``<domain>.json`` files.

Nothing is written unless steps 1-3 succeed for every member.
"""

from __future__ import annotations

import logging
from pathlib import Path

from didforge.bridge.did_client import DIDClient
from didforge.core.assembler import assemble
from didforge.core.config_loader import load_configuration
from didforge.core.did_creator import DIDCreator
from didforge.core.writer import write_config
from didforge.models.config import BootstrapParameters
from didforge.models.consortium import Configuration
from didforge.models.documents import OutputDocument

logger = logging.getLogger(__name__)


class ConfigOrchestrator:
    """Runs the consortium bootstrap pipeline.

    Parameters
    ----------
    did_client:
        The anchoring backend, e.g. ``SidetreeClient`` or a test stub.
    """

    def __init__(self, did_client: DIDClient) -> None:
        self.did_creator = DIDCreator(did_client)

    def create_config(self, configuration: Configuration) -> dict[str, OutputDocument]:
        """Anchor member DIDs and assemble the per-domain documents."""
        dids = self.did_creator.create_dids(configuration)
        return assemble(configuration, dids)

    def run(self, parameters: BootstrapParameters) -> list[Path]:
        """Load, anchor, assemble and write.  Returns the written paths."""
        logger.info("Creating consortium config from %s", parameters.config_file)
        configuration = load_configuration(parameters.config_file)
        documents = self.create_config(configuration)
        written = write_config(parameters.output_dir, documents)
        logger.info(
            "Consortium %s bootstrapped: %d file(s) in %s",
            configuration.consortium_data.domain,
            len(written),
            parameters.output_dir,
        )
        return written
