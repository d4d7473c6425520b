"""``didforge create-config`` — bootstrap consortium and stakeholder files.

Resolves settings from flags and ``DID_METHOD_CLI_*`` environment variables,
anchors one DID per stakeholder through the Sidetree service, and writes
``<domain>.json`` for the consortium and every stakeholder.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from didforge.bridge.did_client import SidetreeClient, build_tls_context
from didforge.config import CliSettings, MissingSettingError
from didforge.core.errors import BootstrapError
from didforge.core.orchestrator import ConfigOrchestrator

console = Console()

logger = logging.getLogger(__name__)


def create_config_cmd(
    sidetree_url: Optional[str] = typer.Option(
        None,
        "--sidetree-url",
        help="URL of the Sidetree operations endpoint. "
        "Alternatively set DID_METHOD_CLI_SIDETREE_URL.",
    ),
    config_file: Optional[Path] = typer.Option(
        None,
        "--config-file",
        help="Path to the consortium configuration JSON. "
        "Alternatively set DID_METHOD_CLI_CONFIG_FILE.",
    ),
    output_directory: Optional[Path] = typer.Option(
        None,
        "--output-directory",
        "-o",
        help="Directory the <domain>.json files are written to (default: config).",
    ),
    tls_systemcertpool: Optional[bool] = typer.Option(
        None,
        "--tls-systemcertpool/--no-tls-systemcertpool",
        help="Trust the system certificate pool for the Sidetree connection.",
    ),
    tls_cacerts: Optional[list[Path]] = typer.Option(
        None,
        "--tls-cacerts",
        help="Additional CA certificate file (repeatable).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level (DEBUG, INFO, WARNING, ERROR).",
    ),
) -> None:
    """Create consortium and stakeholder config files with freshly anchored DIDs."""
    overrides: dict[str, Any] = {
        "sidetree_url": sidetree_url,
        "config_file": config_file,
        "output_directory": output_directory,
        "tls_systemcertpool": tls_systemcertpool,
        "tls_cacerts": ",".join(str(p) for p in tls_cacerts) if tls_cacerts else None,
        "log_level": log_level,
    }
    try:
        settings = CliSettings(**{k: v for k, v in overrides.items() if v is not None})
        parameters = settings.bootstrap_parameters()
    except (MissingSettingError, ValidationError) as exc:
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    configure_logging(settings.log_level)

    try:
        did_client = build_did_client(settings)
        with did_client:
            written = ConfigOrchestrator(did_client).run(parameters)
    except (BootstrapError, OSError) as exc:
        logger.debug("create-config failed", exc_info=True)
        console.print(f"[bold red]Error:[/bold red] {escape(str(exc))}")
        raise typer.Exit(code=1)

    table = Table(title="Consortium config files")
    table.add_column("Domain", style="cyan")
    table.add_column("File", style="green")
    for path in written:
        table.add_row(escape(path.name.removesuffix(".json")), escape(str(path)))
    console.print(table)


def build_did_client(settings: CliSettings) -> SidetreeClient:
    """The Sidetree client configured from *settings*."""
    tls_context = build_tls_context(settings.tls_systemcertpool, settings.ca_cert_paths)
    return SidetreeClient(
        settings.sidetree_url,
        verify=tls_context,
        timeout=settings.request_timeout,
    )


def configure_logging(level: str) -> None:
    """Route ``didforge`` logs through rich at *level*."""
    root = logging.getLogger("didforge")
    root.setLevel(level.upper())
    if not any(isinstance(h, RichHandler) for h in root.handlers):
        root.addHandler(RichHandler(show_path=False, markup=False))
