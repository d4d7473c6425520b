"""Run parameters handed to the pipeline entry point."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict


class BootstrapParameters(BaseModel):
    """Explicit, read-only parameters for one bootstrap run.

    Built once by the caller (usually the CLI from ``CliSettings``).
    """

    model_config = ConfigDict(frozen=True)

    config_file: Path
    output_dir: Path = Path("config")
