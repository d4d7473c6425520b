"""CLI configuration — env-driven, flag-overridable.

Every setting can come from a command-line flag, a ``DID_METHOD_CLI_*``
environment variable, or a ``.env`` file; flags win.

Examples
--------
Configure via environment::

    export DID_METHOD_CLI_SIDETREE_URL=https://sidetree.example.com/sidetree/0.0.1/operations
    export DID_METHOD_CLI_CONFIG_FILE=consortium.json
    export DID_METHOD_CLI_TLS_SYSTEMCERTPOOL=true
"""

from __future__ import annotations

from pathlib import Path

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from didforge.models.config import BootstrapParameters

ENV_PREFIX = "DID_METHOD_CLI_"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class MissingSettingError(ValueError):
    """Raised when a required setting was given neither as flag nor env var."""

    def __init__(self, flag_name: str, field_name: str) -> None:
        self.flag_name = flag_name
        self.env_name = f"{ENV_PREFIX}{field_name.upper()}"
        super().__init__(
            f"Neither {flag_name} (command line flag) nor {self.env_name} "
            "(environment variable) have been set."
        )


class CliSettings(BaseSettings):
    """Settings for ``didforge create-config``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix=ENV_PREFIX,
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sidetree_url: str = ""
    config_file: Path | None = None
    output_directory: Path = Path("config")

    # TLS
    tls_systemcertpool: bool = False
    tls_cacerts: str = ""  # comma-separated CA certificate paths

    request_timeout: float = 10.0
    log_level: str = "INFO"

    @field_validator("log_level")
    @classmethod
    def _known_log_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def ca_cert_paths(self) -> list[Path]:
        """``tls_cacerts`` split into paths."""
        return [Path(p.strip()) for p in self.tls_cacerts.split(",") if p.strip()]

    def require(self) -> None:
        """Raise ``MissingSettingError`` for the first missing required setting."""
        if not self.sidetree_url:
            raise MissingSettingError("sidetree-url", "sidetree_url")
        if self.config_file is None:
            raise MissingSettingError("config-file", "config_file")

    def bootstrap_parameters(self) -> BootstrapParameters:
        """The explicit run parameters handed to the pipeline."""
        self.require()
        return BootstrapParameters(
            config_file=self.config_file,
            output_dir=self.output_directory,
        )
