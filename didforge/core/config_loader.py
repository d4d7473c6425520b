"""Configuration loader — the consortium configuration document.

Decoding is structural only: required fields, types, non-empty endpoint
lists and unique domains.  JSON types must match exactly: no string to
number coercion.  Whether an algorithm is supported is decided
later, when DIDs are created.
"""

from __future__ import annotations

import logging
from pathlib import Path

from pydantic import ValidationError

from didforge.core.errors import ConfigFormatError, ConfigReadError
from didforge.models.consortium import Configuration

logger = logging.getLogger(__name__)


def load_configuration(path: Path | str) -> Configuration:
    """Read and decode the configuration document at *path*.

    Raises
    ------
    ConfigReadError
        If the file cannot be read.
    ConfigFormatError
        If the JSON does not decode into a ``Configuration``.
    """
    path = Path(path)
    try:
        raw = path.read_bytes()
    except OSError as exc:
        raise ConfigReadError(path, exc.strerror or str(exc)) from exc

    try:
        configuration = Configuration.model_validate_json(raw, strict=True)
    except ValidationError as exc:
        raise ConfigFormatError(path, _summarize(exc)) from exc

    logger.info(
        "Loaded configuration for consortium %s with %d member(s)",
        configuration.consortium_data.domain,
        len(configuration.members_data),
    )
    return configuration


def _summarize(exc: ValidationError) -> str:
    """One line per validation error: ``location: message``."""
    lines = []
    for error in exc.errors():
        location = ".".join(str(part) for part in error["loc"]) or "<document>"
        lines.append(f"{location}: {error['msg']}")
    return "; ".join(lines)
