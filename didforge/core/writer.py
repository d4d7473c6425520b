"""Writer — persists assembled documents as ``<domain>.json`` files.

Layout: {output_dir}/{domain}.json, domain used verbatim.

Each file is written to a temporary sibling and renamed into place, so no
file is ever observed half-written.  The set of files is not transactional:
on failure, files written earlier in the same call stay on disk and the
caller must treat the directory as untrustworthy.
"""

from __future__ import annotations

import logging
import os
import tempfile
from collections.abc import Mapping
from pathlib import Path

from didforge.core.errors import WriteError
from didforge.models.documents import OutputDocument

logger = logging.getLogger(__name__)

JSON_INDENT = 2


def config_file_name(domain: str) -> str:
    """File name for *domain*'s document."""
    return f"{domain}.json"


def serialize(document: OutputDocument) -> bytes:
    """Formatted JSON for one document; unset (``None``) fields are omitted."""
    text = document.model_dump_json(indent=JSON_INDENT, exclude_none=True)
    return (text + "\n").encode("utf-8")


def write_config(
    output_dir: Path | str, documents: Mapping[str, OutputDocument]
) -> list[Path]:
    """Write every document and return the written paths in order.

    Raises ``WriteError`` on the first failure.
    """
    output_dir = Path(output_dir)
    written: list[Path] = []
    for domain, document in documents.items():
        target = output_dir / config_file_name(domain)
        if not _is_plain_name(domain):
            raise WriteError(domain, target, "domain is not a valid file name")
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            _atomic_write(target, serialize(document))
        except OSError as exc:
            raise WriteError(domain, target, exc.strerror or str(exc)) from exc
        logger.debug("Wrote %s", target)
        written.append(target)

    logger.info("Wrote %d config file(s) to %s", len(written), output_dir)
    return written


def _is_plain_name(domain: str) -> bool:
    if domain in ("", ".", ".."):
        return False
    return os.sep not in domain and (os.altsep is None or os.altsep not in domain)


def _file_mode() -> int:
    """Mode for a newly created file under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def _atomic_write(target: Path, data: bytes) -> None:
    fd, tmp_name = tempfile.mkstemp(
        dir=target.parent, prefix=f".{target.name}.", suffix=".tmp"
    )
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "wb") as handle:
            handle.write(data)
        # mkstemp creates 0600; published files get the usual mode.
        tmp_path.chmod(_file_mode())
        tmp_path.replace(target)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
