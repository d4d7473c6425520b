"""Error taxonomy for the bootstrap pipeline.

Every stage fails fast and raises one of these with the file path or domain
needed to diagnose the failure.  The underlying cause is chained with
``raise ... from``.
"""

from __future__ import annotations

from pathlib import Path


class BootstrapError(RuntimeError):
    """Base class for all pipeline failures."""


class ConfigReadError(BootstrapError):
    """The configuration document could not be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"failed to read config file {path}: {reason}")


class ConfigFormatError(BootstrapError):
    """The configuration document does not decode into a ``Configuration``."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"failed to decode config file {path}: {reason}")


class KeyLoadError(BootstrapError):
    """A stakeholder's private key could not be loaded.

    ``domain`` is ``None`` when raised by the key loader itself and is
    filled in by the DID creator via :meth:`for_domain`.
    """

    action = "failed to load jwk"

    def __init__(
        self, path: Path | str, reason: str, *, domain: str | None = None
    ) -> None:
        self.path = Path(path)
        self.reason = reason
        self.domain = domain
        member = f" for member {domain}" if domain else ""
        super().__init__(f"{self.action} {path}{member}: {reason}")

    def for_domain(self, domain: str) -> KeyLoadError:
        """Return a copy of this error attributed to *domain*."""
        return type(self)(self.path, self.reason, domain=domain)


class KeyReadError(KeyLoadError):
    """The key file could not be read."""

    action = "failed to read jwk file"


class KeyFormatError(KeyLoadError):
    """The key file does not hold a supported private JWK."""

    action = "failed to unmarshal to jwk"


class DIDCreationError(BootstrapError):
    """The DID client failed for a stakeholder."""

    def __init__(self, domain: str, reason: str) -> None:
        self.domain = domain
        self.reason = reason
        super().__init__(f"failed to create did for domain {domain}: {reason}")


class AssemblyError(BootstrapError):
    """The output documents could not be assembled.

    Indicates an internal-consistency fault: the DID mapping handed to the
    assembler does not match the configuration.
    """


class WriteError(BootstrapError):
    """An output file could not be written."""

    def __init__(self, domain: str, path: Path | str, reason: str) -> None:
        self.domain = domain
        self.path = Path(path)
        self.reason = reason
        super().__init__(
            f"failed to write config for domain {domain} to {path}: {reason}"
        )
