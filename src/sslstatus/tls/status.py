"""SSL/TLS status record.

Mirrors the ``server`` and ``acme`` settings into a flat, read-mostly
record for display and diagnostics, and probes the configured
certificate and key files on disk.  The record is rebuilt from scratch
on every configuration load::

    from sslstatus.tls import load_ssl_from, get_ssl_status

    load_ssl_from(config.settings)
    status = get_ssl_status()
    status.config_method        # "disabled" | "acme" | "cert_key" | "misconfigured"
"""

from __future__ import annotations

import logging
import os
from dataclasses import asdict, dataclass
from typing import TYPE_CHECKING, Any

from sslstatus.core.types import ConfigMethod, Protocol

if TYPE_CHECKING:
    from sslstatus.config.settings import SslStatusSettings

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SSLStatus:
    """Denormalized SSL/TLS configuration state."""

    # Core
    enabled: bool = False
    protocol: str = ""
    config_method: ConfigMethod = ConfigMethod.DISABLED

    # Certificate and key files
    cert_file: str = ""
    key_file: str = ""

    # File probes
    cert_file_exists: bool = False
    cert_file_readable: bool = False
    key_file_exists: bool = False
    key_file_readable: bool = False

    # TLS requirements
    minimum_version: str = ""
    maximum_version: str = ""
    curve_preferences: tuple[str, ...] = ()
    cipher_suites: tuple[str, ...] = ()

    # ACME
    acme_enabled: bool = False
    acme_url: str = ""
    acme_email: str = ""
    acme_directory: str = ""
    acme_ca_root: str = ""
    acme_tos: bool = False

    @property
    def is_healthy(self) -> bool:
        """Whether the configured TLS setup can be served as-is."""
        return not self.problems()

    def problems(self) -> list[str]:
        """Return human-readable descriptions of what is wrong, if anything."""
        if self.config_method == ConfigMethod.MISCONFIGURED:
            return [
                "protocol is https but neither ACME nor a certificate/key pair is configured",
            ]
        if self.config_method != ConfigMethod.CERT_KEY:
            return []

        found: list[str] = []
        for label, path, exists, readable in (
            ("certificate", self.cert_file, self.cert_file_exists, self.cert_file_readable),
            ("key", self.key_file, self.key_file_exists, self.key_file_readable),
        ):
            if not exists:
                found.append(f"{label} file does not exist: {path}")
            elif not readable:
                found.append(f"{label} file is not readable: {path}")
        return found

    def to_dict(self) -> dict[str, Any]:
        """Serialise to a JSON-friendly dict."""
        data = asdict(self)
        data["config_method"] = str(self.config_method)
        data["curve_preferences"] = list(self.curve_preferences)
        data["cipher_suites"] = list(self.cipher_suites)
        return data


# ---------------------------------------------------------------------------
# Current status
# ---------------------------------------------------------------------------

_status = SSLStatus()


def get_ssl_status() -> SSLStatus:
    """Return the status built by the most recent :func:`load_ssl_from`."""
    return _status


def reset_ssl_status() -> None:
    """Restore the default (disabled) status -- testing only."""
    global _status  # noqa: PLW0603
    _status = SSLStatus()


def load_ssl_from(settings: SslStatusSettings) -> SSLStatus:
    """Rebuild the SSL status from already-loaded *settings*.

    Only ``https`` populates anything beyond the protocol; within
    ``https`` ACME wins over a certificate/key pair.  The new record
    replaces the current one and is returned.
    """
    global _status  # noqa: PLW0603

    server = settings.server
    acme = settings.acme

    fields: dict[str, Any] = {
        "protocol": str(server.protocol),
        "enabled": server.protocol == Protocol.HTTPS,
        "config_method": ConfigMethod.DISABLED,
    }

    if server.protocol == Protocol.HTTPS:
        if acme.enabled:
            fields.update(
                config_method=ConfigMethod.ACME,
                acme_enabled=True,
                acme_url=acme.url,
                acme_email=acme.email,
                acme_directory=acme.directory,
                acme_ca_root=acme.ca_root,
                acme_tos=acme.accept_tos,
            )
        elif server.cert_file and server.key_file:
            fields.update(
                config_method=ConfigMethod.CERT_KEY,
                cert_file=server.cert_file,
                key_file=server.key_file,
                cert_file_exists=check_file_exists(server.cert_file),
                cert_file_readable=check_file_readable(server.cert_file),
                key_file_exists=check_file_exists(server.key_file),
                key_file_readable=check_file_readable(server.key_file),
            )
        else:
            fields["config_method"] = ConfigMethod.MISCONFIGURED

        fields.update(
            minimum_version=server.ssl_min_version,
            maximum_version=server.ssl_max_version,
            curve_preferences=server.ssl_curve_preferences,
            cipher_suites=server.ssl_cipher_suites,
        )

    status = SSLStatus(**fields)
    _status = status

    context = {
        "ssl_protocol": status.protocol,
        "config_method": str(status.config_method),
    }
    log.info(
        "SSL status loaded: protocol=%s method=%s",
        status.protocol,
        status.config_method,
        extra=context,
    )
    for problem in status.problems():
        log.warning("SSL problem: %s", problem, extra=context)
    return status


# ---------------------------------------------------------------------------
# File probes
# ---------------------------------------------------------------------------


def check_file_exists(file_path: str) -> bool:
    """Return ``True`` if *file_path* is non-empty and can be stat'ed."""
    if not file_path:
        return False
    try:
        os.stat(file_path)  # noqa: PTH116
    except (OSError, ValueError):
        return False
    return True


def check_file_readable(file_path: str) -> bool:
    """Return ``True`` if *file_path* exists and can be opened for reading.

    Nothing is read from the file.  A directory opens read-only too, so
    it counts as readable.
    """
    if not file_path:
        return False
    if not check_file_exists(file_path):
        return False
    try:
        fd = os.open(file_path, os.O_RDONLY)
    except (OSError, ValueError):
        return False
    os.close(fd)
    return True
