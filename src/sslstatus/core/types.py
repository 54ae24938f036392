"""Enumerated types shared by the settings and status layers.

All enums inherit from :class:`enum.StrEnum` so their ``.value`` is a
plain string that JSON and YAML round-trip naturally.
"""

from __future__ import annotations

from enum import StrEnum

# ---------------------------------------------------------------------------
# Server protocol
# ---------------------------------------------------------------------------


class Protocol(StrEnum):
    HTTP = "http"
    HTTPS = "https"
    FCGI = "fcgi"
    FCGI_UNIX = "fcgi+unix"
    HTTP_UNIX = "http+unix"


# ---------------------------------------------------------------------------
# SSL configuration method
# ---------------------------------------------------------------------------


class ConfigMethod(StrEnum):
    """How TLS is provisioned for the server."""

    DISABLED = "disabled"
    ACME = "acme"
    CERT_KEY = "cert_key"
    MISCONFIGURED = "misconfigured"
