"""Typed, frozen dataclasses for every configuration section.

This module is the **single source of truth** for default values.
JSON Schema defaults exist only for documentation; these builders
are what the application actually reads.

Access pattern::

    from sslstatus.config import get_config

    server = get_config().settings.server
    print(server.protocol, server.cert_file)
"""

from __future__ import annotations

from dataclasses import dataclass

from sslstatus.core.types import Protocol
from sslstatus.tls.versions import parse_cipher_suites, parse_curve, parse_tls_version

# ---------------------------------------------------------------------------
# Server
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class ServerSettings:
    """Protocol, certificate paths and TLS preferences of the served site.

    ``bind``/``port``/``workers``/``timeout`` apply to the diagnostics
    endpoint started by ``sslstatus serve``.
    """

    protocol: Protocol
    bind: str
    port: int
    workers: int
    timeout: int
    cert_file: str
    key_file: str
    ssl_min_version: str
    ssl_max_version: str
    ssl_curve_preferences: tuple[str, ...]
    ssl_cipher_suites: tuple[str, ...]


def _build_server(data: dict | None) -> ServerSettings:
    d = data or {}
    return ServerSettings(
        protocol=Protocol(d.get("protocol", "http")),
        bind=d.get("bind", "127.0.0.1"),
        port=d.get("port", 3000),
        workers=d.get("workers", 1),
        timeout=d.get("timeout", 30),
        cert_file=d.get("cert_file") or "",
        key_file=d.get("key_file") or "",
        ssl_min_version=parse_tls_version(d.get("ssl_min_version") or ""),
        ssl_max_version=parse_tls_version(d.get("ssl_max_version") or ""),
        ssl_curve_preferences=tuple(
            parse_curve(c) for c in d.get("ssl_curve_preferences", [])
        ),
        ssl_cipher_suites=parse_cipher_suites(d.get("ssl_cipher_suites", [])),
    )


# ---------------------------------------------------------------------------
# ACME
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AcmeSettings:
    """Automatic certificate management (Let's Encrypt style)."""

    enabled: bool
    url: str
    email: str
    directory: str
    ca_root: str
    accept_tos: bool


def _build_acme(data: dict | None) -> AcmeSettings:
    d = data or {}
    return AcmeSettings(
        enabled=d.get("enabled", False),
        url=d.get("url", ""),
        email=d.get("email", ""),
        directory=d.get("directory", "https"),
        ca_root=d.get("ca_root", ""),
        accept_tos=d.get("accept_tos", False),
    )


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LoggingSettings:
    """Application logging configuration (level, format)."""

    level: str
    format: str


def _build_logging(data: dict | None) -> LoggingSettings:
    d = data or {}
    return LoggingSettings(
        level=d.get("level", "INFO"),
        format=d.get("format", "text"),
    )


# ---------------------------------------------------------------------------
# Admin endpoint
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class AdminSettings:
    """Admin diagnostics endpoint exposing the SSL status record."""

    enabled: bool
    base_path: str


def _build_admin(data: dict | None) -> AdminSettings:
    d = data or {}
    return AdminSettings(
        enabled=d.get("enabled", True),
        base_path=d.get("base_path", "/admin"),
    )


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SslStatusSettings:
    """Root of the typed settings tree."""

    server: ServerSettings
    acme: AcmeSettings
    logging: LoggingSettings
    admin: AdminSettings


def build_settings(data: dict) -> SslStatusSettings:
    """Build the full typed settings tree from raw config data.

    Called once during :class:`SslStatusConfig` initialization after
    schema validation and environment-variable resolution.  Raises
    :class:`ValueError` for unknown TLS version or curve names.
    """
    return SslStatusSettings(
        server=_build_server(data.get("server")),
        acme=_build_acme(data.get("acme")),
        logging=_build_logging(data.get("logging")),
        admin=_build_admin(data.get("admin")),
    )
