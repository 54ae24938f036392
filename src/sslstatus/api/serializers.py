"""JSON serializers for the diagnostics API."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from sslstatus.tls.status import SSLStatus


def serialize_ssl_status(status: SSLStatus) -> dict[str, Any]:
    """Return the status record plus derived ``healthy``/``problems``."""
    body = status.to_dict()
    body["healthy"] = status.is_healthy
    body["problems"] = status.problems()
    return body


def serialize_ssl_summary(status: SSLStatus) -> dict[str, Any]:
    """Short form used by ``/healthz``."""
    return {
        "enabled": status.enabled,
        "config_method": str(status.config_method),
        "healthy": status.is_healthy,
    }
