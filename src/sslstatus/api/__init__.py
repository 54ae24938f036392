"""Diagnostics API layer: Flask blueprint registration."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from flask import Flask

log = logging.getLogger(__name__)


def register_blueprints(app: Flask) -> None:
    """Register the admin blueprints on the Flask application.

    Reads ``admin.enabled`` and ``admin.base_path`` from the app's
    settings; nothing is registered when the admin endpoint is disabled.
    """
    settings = app.config["SSLSTATUS_SETTINGS"]
    if not settings.admin.enabled:
        log.info("Admin endpoint disabled")
        return

    from sslstatus.api.status import status_bp  # noqa: PLC0415

    base = settings.admin.base_path.rstrip("/")
    app.register_blueprint(status_bp, url_prefix=base)
    log.info("Admin SSL status registered at %s/ssl", base)
