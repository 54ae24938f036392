"""Flask application factory for sslstatus.

Usage::

    from sslstatus.app import create_app
    from sslstatus.config import get_config

    app = create_app(config=get_config())
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from flask import Flask, jsonify

from sslstatus.tls.status import get_ssl_status, load_ssl_from

if TYPE_CHECKING:
    from flask.typing import ResponseReturnValue

    from sslstatus.config.sslstatus_config import SslStatusConfig

log = logging.getLogger(__name__)


def create_app(config: SslStatusConfig | None = None) -> Flask:
    """Create and configure the sslstatus Flask application.

    Parameters
    ----------
    config:
        Loaded :class:`SslStatusConfig`.  Falls back to :func:`get_config`
        when ``None``.

    Returns
    -------
    Flask
        Fully configured WSGI application.  The SSL status is rebuilt
        from *config* before the app is returned.

    """
    if config is None:
        from sslstatus.config import get_config  # noqa: PLC0415

        config = get_config()

    settings = config.settings

    app = Flask("sslstatus")
    app.config["SSLSTATUS_SETTINGS"] = settings
    app.config["SSLSTATUS_CONFIG"] = config

    load_ssl_from(settings)

    # -- Error handlers (RFC 7807) ------------------------------------------
    from sslstatus.app.errors import register_error_handlers  # noqa: PLC0415

    register_error_handlers(app)

    # -- Infrastructure endpoints -------------------------------------------
    _register_health(app)

    # -- Admin routes -------------------------------------------------------
    from sslstatus.api import register_blueprints  # noqa: PLC0415

    register_blueprints(app)

    # -- Config reload (SIGHUP) ---------------------------------------------
    from sslstatus.app.reload import ReloadSignal  # noqa: PLC0415

    reload_signal = ReloadSignal()
    reload_signal.register()
    app.extensions["reload_signal"] = reload_signal

    @app.before_request
    def _check_config_reload() -> None:
        """Rebuild settings and the SSL status when SIGHUP is received."""
        rs = app.extensions.get("reload_signal")
        if rs is None or not rs.reload_requested:
            return

        try:
            cfg = app.config["SSLSTATUS_CONFIG"]
            new_settings = cfg.reload_settings()
            current = app.config["SSLSTATUS_SETTINGS"]

            if new_settings.logging.level != current.logging.level:
                logging.getLogger("sslstatus").setLevel(new_settings.logging.level)

            app.config["SSLSTATUS_SETTINGS"] = new_settings
            status = load_ssl_from(new_settings)
            log.info("Config reloaded (ssl method=%s)", status.config_method)
        except Exception:
            log.exception("Config reload failed; keeping previous settings")
        finally:
            rs.consume_reload()

    log.info("Flask application created")
    return app


# ---------------------------------------------------------------------------
# Infrastructure endpoints
# ---------------------------------------------------------------------------


def _register_health(app: Flask) -> None:
    """Register ``/livez`` and ``/healthz`` probes."""
    from sslstatus import __version__  # noqa: PLC0415
    from sslstatus.api.serializers import serialize_ssl_summary  # noqa: PLC0415

    @app.route("/livez")
    def livez() -> ResponseReturnValue:
        """Return minimal liveness probe."""
        return jsonify({"alive": True, "version": __version__}), 200

    @app.route("/healthz")
    def healthz() -> ResponseReturnValue:
        """Return health status; degraded when TLS is not servable."""
        status = get_ssl_status()
        result: dict = {
            "status": "ok" if status.is_healthy else "degraded",
            "version": __version__,
            "checks": {"ssl": serialize_ssl_summary(status)},
        }
        if not status.is_healthy:
            result["problems"] = status.problems()
        return jsonify(result), 200
