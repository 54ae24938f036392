"""Serve subcommand: start the diagnostics endpoint."""

from __future__ import annotations

import logging

log = logging.getLogger(__name__)


def run_serve(config, args) -> None:
    """Start the diagnostics endpoint under gunicorn or the Flask dev server."""
    from sslstatus.app import create_app

    app = create_app(config=config)
    server = config.settings.server

    if args.dev:
        log.info("Starting development server (not for production)")
        app.run(
            host=server.bind,
            port=server.port,
            debug=True,
            use_reloader=False,
        )
    else:
        from sslstatus.server.gunicorn_app import run_gunicorn

        run_gunicorn(app, server)
