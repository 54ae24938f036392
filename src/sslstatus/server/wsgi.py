"""WSGI entry point for external servers (gunicorn, uWSGI, etc.).

The config file path is read from the ``SSLSTATUS_CONFIG`` environment
variable.

Example::

    export SSLSTATUS_CONFIG=/etc/sslstatus/config.yaml
    gunicorn "sslstatus.server.wsgi:app"
"""

from __future__ import annotations

import os
import sys

_config_path = os.environ.get("SSLSTATUS_CONFIG")
if _config_path is None:
    sys.stderr.write("SSLSTATUS_CONFIG is not set\n")
    sys.exit(1)

# Bootstrap the singleton before anything else imports it.
from sslstatus.config import SslStatusConfig  # noqa: E402

_config = SslStatusConfig(config_file=_config_path, schema_file="bundled")

from sslstatus.logging import configure_logging  # noqa: E402

configure_logging(_config.settings.logging)

from sslstatus.app import create_app  # noqa: E402

app = create_app(config=_config)
