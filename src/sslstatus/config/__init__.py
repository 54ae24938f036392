"""Configuration subsystem for sslstatus.

Public API::

    from sslstatus.config import get_config, SslStatusConfig

    # At startup (CLI only):
    SslStatusConfig(config_file="config.yaml", schema_file="bundled")

    # Everywhere else:
    cfg      = get_config()
    protocol = cfg.settings.server.protocol   # typed access
    email    = cfg.get("acme.email")          # dynamic dot-path
"""

from sslstatus.config.settings import (
    AcmeSettings,
    AdminSettings,
    LoggingSettings,
    ServerSettings,
    SslStatusSettings,
    build_settings,
)
from sslstatus.config.sslstatus_config import (
    ConfigValidationError,
    SslStatusConfig,
    get_config,
)

__all__ = [
    "AcmeSettings",
    "AdminSettings",
    "ConfigValidationError",
    "LoggingSettings",
    "ServerSettings",
    "SslStatusConfig",
    "SslStatusSettings",
    "build_settings",
    "get_config",
]
