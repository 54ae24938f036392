"""Logging subsystem for sslstatus.

Public API::

    from sslstatus.logging import configure_logging

    configure_logging(settings.logging)
"""

from sslstatus.logging.setup import configure_logging

__all__ = ["configure_logging"]
