"""SSL/TLS status subsystem.

Public API::

    from sslstatus.tls import load_ssl_from, get_ssl_status

    status = load_ssl_from(get_config().settings)
"""

from sslstatus.tls.status import (
    SSLStatus,
    check_file_exists,
    check_file_readable,
    get_ssl_status,
    load_ssl_from,
    reset_ssl_status,
)

__all__ = [
    "SSLStatus",
    "check_file_exists",
    "check_file_readable",
    "get_ssl_status",
    "load_ssl_from",
    "reset_ssl_status",
]
