"""sslstatus: SSL/TLS configuration status and certificate file diagnostics."""

__version__ = "1.0.0"
