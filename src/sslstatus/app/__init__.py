"""Flask application package for sslstatus.

Public API::

    from sslstatus.app import create_app
"""

from sslstatus.app.factory import create_app

__all__ = ["create_app"]
