"""SSL status endpoint.

``GET {admin.base_path}/ssl``: the current SSL/TLS status record.
"""

from __future__ import annotations

from flask import Blueprint, jsonify

from sslstatus.api.serializers import serialize_ssl_status
from sslstatus.tls.status import get_ssl_status

status_bp = Blueprint("ssl_status", __name__)


@status_bp.route("/ssl", methods=["GET"])
def get_status():
    """Return the SSL/TLS status record."""
    resp = jsonify(serialize_ssl_status(get_ssl_status()))
    resp.headers["Cache-Control"] = "no-store"
    return resp, 200
