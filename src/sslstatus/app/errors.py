"""RFC 7807 Problem Details for the diagnostics endpoints.

Provides :class:`StatusProblem`, a problem document that renders itself
as an ``application/problem+json`` response, plus a Flask error-handler
registration function that converts every error into one.

Usage::

    return StatusProblem(SERVER_INTERNAL, "SSL status could not be built", 500).to_response()
"""

from __future__ import annotations

import logging
from typing import Any

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

log = logging.getLogger(__name__)

_P = "urn:sslstatus:error:"

SERVER_INTERNAL = _P + "serverInternal"

# Content type for RFC 7807 responses
PROBLEM_CONTENT_TYPE = "application/problem+json"


class StatusProblem:
    """An RFC 7807 *problem details* object.

    Parameters
    ----------
    error_type:
        A URN string (one of the constants above) or ``"about:blank"``
        for generic HTTP errors.
    detail:
        Human-readable explanation of the problem.
    status:
        HTTP status code (default 400).
    title:
        Short summary; omitted when *error_type* is self-explanatory.

    """

    def __init__(
        self,
        error_type: str,
        detail: str,
        status: int = 400,
        *,
        title: str | None = None,
    ) -> None:
        self.error_type = error_type
        self.detail = detail
        self.status = status
        self.title = title

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the RFC 7807 JSON structure."""
        body: dict[str, Any] = {
            "type": self.error_type,
            "detail": self.detail,
            "status": self.status,
        }
        if self.title is not None:
            body["title"] = self.title
        return body

    def to_response(self):
        """Build a Flask :class:`~flask.Response`."""
        resp = jsonify(self.to_dict())
        resp.status_code = self.status
        resp.headers["Content-Type"] = PROBLEM_CONTENT_TYPE
        resp.headers["Cache-Control"] = "no-store"
        return resp


def register_error_handlers(app: Flask) -> None:
    """Attach handlers that produce RFC 7807 responses for all errors."""

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        problem = StatusProblem(
            "about:blank",
            exc.description or "An error occurred",
            exc.code or 500,
            title=exc.name,
        )
        return problem.to_response()

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        log.exception("Unhandled exception")
        problem = StatusProblem(
            SERVER_INTERNAL,
            "An internal server error occurred",
            500,
        )
        return problem.to_response()
