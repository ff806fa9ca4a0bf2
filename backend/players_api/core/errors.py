"""Centralized plain-text error handling for the API."""

from __future__ import annotations

import logging
from http import HTTPStatus

from flask import Flask, Response
from werkzeug.exceptions import HTTPException

from players_api.core.logger import ensure_request_id

log = logging.getLogger(__name__)


def _http_status_to_code(status_code: int) -> str:
    """Map common HTTP status codes to canonical, stable error codes."""
    mapping = {
        400: "bad_request",
        404: "not_found",
        405: "method_not_allowed",
        409: "conflict",
        413: "payload_too_large",
        415: "unsupported_media_type",
        500: "internal_server_error",
        503: "service_unavailable",
    }
    return mapping.get(status_code, "error")


def text_response(message: str, status: int) -> Response:
    """
    Return a ``text/plain`` response carrying ``message``.

    :param message: Client-safe message.
    :param status: HTTP status code.
    :returns: Flask response.
    :rtype: flask.Response
    """
    return Response(message, status=int(status), mimetype="text/plain")


class APIError(Exception):
    """
    Represent an error that is rendered to the client as plain text.

    Parameters
    ----------
    message : str
        Human-readable description presented to clients.
    status_code : int, optional
        HTTP status code to return. Defaults to ``400``.
    code : str, optional
        Machine-readable identifier, used in logs. Defaults to
        ``"bad_request"``.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 400,
        code: str = "bad_request",
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = int(status_code)
        self.code = code

    def to_response(self) -> Response:
        return text_response(self.message, self.status_code)


# Domain conveniences
class BadRequest(APIError):
    """400 for malformed client input."""

    def __init__(self, message: str = "Bad request") -> None:
        super().__init__(message, status_code=HTTPStatus.BAD_REQUEST, code="bad_request")


class Conflict(APIError):
    """409 for uniqueness/constraint collisions."""

    def __init__(self, message: str = "Conflict") -> None:
        super().__init__(message, status_code=HTTPStatus.CONFLICT, code="conflict")


class InternalError(APIError):
    """500 with a generic, client-safe message."""

    def __init__(self, message: str = "Unexpected error") -> None:
        super().__init__(
            message,
            status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
            code="internal_server_error",
        )


def init_app(app: Flask) -> None:
    """
    Attach plain-text error handlers to the Flask app.

    Notes
    -----
    - 4xx are logged as warnings, without traceback.
    - 5xx are logged as errors with ``exc_info`` from the active exception
      chain; the client only ever sees the generic message.
    """

    @app.errorhandler(APIError)
    def handle_api_error(err: APIError):
        if err.status_code >= 500:
            log.error(
                "APIError: code=%s status=%s msg=%s request_id=%s",
                err.code,
                err.status_code,
                err.message,
                ensure_request_id(),
                exc_info=err.__cause__ or err,
            )
        else:
            log.warning(
                "APIError: code=%s status=%s msg=%s request_id=%s",
                err.code,
                err.status_code,
                err.message,
                ensure_request_id(),
            )
        return err.to_response()

    @app.errorhandler(HTTPException)
    def handle_http_exception(err: HTTPException):
        status = int(err.code or HTTPStatus.INTERNAL_SERVER_ERROR)
        error_code = _http_status_to_code(status)
        message = error_code.replace("_", " ")
        level = log.error if status >= 500 else log.warning
        level(
            "HTTPException: code=%s status=%s request_id=%s",
            error_code,
            status,
            ensure_request_id(),
        )
        response = text_response(message, status)
        # Keep protocol headers such as ``Allow`` on 405
        for key, value in err.get_headers():
            if key.lower() != "content-type":
                response.headers[key] = value
        return response

    @app.errorhandler(Exception)
    def handle_unexpected_error(err: Exception):
        # Unexpected server-side error; never leak internal details
        log.error(
            "Unhandled exception: request_id=%s",
            ensure_request_id(),
            exc_info=err,
        )
        return text_response("Unexpected error", HTTPStatus.INTERNAL_SERVER_ERROR)
