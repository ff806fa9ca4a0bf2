"""CORS configuration helper for API resources."""

from __future__ import annotations

from flask import Flask, Response, request
from flask_cors import CORS

ALLOW_HEADERS = "Content-Type"
ALLOW_METHODS = "POST, OPTIONS"


def init_app(app: Flask) -> None:
    """Configure CORS based on application config.

    Parameters
    ----------
    app: flask.Flask
        Application whose ``CORS_ORIGINS`` setting is consulted. When it is
        blank or ``"*"`` the policy answers every origin with ``*``.

    Notes
    -----
    Flask-CORS negotiates ``Access-Control-Allow-Origin``. The allowed headers
    and methods are static for this API and are stamped on *every* response
    (not only preflights), and preflight requests are answered with an empty
    ``204`` before routing.
    """
    raw_origins = app.config.get("CORS_ORIGINS", "")
    origins = [o.strip() for o in raw_origins.split(",") if o.strip()]
    wildcard = len(origins) == 0 or origins == ["*"]

    @app.before_request
    def _answer_preflight() -> Response | None:
        if request.method == "OPTIONS":
            return Response(status=204)
        return None

    # Registered before CORS() so it runs after Flask-CORS' own hook and wins
    # over any duplicate it added on preflight.
    @app.after_request
    def _static_cors_headers(response: Response) -> Response:
        response.headers["Access-Control-Allow-Headers"] = ALLOW_HEADERS
        response.headers["Access-Control-Allow-Methods"] = ALLOW_METHODS
        return response

    CORS(
        app,
        resources={r"/*": {"origins": "*" if wildcard else origins}},
        send_wildcard=wildcard,
        supports_credentials=False,
        allow_headers=[ALLOW_HEADERS],
        methods=["POST", "OPTIONS"],
        max_age=app.config.get("CORS_MAX_AGE", 600),
    )
