"""API blueprint package aggregating the HTTP endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from flask import Blueprint, Flask


def register_blueprint_group(
    app: Flask,
    *,
    base_prefix: str,
    entries: Iterable[tuple[Blueprint, str]],
) -> None:
    """Register related blueprints beneath a common prefix.

    Parameters
    ----------
    app:
        Application instance receiving the blueprints.
    base_prefix:
        Prefix applied to all entries, typically ``"/api"``.
    entries:
        Iterable of ``(blueprint, relative_prefix)`` pairs where
        ``relative_prefix`` is appended to ``base_prefix``.
    """

    for bp, rel_prefix in entries:
        full_prefix = "/".join(
            segment for segment in [base_prefix.strip("/"), rel_prefix.strip("/")] if segment
        )
        app.register_blueprint(bp, url_prefix="/" + full_prefix)


def init_app(app: Flask) -> None:
    """Register the API blueprints on the Flask app."""

    api_base = app.config.get("API_BASE_PREFIX", "/api")

    from players_api.api.players import bp as players_bp

    # Each tuple: (blueprint, url_prefix_relative_to_api_base)
    registry: list[tuple[Blueprint, str]] = [
        (players_bp, "/players"),  # -> /api/players
    ]
    register_blueprint_group(app, base_prefix=api_base, entries=registry)


__all__ = ["init_app", "register_blueprint_group"]
