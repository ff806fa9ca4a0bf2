"""Global Flask extension instances and initialization helpers."""

from __future__ import annotations

from typing import Any

from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from sqlalchemy import MetaData
from sqlalchemy.engine import make_url

# Global naming convention for all constraints
convention = {
    "ix": "ix_%(table_name)s_%(column_0_name)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

metadata = MetaData(naming_convention=convention)

# Global singleton (import-safe)
db: SQLAlchemy = SQLAlchemy(session_options={"autoflush": False}, metadata=metadata)


def engine_options(config: dict[str, Any]) -> dict[str, Any]:
    """Build bounded pool options for the configured database URL.

    Parameters
    ----------
    config: dict
        Flask configuration mapping.

    Returns
    -------
    dict
        Keyword arguments for :func:`sqlalchemy.create_engine`. SQLite URLs get
        an empty mapping so Flask-SQLAlchemy keeps its own in-memory pooling.

    Notes
    -----
    PostgreSQL connections receive a server-side ``statement_timeout`` so that
    a single insert can never hold a pooled connection indefinitely.
    """
    url = make_url(config["SQLALCHEMY_DATABASE_URI"])
    if url.get_backend_name() == "sqlite":
        return {}

    options: dict[str, Any] = {
        "pool_size": int(config.get("DB_POOL_SIZE", 5)),
        "max_overflow": int(config.get("DB_MAX_OVERFLOW", 10)),
        "pool_timeout": int(config.get("DB_POOL_TIMEOUT", 30)),
        "pool_pre_ping": True,
    }
    timeout_ms = int(config.get("DB_STATEMENT_TIMEOUT_MS") or 0)
    if url.get_backend_name() == "postgresql" and timeout_ms > 0:
        options["connect_args"] = {"options": f"-c statement_timeout={timeout_ms}"}
    return options


def init_app(app: Flask) -> None:
    """Initialize SQLAlchemy with bounded pooling.

    Parameters
    ----------
    app: flask.Flask
        Application used to bind extension instances. This call imports the
        :mod:`players_api.models` package so the metadata is complete before
        ``create_all`` runs.

    Raises
    ------
    RuntimeError
        When no database URL is configured.
    """
    if not app.config.get("SQLALCHEMY_DATABASE_URI"):
        raise RuntimeError("DATABASE_URL is required")

    merged = engine_options(app.config)
    merged.update(app.config.get("SQLALCHEMY_ENGINE_OPTIONS") or {})
    app.config["SQLALCHEMY_ENGINE_OPTIONS"] = merged

    db.init_app(app)

    # Ensure models are imported so the metadata sees every table
    from players_api import models as _models  # noqa: F401
