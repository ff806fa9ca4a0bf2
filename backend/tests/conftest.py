"""Pytest fixtures for the player registration API.

Every test gets its own application bound to a fresh in-memory SQLite
database and a private upload directory under ``tmp_path``, so rows and files
never leak between cases.
"""

from __future__ import annotations

from collections.abc import Generator
from pathlib import Path
from typing import Any

import pytest
from flask import Flask

from players_api.core.config import TestingConfig
from players_api.core.extensions import db as _db
from players_api.factory import create_app


class TestConfig(TestingConfig):
    """Testing configuration for creating the Flask app.

    Notes
    -----
    - Uses an in-memory SQLite database for speed.
    - ``UPLOAD_DIR`` is replaced per test by the ``app`` fixture.
    """

    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    CORS_ORIGINS = "*"
    LOG_LEVEL = "WARNING"


@pytest.fixture()
def upload_dir(tmp_path: Path) -> Path:
    """Directory receiving uploaded pictures for one test."""
    return tmp_path / "uploads"


@pytest.fixture()
def app(upload_dir: Path) -> Generator[Flask, None, None]:
    """Create a Flask application with its tables in place.

    Yields
    ------
    flask.Flask
        Application with an active app context.
    """

    class _Config(TestConfig):
        UPLOAD_DIR = str(upload_dir)

    application = create_app(_Config, instance_relative_config=False)
    with application.app_context():
        _db.create_all()
        yield application
        _db.session.remove()
        _db.drop_all()


@pytest.fixture()
def db(app: Flask) -> Any:
    """Database extension bound to the testing application."""
    return _db


@pytest.fixture()
def session(db: Any) -> Any:
    """Flask-scoped SQLAlchemy session used by the app under test."""
    return db.session


@pytest.fixture()
def client(app: Flask) -> Any:
    """Return a Flask test client."""
    return app.test_client()


# -- Hook up Factory Boy to the app session ------------------------------------
@pytest.fixture(autouse=True)
def _factories_session(request: pytest.FixtureRequest) -> Generator[None, None, None]:
    """Wire Factory Boy's session helper to the app session when a test uses it."""
    from tests.factories import SQLAlchemySession

    if "app" in request.fixturenames:
        SQLAlchemySession.set(request.getfixturevalue("session"))
    yield
    SQLAlchemySession.set(None)
