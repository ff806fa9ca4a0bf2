"""WSGI entry point: ``gunicorn -c gunicorn.conf.py players_api.wsgi:app``."""

from __future__ import annotations

from players_api import create_app

app = create_app()
