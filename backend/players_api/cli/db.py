"""Flask CLI command creating the ``players`` table."""

from __future__ import annotations

import logging

import click
from flask.cli import with_appcontext
from sqlalchemy import inspect

from players_api.core.extensions import db

LOGGER = logging.getLogger(__name__)


@click.command("init-db")
@with_appcontext
def init_db_command() -> None:
    """Create missing tables (existing tables are left untouched)."""
    existing = set(inspect(db.engine).get_table_names())
    db.create_all()
    created = sorted(set(db.metadata.tables) - existing)
    LOGGER.info("init-db created=%s", created)
    if created:
        click.echo(f"Created tables: {', '.join(created)}")
    else:
        click.echo("All tables already exist.")
