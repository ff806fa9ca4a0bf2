"""Application factory wiring Flask extensions and blueprints."""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask

from players_api.core.config import BaseConfig, get_config
from players_api.core.logger import configure_logging, init_app as init_logging

log = logging.getLogger(__name__)


def ensure_upload_dir(app: Flask) -> Path:
    """Create the configured upload directory when it does not exist yet."""

    upload_dir = Path(app.config["UPLOAD_DIR"])
    upload_dir.mkdir(parents=True, exist_ok=True)
    return upload_dir


def create_app(
    config: str | type[BaseConfig] | object | None = None,
    *,
    instance_relative_config: bool = True,
    instance_config_filename: str = "config.py",
) -> Flask:
    """Build and configure the Flask application.

    Raises ``RuntimeError`` when no database URL is configured.
    """

    app = Flask(__name__, instance_relative_config=instance_relative_config)

    app.config.from_object(get_config() if config is None else config)
    if instance_relative_config and instance_config_filename:
        app.config.from_pyfile(instance_config_filename, silent=True)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    from players_api.core import extensions

    extensions.init_app(app)

    upload_dir = ensure_upload_dir(app)

    init_logging(app)

    from players_api.core import cors

    cors.init_app(app)

    from players_api.api import init_app as init_api

    init_api(app)

    from players_api.core import errors

    errors.init_app(app)

    from players_api import cli as app_cli

    app_cli.init_app(app)

    log.info("app.ready upload_dir=%s", upload_dir)
    return app
