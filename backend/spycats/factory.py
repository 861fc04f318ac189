"""Flask application factory for the spy-cats API."""

from __future__ import annotations

from flask import Flask

from spycats.core.config import BaseConfig, get_config, validate_config
from spycats.core.logger import configure_logging


def create_app(config: str | type[BaseConfig] | object | None = None) -> Flask:
    """
    Build the API application.

    :param config: ``APP_ENV``-style name (``"testing"``), a config class or
        object, or ``None`` to read ``APP_ENV``. ``instance/config.py`` is
        applied on top when it exists.
    :raises ValueError: For an unsupported cache backend.
    :raises RuntimeError: For a missing production JWT secret or an
        unreachable cache.
    """
    app = Flask(__name__, instance_relative_config=True)
    if config is None or isinstance(config, str):
        config = get_config(config)
    app.config.from_object(config)
    app.config.from_pyfile("config.py", silent=True)

    validate_config(app.config)
    configure_logging(app.config["LOG_LEVEL"], app.config.get("LOG_FORMAT", "json"))

    from spycats import cli
    from spycats.api import init_app as init_api
    from spycats.core import errors, extensions, logger, web

    # extensions before blueprints, logger before error handlers
    extensions.init_app(app)
    logger.init_app(app)
    web.init_app(app)
    init_api(app)
    errors.init_app(app)
    cli.init_app(app)
    return app
