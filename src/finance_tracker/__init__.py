"""Finance tracker application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask

from . import cli as _cli
from . import errors as _errors
from .config import BaseConfig, DevConfig, TestingConfig
from .logging_config import setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestingConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths exposed by the API."""

    yield "finance_tracker.blueprints.users"
    yield "finance_tracker.blueprints.categories"
    yield "finance_tracker.blueprints.transactions"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_cls = _resolve_config(config_name)
    config_obj = config_cls()
    app.config.from_object(config_obj)
    app.config["FINANCE_TRACKER_CONFIG"] = config_obj
    app.json.sort_keys = False  # type: ignore[attr-defined]

    setup_logging(config_obj)
    _errors.init_app(app)
    _register_blueprints(app)

    # Import lazily so model classes can be imported without building an engine.
    from .extensions import init_db

    init_db(app)
    _cli.init_app(app)
    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


__all__ = ["BaseConfig", "DevConfig", "TestingConfig", "create_app"]
