"""SpendLens application factory."""

from __future__ import annotations

from importlib import import_module
from typing import Iterable

from flask import Flask, jsonify

from . import cli as _cli
from .config import BaseConfig, DevConfig, TestConfig
from .logging_config import setup_logging

_CONFIG_MAP = {
    "development": DevConfig,
    "testing": TestConfig,
    "default": BaseConfig,
}


def _resolve_config(name: str | None) -> type[BaseConfig]:
    """Return the config class for the provided environment name."""

    if not name:
        return BaseConfig
    return _CONFIG_MAP.get(name.lower(), BaseConfig)


def _blueprint_paths() -> Iterable[str]:
    """Yield blueprint import paths registered on every app."""

    yield "spendlens.blueprints.auth"
    yield "spendlens.blueprints.expenses"
    yield "spendlens.blueprints.income"
    yield "spendlens.blueprints.budgets"
    yield "spendlens.blueprints.accounts"
    yield "spendlens.blueprints.categories"
    yield "spendlens.blueprints.analytics"


def create_app(config_name: str | None = None) -> Flask:
    """Create and configure the Flask application instance."""

    app = Flask(__name__, instance_relative_config=True)
    config_obj = _resolve_config(config_name)()
    app.config.from_object(config_obj)
    app.config["SPENDLENS_CONFIG"] = config_obj
    app.json.ensure_ascii = False

    # app.logger is the "spendlens" logger, so it inherits these handlers.
    setup_logging(config_obj)

    from .extensions import init_db

    init_db(app)
    _register_blueprints(app)
    _register_error_handlers(app)
    _cli.init_app(app)

    return app


def _register_blueprints(app: Flask) -> None:
    """Import and register all blueprints declared in `_blueprint_paths`."""

    for dotted_path in _blueprint_paths():
        module = import_module(dotted_path)
        blueprint = getattr(module, "bp")
        app.register_blueprint(blueprint)


def _register_error_handlers(app: Flask) -> None:
    from .domain.repositories import RecordNotFound, StoreError

    @app.errorhandler(RecordNotFound)
    def _not_found(exc: RecordNotFound):
        return jsonify({"error": str(exc)}), 404

    @app.errorhandler(StoreError)
    def _store_failure(exc: StoreError):
        app.logger.exception("Store operation failed")
        return jsonify({"error": "The request could not be completed. Please try again."}), 502


__all__ = ["BaseConfig", "DevConfig", "TestConfig", "create_app"]
