"""Database and store wiring for the Flask application."""

from __future__ import annotations

from flask import Flask, current_app

from .config import BaseConfig
from .infra.database import create_db_engine, create_session_factory, init_database
from .logging_config import get_logger
from .services.categories import seed_default_categories
from .services.store import LedgerStore

logger = get_logger(__name__)

EXTENSION_KEY = "finance_tracker"


def init_db(app: Flask) -> None:
    """Create the engine and schema, attach the store, and seed defaults."""

    config: BaseConfig = app.config["FINANCE_TRACKER_CONFIG"]
    engine = create_db_engine(config)
    init_database(engine)
    session_factory = create_session_factory(engine)
    store = LedgerStore.from_session_factory(session_factory)

    app.extensions[EXTENSION_KEY] = {
        "engine": engine,
        "session_factory": session_factory,
        "store": store,
    }

    if config.SEED_DEFAULTS:
        inserted = seed_default_categories(store)
        logger.info(f"Default categories reconciled ({len(inserted)} inserted)")


def get_store() -> LedgerStore:
    """Return the store bound to the current application."""

    state = current_app.extensions.get(EXTENSION_KEY)
    if state is None:  # pragma: no cover - exercised only by misconfigured apps
        raise RuntimeError("Database engine not initialized")
    return state["store"]


def get_config() -> BaseConfig:
    return current_app.config["FINANCE_TRACKER_CONFIG"]
