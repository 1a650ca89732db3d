"""Application configuration objects and helpers."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: bool = False) -> bool:
    """Interpret environment variable values as booleans."""

    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    APP_NAME = "FinanceTracker"
    DB_FILENAME = "finance_tracker.db"
    DEFAULT_PAGE_SIZE = 20
    MAX_PAGE_SIZE = 100
    RECENT_TRANSACTIONS_LIMIT = 5

    def __init__(self) -> None:
        self.SECRET_KEY = os.getenv("FINANCE_TRACKER_SECRET_KEY", "replace-me")
        self.DATA_DIR = self._resolve_data_dir()
        self.DEV_MODE = _env_bool("FINANCE_TRACKER_DEV_MODE", default=True)
        self.SEED_DEFAULTS = _env_bool("FINANCE_TRACKER_SEED_DEFAULTS", default=True)
        self.DATABASE_URL = os.getenv("FINANCE_TRACKER_DATABASE_URL", self._build_sqlite_url())
        if not self.DEV_MODE and self.SECRET_KEY == "replace-me":
            raise ValueError("FINANCE_TRACKER_SECRET_KEY must be set in non-dev mode.")

    def _resolve_data_dir(self) -> Path:
        """Return the directory where the SQLite file and logs live."""

        data_root = os.getenv("FINANCE_TRACKER_DATA_DIR", "instance")
        path = Path(data_root).expanduser().resolve()
        path.mkdir(parents=True, exist_ok=True)
        return path

    def _build_sqlite_url(self) -> str:
        db_path = self.DATA_DIR / self.DB_FILENAME
        return f"sqlite:///{db_path}"

    def sqlalchemy_engine_options(self) -> dict[str, Any]:
        """Expose engine kwargs for SQLModel to consume."""

        engine_options: dict[str, Any] = {}
        if self.DATABASE_URL.startswith("sqlite"):
            engine_options["connect_args"] = {"check_same_thread": False}
        else:
            engine_options["pool_pre_ping"] = True
        return engine_options


class DevConfig(BaseConfig):
    """Development configuration using local SQLite."""

    DEBUG = True
    TESTING = False


class TestingConfig(BaseConfig):
    """Configuration used by the test-suite; seeding is opt-in."""

    __test__ = False

    DEBUG = False
    TESTING = True

    def __init__(self) -> None:
        super().__init__()
        self.SEED_DEFAULTS = _env_bool("FINANCE_TRACKER_SEED_DEFAULTS", default=False)
