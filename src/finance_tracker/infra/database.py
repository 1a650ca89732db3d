"""Database infrastructure: engine, schema and session factory."""

from __future__ import annotations

from contextlib import contextmanager
from typing import Callable, ContextManager, Iterator, Optional, Tuple

from sqlalchemy.engine import Engine
from sqlalchemy.exc import DisconnectionError, InterfaceError, OperationalError
from sqlmodel import Session, SQLModel, create_engine

from ..config import BaseConfig
from ..errors import StoreUnavailableError

SessionFactory = Callable[[], ContextManager[Session]]

# Driver-level failures that mean the store itself is unreachable.
_STORE_FAULTS = (OperationalError, InterfaceError, DisconnectionError)


def create_db_engine(config: BaseConfig) -> Engine:
    """Create SQLModel engine from configuration."""
    engine_options = config.sqlalchemy_engine_options()
    return create_engine(config.DATABASE_URL, **engine_options)


def init_database(engine: Engine) -> None:
    """Initialize database schema."""
    # Import all models to ensure they're registered
    from .. import models  # noqa: F401

    try:
        SQLModel.metadata.create_all(engine)
    except _STORE_FAULTS as exc:
        raise StoreUnavailableError("Unable to initialize the database schema") from exc


def create_session_factory(engine: Engine) -> SessionFactory:
    """Create a session factory function.

    Each session commits on success and rolls back on error. Connection
    faults surface as :class:`StoreUnavailableError` so callers never mistake
    them for a missing row.
    """

    @contextmanager
    def factory() -> Iterator[Session]:
        session = Session(engine, expire_on_commit=False)
        try:
            yield session
            session.commit()
        except _STORE_FAULTS as exc:
            session.rollback()
            raise StoreUnavailableError("The data store is unavailable") from exc
        except Exception:
            session.rollback()
            raise
        finally:
            session.close()

    return factory


def bootstrap_database(config: Optional[BaseConfig] = None) -> Tuple[Engine, SessionFactory]:
    """Convenience bootstrap for engine + session_factory with schema init.

    Returns (engine, session_factory).
    """

    cfg = config or BaseConfig()
    engine = create_db_engine(cfg)
    init_database(engine)
    return engine, create_session_factory(engine)
