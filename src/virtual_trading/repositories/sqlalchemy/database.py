"""Database connection and session management."""

import logging
from typing import Any, Generator, Optional

from sqlalchemy import create_engine, Engine, StaticPool
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session, declarative_base

from virtual_trading.config.settings import get_settings

logger = logging.getLogger(__name__)

Base = declarative_base()

# Module-level database state (can be reconfigured at runtime)
_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _engine_options(database_url: str) -> dict[str, Any]:
    """create_engine keyword arguments suited to the URL's backend."""
    url = make_url(database_url)
    if url.get_backend_name() != "sqlite":
        return {"pool_pre_ping": True}

    # Request threads share the engine
    options: dict[str, Any] = {"connect_args": {"check_same_thread": False}}
    if url.database in (None, "", ":memory:"):
        # An in-memory database lives in a single connection
        options["poolclass"] = StaticPool
    return options


def get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        database_url = get_settings().get_database_url()
        _engine = create_engine(database_url, echo=False, **_engine_options(database_url))
    return _engine


def get_session_factory() -> sessionmaker:
    """Get or create the session factory."""
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(
            autocommit=False,
            autoflush=False,
            bind=get_engine(),
        )
    return _SessionLocal


def get_db() -> Generator[Session, None, None]:
    """Dependency that provides a database session per request."""
    db = get_session_factory()()
    try:
        yield db
    finally:
        db.close()


def init_db() -> None:
    """Create the account, holding and transaction tables if missing."""
    from virtual_trading.repositories.sqlalchemy import orm_models  # noqa: F401

    engine = get_engine()
    Base.metadata.create_all(bind=engine)
    logger.info("Database ready at %s", engine.url.render_as_string(hide_password=True))


def reset_database() -> None:
    """Dispose the engine so the next access picks up new settings."""
    global _engine, _SessionLocal

    if _engine is not None:
        _engine.dispose()

    _engine = None
    _SessionLocal = None
