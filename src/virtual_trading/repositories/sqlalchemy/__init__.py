"""SQLAlchemy repository implementations."""

from virtual_trading.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from virtual_trading.repositories.sqlalchemy.account_store import SqlAlchemyAccountStore

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyAccountStore",
]
