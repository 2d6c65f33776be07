"""Repository layer - data access abstractions and implementations."""

from virtual_trading.repositories.protocols import AccountStore
from virtual_trading.repositories.memory import InMemoryAccountStore

__all__ = [
    "AccountStore",
    "InMemoryAccountStore",
]
