"""Repository protocol definitions (interfaces)."""

from virtual_trading.repositories.protocols.account_store import AccountStore

__all__ = [
    "AccountStore",
]
