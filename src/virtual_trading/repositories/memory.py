"""In-memory AccountStore."""

import threading
from typing import Optional

from virtual_trading.domain.models import Account


class InMemoryAccountStore:
    """
    Dict-backed store for tests and the memory storage backend.

    Accounts are deep-copied on the way in and out so callers never share
    state with the store.
    """

    def __init__(self):
        self._accounts: dict[str, Account] = {}
        self._lock = threading.Lock()

    def load(self, user_id: str) -> Optional[Account]:
        with self._lock:
            account = self._accounts.get(user_id)
            return account.snapshot() if account else None

    def save(self, account: Account) -> Account:
        with self._lock:
            self._accounts[account.user_id] = account.snapshot()
        return account

    def delete(self, user_id: str) -> None:
        with self._lock:
            self._accounts.pop(user_id, None)
