"""Per-account mutual exclusion."""

import threading
import weakref
from contextlib import contextmanager
from typing import Iterator


class AccountLockRegistry:
    """
    Hands out one lock per user_id.

    Operations on the same account run one at a time; different accounts
    never block each other. Entries are weak: a lock lives only while some
    caller holds or waits on it, so arbitrary X-User-ID values do not pile
    up. The registry is owned by the running application rather than the
    module so tests get a clean one each time.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()

    def _get(self, user_id: str) -> threading.Lock:
        with self._guard:
            lock = self._locks.get(user_id)
            if lock is None:
                lock = self._locks[user_id] = threading.Lock()
            return lock

    @contextmanager
    def lock_for(self, user_id: str) -> Iterator[None]:
        """Hold the account's lock for the duration of the block."""
        lock = self._get(user_id)
        with lock:
            yield

    def __len__(self) -> int:
        """Number of locks currently in use."""
        with self._guard:
            return len(self._locks)
