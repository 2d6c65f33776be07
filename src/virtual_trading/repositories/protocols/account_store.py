"""Account store protocol."""

from typing import Optional, Protocol

from virtual_trading.domain.models import Account


class AccountStore(Protocol):
    """Interface for virtual account persistence."""

    def load(self, user_id: str) -> Optional[Account]:
        """Load an account with its holdings and transactions."""
        ...

    def save(self, account: Account) -> Account:
        """Persist the whole account, replacing any stored state."""
        ...

    def delete(self, user_id: str) -> None:
        """Remove an account and everything it owns."""
        ...
