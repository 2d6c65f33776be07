"""Account domain model."""

import copy
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from virtual_trading.domain.models.enums import AssetType
from virtual_trading.domain.models.holding import Holding, HoldingKey
from virtual_trading.domain.models.transaction import Transaction


@dataclass
class Account:
    """
    A user's virtual trading account.

    Holdings are keyed by (asset_type, asset_id) and kept in the order they
    were opened. Transactions are append-only, oldest first.
    """

    user_id: str
    balance: Decimal
    holdings: dict[HoldingKey, Holding] = field(default_factory=dict)
    transactions: list[Transaction] = field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def find_holding(self, asset_type: AssetType, asset_id: str) -> Optional[Holding]:
        """Return the open holding for an asset, if any."""
        return self.holdings.get((AssetType(asset_type), asset_id))

    def held_quantity(self, asset_type: AssetType, asset_id: str) -> Decimal:
        """Quantity held for an asset; zero when there is no holding."""
        holding = self.find_holding(asset_type, asset_id)
        return holding.quantity if holding else Decimal("0")

    def snapshot(self) -> "Account":
        """Deep copy safe to hand out of the owning lock."""
        return copy.deepcopy(self)
