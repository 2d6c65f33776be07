"""Holding domain model."""

from dataclasses import dataclass
from decimal import Decimal

from virtual_trading.domain.models.enums import AssetType

HoldingKey = tuple[AssetType, str]


@dataclass
class Holding:
    """
    Net open position in one asset.

    total_cost is maintained incrementally by the ledger and is never
    recomputed from quantity * avg_buy_price.
    """

    asset_type: AssetType
    asset_id: str
    symbol: str
    name: str
    quantity: Decimal
    avg_buy_price: Decimal
    total_cost: Decimal

    def __post_init__(self) -> None:
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)

    @property
    def key(self) -> HoldingKey:
        """Composite identity within an account."""
        return (self.asset_type, self.asset_id)
