"""Trade order input model."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from virtual_trading.domain.models.enums import AssetType, TradeType


@dataclass
class TradeOrder:
    """Immediate market order as submitted by a client."""

    txn_type: TradeType
    asset_type: AssetType
    asset_id: Optional[str]
    symbol: str = ""
    name: str = ""
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None

    def __post_init__(self) -> None:
        if isinstance(self.txn_type, str):
            self.txn_type = TradeType(self.txn_type)
        if isinstance(self.asset_type, str):
            self.asset_type = AssetType(self.asset_type)
        if self.asset_id is not None:
            self.asset_id = str(self.asset_id).strip() or None

    @property
    def total(self) -> Optional[Decimal]:
        """quantity * price, when both are known."""
        if self.quantity is None or self.price is None:
            return None
        return self.quantity * self.price
