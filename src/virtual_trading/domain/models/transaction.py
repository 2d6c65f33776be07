"""Transaction domain model."""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal

from virtual_trading.domain.models.enums import AssetType, TradeType


@dataclass(frozen=True)
class Transaction:
    """
    Immutable record of one executed trade.

    price is the execution price in base currency at the time of the trade;
    balance_after is the account balance right after it, for audit replay.
    """

    txn_id: str
    timestamp: datetime
    txn_type: TradeType
    asset_type: AssetType
    asset_id: str
    symbol: str
    name: str
    quantity: Decimal
    price: Decimal
    total: Decimal
    balance_after: Decimal

    def __post_init__(self) -> None:
        # frozen dataclass: coerce through object.__setattr__
        if isinstance(self.txn_type, str):
            object.__setattr__(self, "txn_type", TradeType(self.txn_type))
        if isinstance(self.asset_type, str):
            object.__setattr__(self, "asset_type", AssetType(self.asset_type))
