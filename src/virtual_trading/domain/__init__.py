"""Domain layer - pure business models with no external dependencies."""

from virtual_trading.domain.models import (
    Account,
    Holding,
    HoldingKey,
    Transaction,
    TradeOrder,
    AssetType,
    TradeType,
    RejectionReason,
)

__all__ = [
    "Account",
    "Holding",
    "HoldingKey",
    "Transaction",
    "TradeOrder",
    "AssetType",
    "TradeType",
    "RejectionReason",
]
