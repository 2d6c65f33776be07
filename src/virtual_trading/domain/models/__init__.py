"""Domain models package."""

from virtual_trading.domain.models.enums import AssetType, TradeType, RejectionReason
from virtual_trading.domain.models.holding import Holding, HoldingKey
from virtual_trading.domain.models.transaction import Transaction
from virtual_trading.domain.models.account import Account
from virtual_trading.domain.models.order import TradeOrder

__all__ = [
    "AssetType",
    "TradeType",
    "RejectionReason",
    "Holding",
    "HoldingKey",
    "Transaction",
    "Account",
    "TradeOrder",
]
