"""Pydantic schemas for account snapshots."""

from datetime import datetime
from typing import Optional

from pydantic import Field

from virtual_trading.api.schemas.base import CamelModel
from virtual_trading.domain.models import AssetType, TradeType


class HoldingResponse(CamelModel):
    """Response schema for a single holding."""

    asset_type: AssetType
    asset_id: str
    symbol: str
    name: str
    quantity: float
    avg_buy_price: float
    total_cost: float


class TransactionResponse(CamelModel):
    """Response schema for a single executed trade."""

    id: str
    timestamp: datetime
    txn_type: TradeType = Field(..., alias="type")
    asset_type: AssetType
    asset_id: str
    symbol: str
    name: str
    quantity: float
    price: float
    total: float
    balance_after: float


class PortfolioResponse(CamelModel):
    """Account snapshot. Transactions are listed newest first."""

    user_id: str
    balance: float
    base_currency: str
    initial_balance: float
    holdings: list[HoldingResponse]
    transactions: list[TransactionResponse]
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PortfolioEnvelope(CamelModel):
    data: PortfolioResponse


class TransactionListResponse(CamelModel):
    """Newest-first transaction history."""

    data: list[TransactionResponse]
    count: int
