"""Pydantic schemas for valuation endpoints."""

from datetime import datetime
from typing import Optional

from virtual_trading.api.schemas.base import CamelModel
from virtual_trading.domain.models import AssetType


class HoldingValuationResponse(CamelModel):
    """A holding marked to market. Market fields are null when unpriced."""

    asset_type: AssetType
    asset_id: str
    symbol: str
    name: str
    quantity: float
    price_available: bool
    avg_buy_price: Optional[float] = None
    cost_basis: Optional[float] = None
    current_price: Optional[float] = None
    current_value: Optional[float] = None
    unrealized_pnl: Optional[float] = None
    unrealized_pnl_percent: Optional[float] = None


class HoldingValuationListResponse(CamelModel):
    currency: str
    data: list[HoldingValuationResponse]


class PortfolioSummaryResponse(CamelModel):
    """Portfolio totals. Monetary fields are null when the value is unknown."""

    currency: str
    cash_balance: Optional[float] = None
    holdings_value: float
    total_value: Optional[float] = None
    initial_balance: Optional[float] = None
    total_pnl: Optional[float] = None
    pnl_percent: Optional[float] = None
    holdings_count: int
    transactions_count: int
    unpriced_symbols: list[str]
    complete: bool
    as_of: Optional[datetime] = None


class PortfolioSummaryEnvelope(CamelModel):
    data: PortfolioSummaryResponse


class DistributionItemResponse(CamelModel):
    symbol: str
    value: float
    share_percent: float


class DistributionResponse(CamelModel):
    currency: str
    data: list[DistributionItemResponse]
