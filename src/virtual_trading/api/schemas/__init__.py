"""API schemas package."""

from virtual_trading.api.schemas.base import CamelModel
from virtual_trading.api.schemas.trade import TradeRequest, TradeCheckResponse
from virtual_trading.api.schemas.portfolio import (
    HoldingResponse,
    TransactionResponse,
    PortfolioResponse,
    PortfolioEnvelope,
    TransactionListResponse,
)
from virtual_trading.api.schemas.valuation import (
    HoldingValuationResponse,
    HoldingValuationListResponse,
    PortfolioSummaryResponse,
    PortfolioSummaryEnvelope,
    DistributionItemResponse,
    DistributionResponse,
)
from virtual_trading.api.schemas.quote import QuoteResponse, QuoteEnvelope

__all__ = [
    "CamelModel",
    "TradeRequest",
    "TradeCheckResponse",
    "HoldingResponse",
    "TransactionResponse",
    "PortfolioResponse",
    "PortfolioEnvelope",
    "TransactionListResponse",
    "HoldingValuationResponse",
    "HoldingValuationListResponse",
    "PortfolioSummaryResponse",
    "PortfolioSummaryEnvelope",
    "DistributionItemResponse",
    "DistributionResponse",
    "QuoteResponse",
    "QuoteEnvelope",
]
