"""View models for service outputs."""

from virtual_trading.domain.views.market import PriceQuote, RateTable
from virtual_trading.domain.views.trading import TradeDecision
from virtual_trading.domain.views.valuation import (
    HoldingValuation,
    PortfolioSummaryView,
    DistributionItem,
)

__all__ = [
    "PriceQuote",
    "RateTable",
    "TradeDecision",
    "HoldingValuation",
    "PortfolioSummaryView",
    "DistributionItem",
]
