"""View models for valuation outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional

from virtual_trading.domain.models import Holding


@dataclass
class HoldingValuation:
    """
    A holding marked to market in a display currency.

    When price_available is False the monetary market fields are None and
    the holding counts as zero in aggregates.
    """

    holding: Holding
    currency: str
    price_available: bool
    avg_buy_price: Optional[Decimal] = None
    cost_basis: Optional[Decimal] = None
    current_price: Optional[Decimal] = None
    current_value: Optional[Decimal] = None
    unrealized_pnl: Optional[Decimal] = None
    unrealized_pnl_percent: Optional[Decimal] = None

    @property
    def value_or_zero(self) -> Decimal:
        return self.current_value if self.current_value is not None else Decimal("0")


@dataclass
class PortfolioSummaryView:
    """Cash + holdings value and P&L against the initial balance."""

    currency: str
    cash_balance: Optional[Decimal] = None
    holdings_value: Decimal = field(default_factory=lambda: Decimal("0"))
    total_value: Optional[Decimal] = None
    initial_balance: Optional[Decimal] = None
    total_pnl: Optional[Decimal] = None
    pnl_percent: Optional[Decimal] = None
    holdings_count: int = 0
    transactions_count: int = 0
    unpriced_symbols: list[str] = field(default_factory=list)
    as_of: Optional[datetime] = None

    @property
    def is_complete(self) -> bool:
        """True when every holding and the cash balance were valued."""
        return self.total_value is not None and not self.unpriced_symbols


@dataclass(frozen=True)
class DistributionItem:
    """Single slice of the portfolio distribution."""

    symbol: str
    value: Decimal
    share_percent: Decimal
