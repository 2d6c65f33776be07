"""Valuation service: market value, P&L and distribution of an account."""

from decimal import Decimal
from typing import Iterator, Optional

from virtual_trading.core.timezone import now_utc
from virtual_trading.domain.models import Account, Holding
from virtual_trading.domain.views import (
    DistributionItem,
    HoldingValuation,
    PortfolioSummaryView,
)
from virtual_trading.services.pricing_service import PricingService


def unrealized_pnl(
    current_value: Decimal,
    cost_basis: Decimal,
) -> tuple[Decimal, Optional[Decimal]]:
    """
    Paper gain/loss of a holding.

    Returns (pnl, pnl_percent); pnl_percent is None when cost_basis is zero.
    """
    pnl = current_value - cost_basis
    if cost_basis == 0:
        return pnl, None
    return pnl, pnl / cost_basis * 100


class ValuationService:
    """
    Read-only valuation of accounts against live prices.

    Never mutates the account it is given. Callers pass a snapshot taken
    from LedgerService so valuation runs outside the account lock.
    """

    def __init__(
        self,
        pricing: PricingService,
        base_currency: str = "INR",
        initial_balance: Decimal = Decimal("1000000"),
    ):
        self._pricing = pricing
        self._base_currency = base_currency
        self._initial_balance = Decimal(initial_balance)

    def current_value(self, holding: Holding, display_currency: str) -> HoldingValuation:
        """
        Mark one holding to market in display_currency.

        A missing price or FX pair yields price_available=False rather than
        a zero value, so callers can tell "price pending" from "worthless".
        """
        currency = display_currency.upper()
        cost_basis = self._pricing.convert(holding.total_cost, self._base_currency, currency)
        avg_buy_price = self._pricing.convert(holding.avg_buy_price, self._base_currency, currency)

        unit_price = self._pricing.unit_price(holding.asset_type, holding.asset_id, currency)
        if unit_price is None and holding.symbol and holding.symbol != holding.asset_id:
            unit_price = self._pricing.unit_price(holding.asset_type, holding.symbol, currency)

        if unit_price is None:
            return HoldingValuation(
                holding=holding,
                currency=currency,
                price_available=False,
                avg_buy_price=avg_buy_price,
                cost_basis=cost_basis,
            )

        value = unit_price * holding.quantity
        pnl, pnl_percent = (None, None)
        if cost_basis is not None:
            pnl, pnl_percent = unrealized_pnl(value, cost_basis)

        return HoldingValuation(
            holding=holding,
            currency=currency,
            price_available=True,
            avg_buy_price=avg_buy_price,
            cost_basis=cost_basis,
            current_price=unit_price,
            current_value=value,
            unrealized_pnl=pnl,
            unrealized_pnl_percent=pnl_percent,
        )

    def holding_valuations(self, account: Account, display_currency: str) -> list[HoldingValuation]:
        """Valuation rows for every holding, in holding order."""
        return [self.current_value(h, display_currency) for h in account.holdings.values()]

    def portfolio_summary(self, account: Account, display_currency: str) -> PortfolioSummaryView:
        """
        Total value and P&L against the initial balance.

        total_value = cash + sum of priced holdings. Unpriced holdings count
        as zero and are listed in unpriced_symbols. If the cash balance
        cannot be converted the monetary totals are None.
        """
        currency = display_currency.upper()
        valuations = self.holding_valuations(account, currency)
        holdings_value = sum((v.value_or_zero for v in valuations), Decimal("0"))

        summary = PortfolioSummaryView(
            currency=currency,
            holdings_value=holdings_value,
            holdings_count=len(valuations),
            transactions_count=len(account.transactions),
            unpriced_symbols=[v.holding.symbol for v in valuations if not v.price_available],
            as_of=now_utc(),
        )

        cash = self._pricing.convert(account.balance, self._base_currency, currency)
        initial = self._pricing.convert(self._initial_balance, self._base_currency, currency)
        if cash is None or initial is None:
            return summary

        summary.cash_balance = cash
        summary.initial_balance = initial
        summary.total_value = cash + holdings_value
        summary.total_pnl = summary.total_value - initial
        if initial != 0:
            summary.pnl_percent = summary.total_pnl / initial * 100
        return summary

    def distribution(self, account: Account, display_currency: str) -> Iterator[DistributionItem]:
        """
        Yield each priced holding's share of total holdings value.

        Holdings without a price, or worth nothing, are left out.
        """
        priced = [
            v
            for v in self.holding_valuations(account, display_currency)
            if v.price_available and v.current_value > 0
        ]
        total = sum((v.current_value for v in priced), Decimal("0"))
        for v in priced:
            yield DistributionItem(
                symbol=v.holding.symbol,
                value=v.current_value,
                share_percent=v.current_value / total * 100,
            )
