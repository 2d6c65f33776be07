"""
Unit tests for valuation, pricing and currency conversion.

Tests cover:
- Unrealized P&L and its percentage
- Holding valuation with missing prices
- Portfolio summary against the initial balance
- Distribution shares
- Display currency conversion and round trips
- FX rate caching and degradation
"""

import pytest
from decimal import Decimal

from virtual_trading.domain.models import Account, AssetType
from virtual_trading.domain.views import RateTable
from virtual_trading.services import (
    CurrencyConverter,
    FxRateService,
    Ledger,
    PricingService,
    ValuationService,
    unrealized_pnl,
)

from tests.conftest import (
    DeterministicPriceOracle,
    FakeClock,
    FixedFxProvider,
    assert_decimal_equal,
    buy_order,
)


@pytest.fixture
def account(ledger: Ledger) -> Account:
    """2 AAPL @ 100 and 1 MSFT @ 300, in INR."""
    account = ledger.new_account("u1")
    ledger.execute_trade(account, buy_order("AAPL", "2", "100"))
    ledger.execute_trade(account, buy_order("MSFT", "1", "300"))
    return account


# =============================================================================
# P&L TESTS
# =============================================================================


class TestUnrealizedPnl:
    """Tests for the P&L helper."""

    def test_gain(self):
        pnl, pct = unrealized_pnl(Decimal("150"), Decimal("100"))

        assert pnl == Decimal("50")
        assert pct == Decimal("50")

    def test_loss(self):
        pnl, pct = unrealized_pnl(Decimal("75"), Decimal("100"))

        assert pnl == Decimal("-25")
        assert pct == Decimal("-25")

    def test_zero_cost_basis_has_no_percent(self):
        pnl, pct = unrealized_pnl(Decimal("10"), Decimal("0"))

        assert pnl == Decimal("10")
        assert pct is None


# =============================================================================
# HOLDING VALUATION TESTS
# =============================================================================


class TestCurrentValue:
    """Tests for marking single holdings to market."""

    def test_priced_holding(self, valuation_service: ValuationService, account: Account):
        holding = account.find_holding(AssetType.STOCK, "AAPL")

        v = valuation_service.current_value(holding, "INR")

        assert v.price_available
        assert v.current_price == Decimal("200")
        assert v.current_value == Decimal("400")
        assert v.cost_basis == Decimal("200")
        assert v.unrealized_pnl == Decimal("200")
        assert v.unrealized_pnl_percent == Decimal("100")

    def test_missing_price_is_flagged_not_zero(
        self,
        valuation_service: ValuationService,
        deterministic_oracle: DeterministicPriceOracle,
        account: Account,
    ):
        deterministic_oracle.remove_price(AssetType.STOCK, "AAPL")
        holding = account.find_holding(AssetType.STOCK, "AAPL")

        v = valuation_service.current_value(holding, "INR")

        assert not v.price_available
        assert v.current_value is None
        assert v.value_or_zero == Decimal("0")
        assert v.cost_basis == Decimal("200")

    def test_falls_back_to_symbol_lookup(
        self,
        ledger: Ledger,
        valuation_service: ValuationService,
    ):
        account = ledger.new_account("u1")
        order = buy_order("apple-listing", "1", "100", symbol="AAPL")
        ledger.execute_trade(account, order)
        holding = account.find_holding(AssetType.STOCK, "apple-listing")

        v = valuation_service.current_value(holding, "INR")

        assert v.current_price == Decimal("200")


# =============================================================================
# SUMMARY TESTS
# =============================================================================


class TestPortfolioSummary:
    """Tests for the portfolio summary."""

    def test_summary_in_base_currency(self, valuation_service: ValuationService, account: Account):
        """
        GIVEN cash 999,500 with AAPL worth 400 and MSFT worth 400
        WHEN summarized in INR
        THEN total value is 1,000,300 and P&L is +300
        """
        summary = valuation_service.portfolio_summary(account, "INR")

        assert summary.cash_balance == Decimal("999500")
        assert summary.holdings_value == Decimal("800")
        assert summary.total_value == Decimal("1000300")
        assert summary.total_pnl == Decimal("300")
        assert summary.pnl_percent == Decimal("0.03")
        assert summary.holdings_count == 2
        assert summary.transactions_count == 2
        assert summary.is_complete

    def test_unpriced_holdings_are_listed(
        self,
        valuation_service: ValuationService,
        deterministic_oracle: DeterministicPriceOracle,
        account: Account,
    ):
        deterministic_oracle.remove_price(AssetType.STOCK, "MSFT")

        summary = valuation_service.portfolio_summary(account, "INR")

        assert summary.unpriced_symbols == ["MSFT"]
        assert summary.total_value == Decimal("999900")
        assert not summary.is_complete

    def test_unconvertible_cash_leaves_totals_unknown(
        self,
        valuation_service: ValuationService,
        account: Account,
    ):
        summary = valuation_service.portfolio_summary(account, "XYZ")

        assert summary.currency == "XYZ"
        assert summary.cash_balance is None
        assert summary.total_value is None
        assert summary.total_pnl is None
        assert summary.unpriced_symbols == ["AAPL", "MSFT"]

    def test_display_currency_conversion(
        self,
        valuation_service: ValuationService,
        account: Account,
    ):
        # INR 80 per USD
        summary = valuation_service.portfolio_summary(account, "usd")

        assert summary.currency == "USD"
        assert summary.cash_balance == Decimal("12493.75")
        assert summary.initial_balance == Decimal("12500")
        assert_decimal_equal(summary.total_value, Decimal("12503.75"))


# =============================================================================
# DISTRIBUTION TESTS
# =============================================================================


class TestDistribution:
    """Tests for the distribution breakdown."""

    def test_shares_sum_to_hundred(self, valuation_service: ValuationService, account: Account):
        items = list(valuation_service.distribution(account, "INR"))

        assert [i.symbol for i in items] == ["AAPL", "MSFT"]
        assert items[0].share_percent == Decimal("50")
        assert sum(i.share_percent for i in items) == Decimal("100")

    def test_unpriced_holdings_excluded(
        self,
        valuation_service: ValuationService,
        deterministic_oracle: DeterministicPriceOracle,
        account: Account,
    ):
        deterministic_oracle.remove_price(AssetType.STOCK, "AAPL")

        items = list(valuation_service.distribution(account, "INR"))

        assert [i.symbol for i in items] == ["MSFT"]
        assert items[0].share_percent == Decimal("100")

    def test_empty_account_has_no_slices(self, valuation_service: ValuationService, ledger: Ledger):
        assert list(valuation_service.distribution(ledger.new_account("u2"), "INR")) == []


# =============================================================================
# CURRENCY TESTS
# =============================================================================


class TestCurrencyConversion:
    """Tests for conversion between currency codes."""

    @pytest.fixture
    def table(self) -> RateTable:
        return RateTable(
            base="USD",
            rates={"EUR": Decimal("0.9"), "INR": Decimal("80")},
        )

    def test_same_currency_needs_no_table(self):
        assert CurrencyConverter.convert(Decimal("5"), "INR", "inr", None) == Decimal("5")

    def test_cross_rate(self, table: RateTable):
        assert CurrencyConverter.convert(Decimal("160"), "INR", "EUR", table) == Decimal("1.8")

    def test_missing_pair_returns_none(self, table: RateTable):
        assert CurrencyConverter.convert(Decimal("1"), "INR", "JPY", table) is None

    def test_round_trip(self, table: RateTable):
        amount = Decimal("123456.78")
        there = CurrencyConverter.convert(amount, "INR", "EUR", table)
        back = CurrencyConverter.convert(there, "EUR", "INR", table)

        assert_decimal_equal(back, amount, tolerance=Decimal("1e-10"))


class TestFxRateService:
    """Tests for rate table caching."""

    def test_table_is_cached_for_ttl(self, fx_provider: FixedFxProvider):
        clock = FakeClock()
        service = FxRateService(fx_provider, cache_ttl_seconds=300, clock=clock)

        service.get_rate_table()
        clock.advance(100)
        service.get_rate_table()

        assert fx_provider.calls == 1

    def test_failure_reuses_last_table(self, fx_provider: FixedFxProvider):
        clock = FakeClock()
        service = FxRateService(fx_provider, cache_ttl_seconds=300, clock=clock)
        first = service.get_rate_table()

        fx_provider.fail = True
        clock.advance(301)

        assert service.get_rate_table() is first

    def test_read_during_first_fill_sees_consistent_cache(self, fx_provider: FixedFxProvider):
        """
        GIVEN a request that reads the table while the first fetch is being stored
        WHEN both reads complete
        THEN each gets a table and neither sees a half-written cache
        """
        clock = FakeClock()
        nested = []

        def clock_that_reads_midway() -> float:
            if not nested:
                nested.append(None)
                nested[0] = service.get_rate_table()
            return clock()

        service = FxRateService(fx_provider, cache_ttl_seconds=300, clock=clock_that_reads_midway)

        table = service.get_rate_table()

        assert table is not None
        assert nested[0] is not None
        assert nested[0].rates == table.rates

    def test_failure_before_first_fetch_means_no_conversion(
        self,
        fx_provider: FixedFxProvider,
        market_data_service,
    ):
        fx_provider.fail = True
        pricing = PricingService(market_data_service, FxRateService(fx_provider))

        assert pricing.convert(Decimal("1"), "INR", "USD") is None
        assert pricing.convert(Decimal("1"), "INR", "INR") == Decimal("1")


class TestPricingQuote:
    """Tests for quotes re-expressed in a display currency."""

    def test_quote_in_display_currency(self, pricing_service: PricingService):
        quote = pricing_service.quote(AssetType.STOCK, "AAPL", "usd")

        assert quote.currency == "USD"
        assert quote.price == Decimal("2.5")

    def test_unknown_asset_has_no_quote(self, pricing_service: PricingService):
        assert pricing_service.quote(AssetType.STOCK, "ZZZZ", "INR") is None
