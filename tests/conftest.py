"""
Pytest configuration and fixtures for virtual trading tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic, failing and slow price oracles and a fixed FX provider
- A controllable monotonic clock for cache TTL tests
- Service and store fixtures
- FastAPI test client with dependency overrides
"""

import threading
from datetime import datetime
from decimal import Decimal
from itertools import count
from typing import Optional, Union

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from virtual_trading.main import app
from virtual_trading.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from virtual_trading.repositories.sqlalchemy import orm_models  # noqa: F401
from virtual_trading.repositories.sqlalchemy import SqlAlchemyAccountStore
from virtual_trading.repositories import InMemoryAccountStore
from virtual_trading.config.settings import Settings, set_settings, reset_settings
from virtual_trading.core.timezone import UTC_TZ
from virtual_trading.domain.models import AssetType, TradeOrder, TradeType
from virtual_trading.domain.views import PriceQuote, RateTable
from virtual_trading.services import (
    AccountLockRegistry,
    FxRateService,
    Ledger,
    LedgerService,
    MarketDataService,
    PricingService,
    ValuationService,
)


# =============================================================================
# TIME HELPERS
# =============================================================================


def utc_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in UTC."""
    return UTC_TZ.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Monotonic clock the test advances by hand."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def fixed_now() -> datetime:
    """Fixed 'now' timestamp for deterministic tests."""
    return utc_datetime(2024, 6, 15, 14, 30, 0)


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# STORE FIXTURES
# =============================================================================


@pytest.fixture
def memory_store() -> InMemoryAccountStore:
    return InMemoryAccountStore()


@pytest.fixture
def sqlite_store(test_session) -> SqlAlchemyAccountStore:
    """Provide test AccountStore backed by SQLite."""
    return SqlAlchemyAccountStore(test_session)


# =============================================================================
# PRICE AND FX PROVIDERS
# =============================================================================


# Unit prices in INR, keyed like the oracle
DETERMINISTIC_PRICES: dict[tuple[AssetType, str], Decimal] = {
    (AssetType.STOCK, "AAPL"): Decimal("200"),
    (AssetType.STOCK, "MSFT"): Decimal("400"),
    (AssetType.CRYPTO, "1"): Decimal("5000000"),
    (AssetType.CRYPTO, "1027"): Decimal("250000"),
}

# Units per USD
FIXED_RATES: dict[str, Decimal] = {
    "EUR": Decimal("0.9"),
    "GBP": Decimal("0.8"),
    "INR": Decimal("80"),
}


class DeterministicPriceOracle:
    """Oracle with fixed prices that tests can change; counts calls."""

    def __init__(
        self,
        prices: Optional[dict[tuple[AssetType, str], Decimal]] = None,
        currency: str = "INR",
    ):
        self.prices = dict(DETERMINISTIC_PRICES if prices is None else prices)
        self.currency = currency
        self.calls = 0

    def set_price(self, asset_type: AssetType, asset_id: str, price: Union[Decimal, str]) -> None:
        self.prices[(asset_type, asset_id)] = Decimal(price)

    def remove_price(self, asset_type: AssetType, asset_id: str) -> None:
        self.prices.pop((asset_type, asset_id), None)

    def get_price(self, asset_type: AssetType, asset_id: str) -> Optional[PriceQuote]:
        self.calls += 1
        price = self.prices.get((AssetType(asset_type), asset_id))
        if price is None:
            return None
        return PriceQuote(asset_id=asset_id, price=price, currency=self.currency)


class FailingPriceOracle:
    """Oracle whose feed is down."""

    def __init__(self):
        self.calls = 0

    def get_price(self, asset_type: AssetType, asset_id: str) -> Optional[PriceQuote]:
        self.calls += 1
        raise ConnectionError("price feed unreachable")


class SlowPriceOracle:
    """Oracle that answers only after a delay, or once released."""

    def __init__(self, delay: float = 1.0, price: Decimal = Decimal("100")):
        self.delay = delay
        self.price = price
        self.release = threading.Event()

    def get_price(self, asset_type: AssetType, asset_id: str) -> Optional[PriceQuote]:
        self.release.wait(self.delay)
        return PriceQuote(asset_id=asset_id, price=self.price, currency="INR")


class FixedFxProvider:
    """USD-based rate table with fixed rates; can be switched to fail."""

    def __init__(self, rates: Optional[dict[str, Decimal]] = None):
        self.rates = dict(FIXED_RATES if rates is None else rates)
        self.fail = False
        self.calls = 0

    def get_rates(self) -> RateTable:
        self.calls += 1
        if self.fail:
            raise ConnectionError("fx feed unreachable")
        return RateTable(base="USD", rates=dict(self.rates))


@pytest.fixture
def deterministic_oracle() -> DeterministicPriceOracle:
    return DeterministicPriceOracle()


@pytest.fixture
def failing_oracle() -> FailingPriceOracle:
    return FailingPriceOracle()


@pytest.fixture
def fx_provider() -> FixedFxProvider:
    return FixedFxProvider()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def ledger(fixed_now) -> Ledger:
    """Ledger with a fixed clock and sequential transaction ids."""
    ids = count(1)
    return Ledger(
        initial_balance=Decimal("1000000"),
        base_currency="INR",
        clock=lambda: fixed_now,
        id_factory=lambda: f"txn-{next(ids)}",
    )


@pytest.fixture
def account_locks() -> AccountLockRegistry:
    return AccountLockRegistry()


@pytest.fixture
def market_data_service(deterministic_oracle) -> MarketDataService:
    service = MarketDataService(
        oracle=deterministic_oracle,
        cache_ttl_seconds=30,
        fetch_timeout_seconds=2,
    )
    yield service
    service.close()


@pytest.fixture
def fx_rate_service(fx_provider) -> FxRateService:
    return FxRateService(provider=fx_provider, cache_ttl_seconds=300)


@pytest.fixture
def pricing_service(market_data_service, fx_rate_service) -> PricingService:
    return PricingService(market_data=market_data_service, fx_rates=fx_rate_service)


@pytest.fixture
def ledger_service(memory_store, ledger, account_locks, pricing_service) -> LedgerService:
    """LedgerService trading at the order's own price."""
    return LedgerService(
        store=memory_store,
        ledger=ledger,
        locks=account_locks,
        pricing=pricing_service,
    )


@pytest.fixture
def repricing_ledger_service(memory_store, ledger, account_locks, pricing_service) -> LedgerService:
    """LedgerService that executes at a fresh oracle price."""
    return LedgerService(
        store=memory_store,
        ledger=ledger,
        locks=account_locks,
        pricing=pricing_service,
        reprice_orders=True,
    )


@pytest.fixture
def valuation_service(pricing_service) -> ValuationService:
    return ValuationService(
        pricing=pricing_service,
        base_currency="INR",
        initial_balance=Decimal("1000000"),
    )


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def client(test_engine) -> TestClient:
    """Provide FastAPI test client with test database and stub market data."""
    set_settings(Settings(database_url="sqlite://", storage_backend="sqlite"))
    reset_database()
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(actual - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"


def buy_order(
    asset_id: Optional[str],
    quantity: Union[Decimal, str, None],
    price: Union[Decimal, str, None],
    asset_type: AssetType = AssetType.STOCK,
    symbol: Optional[str] = None,
) -> TradeOrder:
    """Helper to build a BUY order."""
    return TradeOrder(
        txn_type=TradeType.BUY,
        asset_type=asset_type,
        asset_id=asset_id,
        symbol=symbol if symbol is not None else (asset_id or ""),
        name=symbol or asset_id or "",
        quantity=Decimal(quantity) if quantity is not None else None,
        price=Decimal(price) if price is not None else None,
    )


def sell_order(
    asset_id: Optional[str],
    quantity: Union[Decimal, str, None],
    price: Union[Decimal, str, None],
    asset_type: AssetType = AssetType.STOCK,
    symbol: Optional[str] = None,
) -> TradeOrder:
    """Helper to build a SELL order."""
    order = buy_order(asset_id, quantity, price, asset_type=asset_type, symbol=symbol)
    order.txn_type = TradeType.SELL
    return order

