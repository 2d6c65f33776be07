"""Market data providers module."""

from virtual_trading.providers.price_oracle import PriceOracle, FxRateProvider
from virtual_trading.providers.stub_provider import StubPriceOracle, StubFxRateProvider

__all__ = [
    "PriceOracle",
    "FxRateProvider",
    "StubPriceOracle",
    "StubFxRateProvider",
]
