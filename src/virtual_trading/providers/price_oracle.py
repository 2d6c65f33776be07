"""Price oracle and FX rate provider protocols."""

from typing import Optional, Protocol

from virtual_trading.domain.models import AssetType
from virtual_trading.domain.views import PriceQuote, RateTable


class PriceOracle(Protocol):
    """
    Protocol for live price feeds.

    Implementations return the last-known unit price of an asset in the
    feed's native currency, or None when the feed has no price yet.
    They may raise on network failure; callers degrade gracefully.
    """

    def get_price(self, asset_type: AssetType, asset_id: str) -> Optional[PriceQuote]:
        """Fetch the current quote for one asset."""
        ...


class FxRateProvider(Protocol):
    """Protocol for exchange-rate feeds."""

    def get_rates(self) -> RateTable:
        """Fetch the current rate table."""
        ...
