"""Stub price and FX providers for offline/testing use."""

from decimal import Decimal
from typing import Optional

from virtual_trading.core.timezone import now_utc
from virtual_trading.domain.models import AssetType
from virtual_trading.domain.views import PriceQuote, RateTable


# Deterministic USD prices. Crypto assets are keyed by listing id, stocks by ticker.
_STUB_PRICES: dict[tuple[AssetType, str], Decimal] = {
    (AssetType.CRYPTO, "1"): Decimal("67250.00"),  # BTC
    (AssetType.CRYPTO, "1027"): Decimal("3480.50"),  # ETH
    (AssetType.CRYPTO, "825"): Decimal("1.00"),  # USDT
    (AssetType.CRYPTO, "1839"): Decimal("585.20"),  # BNB
    (AssetType.CRYPTO, "5426"): Decimal("152.75"),  # SOL
    (AssetType.CRYPTO, "52"): Decimal("0.52"),  # XRP
    (AssetType.CRYPTO, "74"): Decimal("0.1525"),  # DOGE
    (AssetType.STOCK, "AAPL"): Decimal("185.50"),
    (AssetType.STOCK, "GOOGL"): Decimal("142.75"),
    (AssetType.STOCK, "MSFT"): Decimal("378.25"),
    (AssetType.STOCK, "AMZN"): Decimal("178.50"),
    (AssetType.STOCK, "TSLA"): Decimal("248.75"),
    (AssetType.STOCK, "NVDA"): Decimal("485.25"),
    (AssetType.STOCK, "META"): Decimal("505.50"),
}

# Units per USD
_STUB_RATES: dict[str, Decimal] = {
    "USD": Decimal("1"),
    "EUR": Decimal("0.92"),
    "GBP": Decimal("0.79"),
    "INR": Decimal("83.12"),
    "JPY": Decimal("151.40"),
    "AUD": Decimal("1.52"),
    "CAD": Decimal("1.36"),
    "CHF": Decimal("0.90"),
}


class StubPriceOracle:
    """
    Stub oracle with deterministic fake USD prices for offline operation.

    Unknown assets have no price, which exercises the price-pending paths.
    """

    def __init__(self, prices: Optional[dict[tuple[AssetType, str], Decimal]] = None):
        self._prices = dict(_STUB_PRICES if prices is None else prices)

    def get_price(self, asset_type: AssetType, asset_id: str) -> Optional[PriceQuote]:
        """Return the stub quote for an asset, or None if unknown."""
        key = (AssetType(asset_type), self._normalize(asset_type, asset_id))
        price = self._prices.get(key)
        if price is None:
            return None
        return PriceQuote(asset_id=key[1], price=price, currency="USD", as_of=now_utc())

    @staticmethod
    def _normalize(asset_type: AssetType, asset_id: str) -> str:
        asset_id = str(asset_id).strip()
        return asset_id.upper() if AssetType(asset_type) == AssetType.STOCK else asset_id


class StubFxRateProvider:
    """Stub FX provider with fixed USD-based rates."""

    def __init__(self, rates: Optional[dict[str, Decimal]] = None):
        self._rates = dict(_STUB_RATES if rates is None else rates)

    def get_rates(self) -> RateTable:
        return RateTable(base="USD", rates=dict(self._rates), as_of=now_utc())
