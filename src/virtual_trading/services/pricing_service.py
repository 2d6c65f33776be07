"""Prices and amounts expressed in a requested currency."""

from decimal import Decimal
from typing import Optional

from virtual_trading.domain.models import AssetType
from virtual_trading.domain.views import PriceQuote
from virtual_trading.services.currency_converter import CurrencyConverter
from virtual_trading.services.fx_rate_service import FxRateService
from virtual_trading.services.market_data_service import MarketDataService


class PricingService:
    """Combines live prices with FX conversion."""

    def __init__(
        self,
        market_data: MarketDataService,
        fx_rates: FxRateService,
        converter: Optional[CurrencyConverter] = None,
    ):
        self._market = market_data
        self._fx = fx_rates
        self._converter = converter or CurrencyConverter()

    def unit_price(
        self,
        asset_type: AssetType,
        asset_id: str,
        currency: str,
        fresh: bool = False,
    ) -> Optional[Decimal]:
        """Unit price of an asset in currency, or None if price or rate is missing."""
        quote = self._market.get_price(asset_type, asset_id, fresh=fresh)
        if quote is None:
            return None
        return self.convert(quote.price, quote.currency, currency)

    def convert(self, amount: Decimal, from_currency: str, to_currency: str) -> Optional[Decimal]:
        """Convert amount using the current rate table."""
        if from_currency.upper() == to_currency.upper():
            return amount
        return self._converter.convert(amount, from_currency, to_currency, self._fx.get_rate_table())

    def quote(self, asset_type: AssetType, asset_id: str, currency: str) -> Optional[PriceQuote]:
        """Current quote for an asset re-expressed in currency, or None if unavailable."""
        native = self._market.get_price(asset_type, asset_id)
        if native is None:
            return None
        price = self.convert(native.price, native.currency, currency)
        if price is None:
            return None
        return PriceQuote(
            asset_id=native.asset_id,
            price=price,
            currency=currency.upper(),
            as_of=native.as_of,
        )
