"""View models for market data: price quotes and FX rate tables."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PriceQuote:
    """Last-known unit price of an asset in its native currency."""

    asset_id: str
    price: Decimal
    currency: str
    as_of: Optional[datetime] = None


@dataclass(frozen=True)
class RateTable:
    """
    Exchange rates expressed as units of each currency per one unit of base.

    The base currency is implicitly 1 even if absent from rates.
    """

    base: str
    rates: dict[str, Decimal] = field(default_factory=dict)
    as_of: Optional[datetime] = None

    def rate(self, currency: str) -> Optional[Decimal]:
        """Return the rate for a currency code, or None if the table lacks it."""
        code = currency.upper()
        if code == self.base.upper():
            return Decimal("1")
        return self.rates.get(code)
