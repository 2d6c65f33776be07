"""Currency conversion against a rate table."""

from decimal import Decimal
from typing import Optional

from virtual_trading.domain.views import RateTable


class CurrencyConverter:
    """Converts amounts between currency codes using a RateTable."""

    @staticmethod
    def convert(
        amount: Decimal,
        from_currency: str,
        to_currency: str,
        rate_table: Optional[RateTable],
    ) -> Optional[Decimal]:
        """
        Convert amount from one currency to another.

        Returns None when the table is missing either currency. Converting a
        currency to itself needs no table.
        """
        if from_currency.upper() == to_currency.upper():
            return amount
        if rate_table is None:
            return None

        from_rate = rate_table.rate(from_currency)
        to_rate = rate_table.rate(to_currency)
        if not from_rate or not to_rate:
            return None
        return amount / from_rate * to_rate
