"""FX rate service with caching."""

import logging
import time
from typing import Callable, Optional

from virtual_trading.domain.views import RateTable
from virtual_trading.providers.price_oracle import FxRateProvider

logger = logging.getLogger(__name__)


class FxRateService:
    """
    Caches the provider's rate table for a TTL.

    On provider failure the last table is reused, however old; before the
    first successful fetch there is no table and conversions report
    unavailable.
    """

    def __init__(
        self,
        provider: FxRateProvider,
        cache_ttl_seconds: float = 300,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._provider = provider
        self._ttl = cache_ttl_seconds
        self._clock = clock
        # (table, fetched_at), replaced in one assignment
        self._cached: Optional[tuple[RateTable, float]] = None

    def get_rate_table(self) -> Optional[RateTable]:
        cached = self._cached
        if cached is not None and self._clock() - cached[1] <= self._ttl:
            return cached[0]

        try:
            table = self._provider.get_rates()
        except Exception as exc:
            logger.warning("FX rate fetch failed, using last known table: %s", exc)
            return cached[0] if cached is not None else None

        self._cached = (table, self._clock())
        return table
