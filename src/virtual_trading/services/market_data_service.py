"""Market data service for asset prices."""

import logging
import time
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from typing import Callable, Optional

from virtual_trading.domain.models import AssetType
from virtual_trading.domain.views import PriceQuote
from virtual_trading.providers.price_oracle import PriceOracle

logger = logging.getLogger(__name__)

DEFAULT_TTL_SECONDS = 30
DEFAULT_FETCH_TIMEOUT_SECONDS = 10


class MarketDataService:
    """
    Service for fetching asset prices from a PriceOracle.

    Wraps the oracle with a per-asset TTL cache, a call timeout and graceful
    degradation: a timeout or oracle error falls back to the last cached
    quote, or to None (price unavailable). It never raises.
    """

    def __init__(
        self,
        oracle: PriceOracle,
        cache_ttl_seconds: float = DEFAULT_TTL_SECONDS,
        fetch_timeout_seconds: float = DEFAULT_FETCH_TIMEOUT_SECONDS,
        clock: Callable[[], float] = time.monotonic,
        max_workers: int = 4,
    ):
        self._oracle = oracle
        self._ttl = cache_ttl_seconds
        self._fetch_timeout = fetch_timeout_seconds
        self._clock = clock
        # (asset_type, asset_id) -> (quote, cached_at)
        self._cache: dict[tuple[AssetType, str], tuple[PriceQuote, float]] = {}
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="price-feed")

    def get_price(
        self,
        asset_type: AssetType,
        asset_id: str,
        fresh: bool = False,
    ) -> Optional[PriceQuote]:
        """
        Return the quote for an asset, or None if no price is available.

        fresh=True bypasses the cache; trade execution uses it so that an
        order is never validated against a stale quote.
        """
        key = (AssetType(asset_type), str(asset_id).strip())
        if not key[1]:
            return None

        cached = self._cache.get(key)
        if not fresh and cached and self._clock() - cached[1] <= self._ttl:
            return cached[0]

        quote = self._fetch(key)
        if quote is not None:
            self._cache[key] = (quote, self._clock())
            return quote

        if cached and not fresh:
            # Feed failed: keep showing the last known price on read paths
            return cached[0]
        return None

    def close(self) -> None:
        """Release the worker pool."""
        self._executor.shutdown(wait=False)

    def _fetch(self, key: tuple[AssetType, str]) -> Optional[PriceQuote]:
        asset_type, asset_id = key
        future = self._executor.submit(self._oracle.get_price, asset_type, asset_id)
        try:
            quote = future.result(timeout=self._fetch_timeout)
        except FuturesTimeoutError:
            future.cancel()
            logger.warning("Price feed timed out for %s/%s", asset_type.value, asset_id)
            return None
        except Exception as exc:
            logger.warning("Price feed failed for %s/%s: %s", asset_type.value, asset_id, exc)
            return None

        if quote is None or quote.price is None or quote.price <= 0:
            return None
        return quote
