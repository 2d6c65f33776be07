"""Core utilities and shared functionality."""

from virtual_trading.core.timezone import now_utc, to_utc, UTC_TZ
from virtual_trading.core.exceptions import (
    AppError,
    ValidationError,
    NotFoundError,
    AccountNotFoundError,
    TradeRejectedError,
    NoAssetSelectedError,
    PriceUnavailableError,
    InvalidQuantityError,
    InsufficientFundsError,
    InsufficientHoldingsError,
    AssetNotHeldError,
)

__all__ = [
    "now_utc",
    "to_utc",
    "UTC_TZ",
    "AppError",
    "ValidationError",
    "NotFoundError",
    "AccountNotFoundError",
    "TradeRejectedError",
    "NoAssetSelectedError",
    "PriceUnavailableError",
    "InvalidQuantityError",
    "InsufficientFundsError",
    "InsufficientHoldingsError",
    "AssetNotHeldError",
]
