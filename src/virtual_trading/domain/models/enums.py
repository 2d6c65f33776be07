"""Enumerations for domain models."""

from enum import Enum


class TradeType(str, Enum):
    """Side of a market order."""

    BUY = "buy"
    SELL = "sell"


class AssetType(str, Enum):
    """Asset classes that can be traded."""

    CRYPTO = "crypto"
    STOCK = "stock"


class RejectionReason(str, Enum):
    """Reasons the trade validator can refuse an order."""

    NO_ASSET_SELECTED = "NO_ASSET_SELECTED"
    PRICE_UNAVAILABLE = "PRICE_UNAVAILABLE"
    INVALID_QUANTITY = "INVALID_QUANTITY"
    INSUFFICIENT_FUNDS = "INSUFFICIENT_FUNDS"
    INSUFFICIENT_HOLDINGS = "INSUFFICIENT_HOLDINGS"
    ASSET_NOT_HELD = "ASSET_NOT_HELD"
