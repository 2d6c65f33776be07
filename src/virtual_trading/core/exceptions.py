"""Application-level exceptions."""


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class ValidationError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str):
        super().__init__(message, code="VALIDATION_ERROR")


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str, code: str = "NOT_FOUND"):
        super().__init__(f"{resource} not found: {identifier}", code=code)


class AccountNotFoundError(NotFoundError):
    """Raised when a trade targets a user who has no virtual account yet."""

    def __init__(self, user_id: str):
        super().__init__("Account", user_id, code="ACCOUNT_NOT_FOUND")


class TradeRejectedError(AppError):
    """
    Base for order rejections.

    A rejected order leaves the account exactly as it was.
    """

    def __init__(self, message: str, code: str):
        super().__init__(message, code=code)


class NoAssetSelectedError(TradeRejectedError):
    """Raised when an order does not name an asset."""

    def __init__(self, message: str = "No asset selected"):
        super().__init__(message, code="NO_ASSET_SELECTED")


class PriceUnavailableError(TradeRejectedError):
    """Raised when no usable price exists for the asset."""

    def __init__(self, message: str = "Price unavailable"):
        super().__init__(message, code="PRICE_UNAVAILABLE")


class InvalidQuantityError(TradeRejectedError):
    """Raised for non-positive quantities or quantities off the asset's step."""

    def __init__(self, message: str = "Invalid quantity"):
        super().__init__(message, code="INVALID_QUANTITY")


class InsufficientFundsError(TradeRejectedError):
    """Raised when a buy costs more than the available balance."""

    def __init__(self, message: str = "Insufficient balance"):
        super().__init__(message, code="INSUFFICIENT_FUNDS")


class InsufficientHoldingsError(TradeRejectedError):
    """Raised when attempting to sell more units than held."""

    def __init__(self, message: str = "Insufficient holdings"):
        super().__init__(message, code="INSUFFICIENT_HOLDINGS")


class AssetNotHeldError(TradeRejectedError):
    """Raised when attempting to sell an asset with no open holding."""

    def __init__(self, message: str = "Asset not held"):
        super().__init__(message, code="ASSET_NOT_HELD")
