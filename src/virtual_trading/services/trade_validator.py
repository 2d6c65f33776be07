"""
Trade validation rules.

This module is the only place that decides whether an order may execute.
The pre-submit check endpoint and the Ledger both call can_execute with the
same price that execution will use.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, getcontext, localcontext
from typing import Optional

from virtual_trading.core.exceptions import (
    TradeRejectedError,
    NoAssetSelectedError,
    PriceUnavailableError,
    InvalidQuantityError,
    InsufficientFundsError,
    InsufficientHoldingsError,
    AssetNotHeldError,
)
from virtual_trading.domain.models import (
    Account,
    AssetType,
    RejectionReason,
    TradeOrder,
    TradeType,
)
from virtual_trading.domain.views import TradeDecision


@dataclass(frozen=True)
class QuantityPolicy:
    """Smallest tradable increment per asset type."""

    crypto_step: Decimal = Decimal("0.00000001")
    stock_step: Decimal = Decimal("1")

    def step_for(self, asset_type: AssetType) -> Decimal:
        if AssetType(asset_type) == AssetType.CRYPTO:
            return self.crypto_step
        return self.stock_step

    def is_valid(self, asset_type: AssetType, quantity: Decimal) -> bool:
        """True if quantity is a whole multiple of the asset type's step."""
        step = self.step_for(asset_type)
        if step <= 0:
            return True
        if not quantity.is_finite():
            return False
        # Room for every digit of quantity / step so the remainder is exact
        digits = max(quantity.adjusted() - step.as_tuple().exponent + 2, getcontext().prec)
        with localcontext() as ctx:
            ctx.prec = digits
            try:
                return quantity % step == 0
            except InvalidOperation:
                return False


DEFAULT_POLICY = QuantityPolicy()

_REJECTION_ERRORS: dict[RejectionReason, type[TradeRejectedError]] = {
    RejectionReason.NO_ASSET_SELECTED: NoAssetSelectedError,
    RejectionReason.PRICE_UNAVAILABLE: PriceUnavailableError,
    RejectionReason.INVALID_QUANTITY: InvalidQuantityError,
    RejectionReason.INSUFFICIENT_FUNDS: InsufficientFundsError,
    RejectionReason.INSUFFICIENT_HOLDINGS: InsufficientHoldingsError,
    RejectionReason.ASSET_NOT_HELD: AssetNotHeldError,
}


def _money(value: Decimal, currency: str) -> str:
    return f"{value:,.2f} {currency}".strip()


def _units(value: Decimal) -> str:
    return format(value.normalize(), "f")


def can_execute(
    account: Account,
    order: TradeOrder,
    live_price: Optional[Decimal],
    policy: QuantityPolicy = DEFAULT_POLICY,
    currency: str = "",
) -> TradeDecision:
    """
    Decide whether order may execute against account at live_price.

    Rules are checked in order and the first failure wins:
    asset present, price positive, quantity positive and on the asset's
    step, then affordability (buy) or holdings (sell).
    """
    if not order.asset_id:
        return TradeDecision.reject(RejectionReason.NO_ASSET_SELECTED, "Select an asset to trade")

    if live_price is None or live_price <= 0:
        return TradeDecision.reject(
            RejectionReason.PRICE_UNAVAILABLE,
            f"Price unavailable for {order.symbol or order.asset_id}",
        )

    quantity = order.quantity
    if quantity is None or quantity.is_nan() or quantity <= 0:
        return TradeDecision.reject(RejectionReason.INVALID_QUANTITY, "Quantity must be greater than zero")
    if not policy.is_valid(order.asset_type, quantity):
        step = policy.step_for(order.asset_type)
        return TradeDecision.reject(
            RejectionReason.INVALID_QUANTITY,
            f"Quantity for {order.asset_type.value} must be a multiple of {_units(step)}",
        )

    if order.txn_type == TradeType.BUY:
        cost = quantity * live_price
        if cost > account.balance:
            return TradeDecision.reject(
                RejectionReason.INSUFFICIENT_FUNDS,
                f"Insufficient balance. You need {_money(cost, currency)} "
                f"but have {_money(account.balance, currency)}",
            )
    else:
        holding = account.find_holding(order.asset_type, order.asset_id)
        if holding is None:
            return TradeDecision.reject(
                RejectionReason.ASSET_NOT_HELD,
                f"You do not hold any {order.symbol or order.asset_id}",
            )
        if quantity > holding.quantity:
            return TradeDecision.reject(
                RejectionReason.INSUFFICIENT_HOLDINGS,
                f"Insufficient holdings. You have {_units(holding.quantity)} {holding.symbol}",
            )

    return TradeDecision.accept()


def ensure_executable(
    account: Account,
    order: TradeOrder,
    live_price: Optional[Decimal],
    policy: QuantityPolicy = DEFAULT_POLICY,
    currency: str = "",
) -> None:
    """Run can_execute and raise the matching TradeRejectedError on failure."""
    decision = can_execute(account, order, live_price, policy=policy, currency=currency)
    if not decision.ok:
        raise _REJECTION_ERRORS[decision.reason](decision.message)
