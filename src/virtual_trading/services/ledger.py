"""Ledger engine: trade execution with weighted-average cost accounting."""

import logging
import uuid
from decimal import Decimal
from typing import Callable, Optional

from virtual_trading.core.timezone import now_utc
from virtual_trading.domain.models import (
    Account,
    Holding,
    TradeOrder,
    TradeType,
    Transaction,
)
from virtual_trading.services.trade_validator import (
    DEFAULT_POLICY,
    QuantityPolicy,
    ensure_executable,
)

logger = logging.getLogger(__name__)

# A holding whose quantity falls to or below this is closed
QUANTITY_EPSILON = Decimal("1e-12")


class Ledger:
    """
    Sole authority over Account mutation.

    Every check runs before the first write, so a rejected order leaves the
    account untouched and an accepted one updates balance, holding and
    history together. Callers serialize access per account (see
    LedgerService); the engine itself holds no state besides configuration.
    """

    def __init__(
        self,
        initial_balance: Decimal = Decimal("1000000"),
        policy: QuantityPolicy = DEFAULT_POLICY,
        base_currency: str = "INR",
        clock: Callable = now_utc,
        id_factory: Optional[Callable[[], str]] = None,
    ):
        self._initial_balance = Decimal(initial_balance)
        self._policy = policy
        self._base_currency = base_currency
        self._clock = clock
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

    @property
    def initial_balance(self) -> Decimal:
        return self._initial_balance

    @property
    def policy(self) -> QuantityPolicy:
        return self._policy

    @property
    def base_currency(self) -> str:
        return self._base_currency

    def new_account(self, user_id: str) -> Account:
        """Create an account holding only the initial balance."""
        now = self._clock()
        return Account(
            user_id=user_id,
            balance=self._initial_balance,
            created_at=now,
            updated_at=now,
        )

    def execute_trade(self, account: Account, order: TradeOrder) -> Account:
        """
        Execute an immediate market order at order.price.

        Raises a TradeRejectedError subclass without touching the account
        when the order fails validation.
        """
        ensure_executable(
            account,
            order,
            order.price,
            policy=self._policy,
            currency=self._base_currency,
        )

        asset_id = order.asset_id
        quantity = order.quantity
        price = order.price
        total = quantity * price

        if order.txn_type == TradeType.BUY:
            self._apply_buy(account, order, asset_id, quantity, price, total)
        else:
            self._apply_sell(account, order, asset_id, quantity)

        timestamp = self._clock()
        account.transactions.append(
            Transaction(
                txn_id=self._id_factory(),
                timestamp=timestamp,
                txn_type=order.txn_type,
                asset_type=order.asset_type,
                asset_id=asset_id,
                symbol=order.symbol,
                name=order.name,
                quantity=quantity,
                price=price,
                total=total,
                balance_after=account.balance,
            )
        )
        account.updated_at = timestamp

        logger.info(
            "Executed %s %s %s @ %s for %s (balance %s)",
            order.txn_type.value,
            quantity,
            order.symbol or asset_id,
            price,
            account.user_id,
            account.balance,
        )
        return account

    def reset(self, account: Account) -> Account:
        """Return a fresh account for the same user. Always succeeds."""
        logger.info("Resetting account %s", account.user_id)
        return self.new_account(account.user_id)

    @staticmethod
    def _apply_buy(
        account: Account,
        order: TradeOrder,
        asset_id: str,
        quantity: Decimal,
        price: Decimal,
        cost: Decimal,
    ) -> None:
        account.balance -= cost

        holding = account.find_holding(order.asset_type, asset_id)
        if holding is None:
            holding = Holding(
                asset_type=order.asset_type,
                asset_id=asset_id,
                symbol=order.symbol,
                name=order.name,
                quantity=quantity,
                avg_buy_price=price,
                total_cost=cost,
            )
            account.holdings[holding.key] = holding
            return

        new_quantity = holding.quantity + quantity
        holding.avg_buy_price = (holding.quantity * holding.avg_buy_price + cost) / new_quantity
        holding.total_cost += cost
        holding.quantity = new_quantity
        # Display cache follows the latest order
        if order.symbol:
            holding.symbol = order.symbol
        if order.name:
            holding.name = order.name

    @staticmethod
    def _apply_sell(
        account: Account,
        order: TradeOrder,
        asset_id: str,
        quantity: Decimal,
    ) -> None:
        holding = account.find_holding(order.asset_type, asset_id)
        account.balance += quantity * order.price

        holding.quantity -= quantity
        # Cost basis shrinks at average cost; avg_buy_price is unchanged
        holding.total_cost -= quantity * holding.avg_buy_price

        if holding.quantity <= QUANTITY_EPSILON:
            del account.holdings[holding.key]
