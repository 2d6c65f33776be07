"""Ledger service: account lifecycle and trade execution against a store."""

import dataclasses
import logging
from decimal import Decimal
from typing import Optional

from virtual_trading.core.exceptions import AccountNotFoundError, TradeRejectedError
from virtual_trading.domain.models import Account, TradeOrder
from virtual_trading.domain.views import TradeDecision
from virtual_trading.repositories.protocols import AccountStore
from virtual_trading.services.account_locks import AccountLockRegistry
from virtual_trading.services.ledger import Ledger
from virtual_trading.services.pricing_service import PricingService
from virtual_trading.services.trade_validator import can_execute

logger = logging.getLogger(__name__)


class LedgerService:
    """
    Service for managing virtual accounts.

    Wraps the Ledger engine with persistence and per-account locking:
    load, validate, mutate and save happen under the account's lock, so two
    trades on one account never interleave. Everything handed back is a
    snapshot the caller may keep.
    """

    def __init__(
        self,
        store: AccountStore,
        ledger: Ledger,
        locks: AccountLockRegistry,
        pricing: Optional[PricingService] = None,
        reprice_orders: bool = False,
    ):
        if reprice_orders and pricing is None:
            raise ValueError("reprice_orders requires a PricingService")
        self._store = store
        self._ledger = ledger
        self._locks = locks
        self._pricing = pricing
        self._reprice = reprice_orders

    @property
    def ledger(self) -> Ledger:
        return self._ledger

    def get_portfolio(self, user_id: str) -> Account:
        """Return the user's account, creating it on first access."""
        with self._locks.lock_for(user_id):
            return self._load_or_create(user_id).snapshot()

    def check_trade(self, user_id: str, order: TradeOrder) -> tuple[TradeDecision, Optional[Decimal]]:
        """
        Pre-submit gate: would this order execute right now?

        Runs the same rules with the same price that place_trade would use.
        Returns the decision and that price. Nothing is written.
        """
        with self._locks.lock_for(user_id):
            account = self._load_or_create(user_id, persist=False)
            price = self._execution_price(order)
            decision = can_execute(
                account,
                order,
                price,
                policy=self._ledger.policy,
                currency=self._ledger.base_currency,
            )
        return decision, price

    def place_trade(self, user_id: str, order: TradeOrder) -> Account:
        """
        Execute an order against the user's account and persist the result.

        Raises:
            AccountNotFoundError: If the user has no account yet
            TradeRejectedError: If the order fails validation
        """
        with self._locks.lock_for(user_id):
            account = self._store.load(user_id)
            if account is None:
                raise AccountNotFoundError(user_id)

            if self._reprice:
                order = dataclasses.replace(order, price=self._execution_price(order))

            try:
                account = self._ledger.execute_trade(account, order)
            except TradeRejectedError as exc:
                logger.info(
                    "Rejected %s %s for %s: %s",
                    order.txn_type.value,
                    order.symbol or order.asset_id,
                    user_id,
                    exc.code,
                )
                raise

            self._store.save(account)
            return account.snapshot()

    def reset(self, user_id: str) -> Account:
        """Replace the user's account with a fresh one."""
        with self._locks.lock_for(user_id):
            account = self._store.load(user_id) or self._ledger.new_account(user_id)
            account = self._ledger.reset(account)
            self._store.save(account)
            return account.snapshot()

    def _load_or_create(self, user_id: str, persist: bool = True) -> Account:
        account = self._store.load(user_id)
        if account is None:
            account = self._ledger.new_account(user_id)
            if persist:
                logger.info("Created virtual account for %s", user_id)
                self._store.save(account)
        return account

    def _execution_price(self, order: TradeOrder) -> Optional[Decimal]:
        """The order's own quote, or a fresh base-currency quote when repricing."""
        if not self._reprice:
            return order.price
        if not order.asset_id:
            return None
        return self._pricing.unit_price(
            order.asset_type,
            order.asset_id,
            self._ledger.base_currency,
            fresh=True,
        )
