"""Service layer - business logic orchestration."""

from virtual_trading.services.account_locks import AccountLockRegistry
from virtual_trading.services.currency_converter import CurrencyConverter
from virtual_trading.services.fx_rate_service import FxRateService
from virtual_trading.services.ledger import Ledger, QUANTITY_EPSILON
from virtual_trading.services.ledger_service import LedgerService
from virtual_trading.services.market_data_service import MarketDataService
from virtual_trading.services.pricing_service import PricingService
from virtual_trading.services.trade_validator import (
    DEFAULT_POLICY,
    QuantityPolicy,
    can_execute,
    ensure_executable,
)
from virtual_trading.services.valuation_service import ValuationService, unrealized_pnl

__all__ = [
    "AccountLockRegistry",
    "CurrencyConverter",
    "FxRateService",
    "Ledger",
    "QUANTITY_EPSILON",
    "LedgerService",
    "MarketDataService",
    "PricingService",
    "DEFAULT_POLICY",
    "QuantityPolicy",
    "can_execute",
    "ensure_executable",
    "ValuationService",
    "unrealized_pnl",
]
