"""Dependency injection for FastAPI."""

from typing import Optional

from fastapi import Depends, Header, Query, Request
from sqlalchemy.orm import Session

from virtual_trading.config.settings import get_settings
from virtual_trading.core.exceptions import ValidationError
from virtual_trading.repositories import AccountStore
from virtual_trading.repositories.sqlalchemy import SqlAlchemyAccountStore, get_db
from virtual_trading.services import (
    AccountLockRegistry,
    FxRateService,
    Ledger,
    LedgerService,
    MarketDataService,
    PricingService,
    QuantityPolicy,
    ValuationService,
)


def get_user_id(x_user_id: Optional[str] = Header(None)) -> str:
    """Resolve the acting user from X-User-ID, falling back to the default user."""
    user_id = (x_user_id or "").strip()
    return user_id or get_settings().default_user_id


def get_display_currency(
    currency: Optional[str] = Query(None, description="Display currency code"),
) -> str:
    """Resolve the display currency, falling back to the configured default."""
    code = (currency or get_settings().default_display_currency).strip().upper()
    if len(code) != 3 or not code.isalpha():
        raise ValidationError(f"Invalid currency code: {currency}")
    return code


def get_account_store(db: Session = Depends(get_db)) -> AccountStore:
    """Provide AccountStore instance (replaced by the memory store when configured)."""
    return SqlAlchemyAccountStore(db)


def get_account_locks(request: Request) -> AccountLockRegistry:
    """Provide the application's per-account lock registry."""
    return request.app.state.account_locks


def get_market_data_service(request: Request) -> MarketDataService:
    """Provide the shared MarketDataService (its cache outlives requests)."""
    return request.app.state.market_data


def get_fx_rate_service(request: Request) -> FxRateService:
    """Provide the shared FxRateService."""
    return request.app.state.fx_rates


def get_pricing_service(
    market_data: MarketDataService = Depends(get_market_data_service),
    fx_rates: FxRateService = Depends(get_fx_rate_service),
) -> PricingService:
    """Provide PricingService instance."""
    return PricingService(market_data=market_data, fx_rates=fx_rates)


def get_ledger() -> Ledger:
    """Provide a Ledger configured from settings."""
    settings = get_settings()
    return Ledger(
        initial_balance=settings.initial_balance,
        policy=QuantityPolicy(
            crypto_step=settings.crypto_quantity_step,
            stock_step=settings.stock_quantity_step,
        ),
        base_currency=settings.base_currency,
    )


def get_ledger_service(
    store: AccountStore = Depends(get_account_store),
    ledger: Ledger = Depends(get_ledger),
    locks: AccountLockRegistry = Depends(get_account_locks),
    pricing: PricingService = Depends(get_pricing_service),
) -> LedgerService:
    """Provide LedgerService instance."""
    return LedgerService(
        store=store,
        ledger=ledger,
        locks=locks,
        pricing=pricing,
        reprice_orders=get_settings().reprice_orders,
    )


def get_valuation_service(
    pricing: PricingService = Depends(get_pricing_service),
    ledger: Ledger = Depends(get_ledger),
) -> ValuationService:
    """Provide ValuationService instance."""
    return ValuationService(
        pricing=pricing,
        base_currency=ledger.base_currency,
        initial_balance=ledger.initial_balance,
    )
