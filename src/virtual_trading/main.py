"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from virtual_trading import __version__
from virtual_trading.api.deps import get_account_store
from virtual_trading.api.routers import quotes_router, virtual_portfolio_router
from virtual_trading.config.logging_config import setup_logging
from virtual_trading.config.settings import get_settings
from virtual_trading.core.exceptions import AppError, NotFoundError
from virtual_trading.providers import StubFxRateProvider, StubPriceOracle
from virtual_trading.repositories import InMemoryAccountStore
from virtual_trading.repositories.sqlalchemy.database import init_db
from virtual_trading.services import AccountLockRegistry, FxRateService, MarketDataService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    settings = get_settings()

    if settings.storage_backend == "memory":
        store = InMemoryAccountStore()
        app.state.memory_store = store
        app.dependency_overrides[get_account_store] = lambda: store
    else:
        init_db()

    app.state.account_locks = AccountLockRegistry()
    app.state.market_data = MarketDataService(
        oracle=StubPriceOracle(),
        cache_ttl_seconds=settings.price_cache_ttl_seconds,
        fetch_timeout_seconds=settings.price_fetch_timeout_seconds,
    )
    app.state.fx_rates = FxRateService(
        provider=StubFxRateProvider(),
        cache_ttl_seconds=settings.fx_cache_ttl_seconds,
    )
    logger.info(
        "Started %s (storage=%s, base currency=%s)",
        settings.app_name,
        settings.storage_backend,
        settings.base_currency,
    )
    yield
    # Shutdown
    app.state.market_data.close()
    app.dependency_overrides.pop(get_account_store, None)


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Paper trading of crypto and stocks against a virtual cash balance",
    version=__version__,
    lifespan=lifespan,
)

# Include routers
app.include_router(virtual_portfolio_router)
app.include_router(quotes_router)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    status_code = 404 if isinstance(exc, NotFoundError) else 400
    return JSONResponse(
        status_code=status_code,
        content={"error": exc.code, "message": exc.message},
    )


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
    }
