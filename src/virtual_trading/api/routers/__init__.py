"""API routers package."""

from virtual_trading.api.routers.virtual_portfolio import router as virtual_portfolio_router
from virtual_trading.api.routers.quotes import router as quotes_router

__all__ = [
    "virtual_portfolio_router",
    "quotes_router",
]
