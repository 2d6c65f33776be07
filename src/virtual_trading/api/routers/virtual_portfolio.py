"""Virtual portfolio endpoints: snapshot, trading, reset and valuation."""

from decimal import Decimal
from typing import Optional

from fastapi import APIRouter, Depends, Query

from virtual_trading.api.deps import (
    get_display_currency,
    get_ledger_service,
    get_user_id,
    get_valuation_service,
)
from virtual_trading.api.schemas import (
    DistributionItemResponse,
    DistributionResponse,
    HoldingResponse,
    HoldingValuationListResponse,
    HoldingValuationResponse,
    PortfolioEnvelope,
    PortfolioResponse,
    PortfolioSummaryEnvelope,
    PortfolioSummaryResponse,
    TradeCheckResponse,
    TradeRequest,
    TransactionListResponse,
    TransactionResponse,
)
from virtual_trading.domain.models import Account, Holding, Transaction
from virtual_trading.domain.views import HoldingValuation
from virtual_trading.services import LedgerService, ValuationService

router = APIRouter(prefix="/api/virtual-portfolio", tags=["virtual-portfolio"])


def _f(value: Optional[Decimal]) -> Optional[float]:
    return float(value) if value is not None else None


def _holding_out(h: Holding) -> HoldingResponse:
    return HoldingResponse(
        asset_type=h.asset_type,
        asset_id=h.asset_id,
        symbol=h.symbol,
        name=h.name,
        quantity=float(h.quantity),
        avg_buy_price=float(h.avg_buy_price),
        total_cost=float(h.total_cost),
    )


def _txn_out(t: Transaction) -> TransactionResponse:
    return TransactionResponse(
        id=t.txn_id,
        timestamp=t.timestamp,
        txn_type=t.txn_type,
        asset_type=t.asset_type,
        asset_id=t.asset_id,
        symbol=t.symbol,
        name=t.name,
        quantity=float(t.quantity),
        price=float(t.price),
        total=float(t.total),
        balance_after=float(t.balance_after),
    )


def _portfolio_out(account: Account, ledger_service: LedgerService) -> PortfolioEnvelope:
    ledger = ledger_service.ledger
    return PortfolioEnvelope(
        data=PortfolioResponse(
            user_id=account.user_id,
            balance=float(account.balance),
            base_currency=ledger.base_currency,
            initial_balance=float(ledger.initial_balance),
            holdings=[_holding_out(h) for h in account.holdings.values()],
            transactions=[_txn_out(t) for t in reversed(account.transactions)],
            created_at=account.created_at,
            updated_at=account.updated_at,
        )
    )


def _valuation_out(v: HoldingValuation) -> HoldingValuationResponse:
    return HoldingValuationResponse(
        asset_type=v.holding.asset_type,
        asset_id=v.holding.asset_id,
        symbol=v.holding.symbol,
        name=v.holding.name,
        quantity=float(v.holding.quantity),
        price_available=v.price_available,
        avg_buy_price=_f(v.avg_buy_price),
        cost_basis=_f(v.cost_basis),
        current_price=_f(v.current_price),
        current_value=_f(v.current_value),
        unrealized_pnl=_f(v.unrealized_pnl),
        unrealized_pnl_percent=_f(v.unrealized_pnl_percent),
    )


@router.get("", response_model=PortfolioEnvelope)
def get_portfolio(
    user_id: str = Depends(get_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> PortfolioEnvelope:
    """Get the user's account, creating it with the initial balance on first access."""
    account = service.get_portfolio(user_id)
    return _portfolio_out(account, service)


@router.post("/trade", response_model=PortfolioEnvelope)
def place_trade(
    data: TradeRequest,
    user_id: str = Depends(get_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> PortfolioEnvelope:
    """Execute a market order. Rejections leave the account unchanged."""
    account = service.place_trade(user_id, data.to_order())
    return _portfolio_out(account, service)


@router.post("/trade/check", response_model=TradeCheckResponse)
def check_trade(
    data: TradeRequest,
    user_id: str = Depends(get_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> TradeCheckResponse:
    """Run the trade rules without executing, for enabling/disabling submit."""
    order = data.to_order()
    decision, price = service.check_trade(user_id, order)
    total = order.quantity * price if order.quantity is not None and price is not None else None
    return TradeCheckResponse(
        ok=decision.ok,
        reason=decision.reason.value if decision.reason else None,
        message=decision.message,
        price=_f(price),
        total=_f(total),
    )


@router.post("/reset", response_model=PortfolioEnvelope)
def reset_portfolio(
    user_id: str = Depends(get_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> PortfolioEnvelope:
    """Discard all holdings and history and restore the initial balance."""
    account = service.reset(user_id)
    return _portfolio_out(account, service)


@router.get("/transactions", response_model=TransactionListResponse)
def list_transactions(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    user_id: str = Depends(get_user_id),
    service: LedgerService = Depends(get_ledger_service),
) -> TransactionListResponse:
    """Trade history, newest first."""
    account = service.get_portfolio(user_id)
    txns = list(reversed(account.transactions))
    if limit is not None:
        txns = txns[:limit]
    return TransactionListResponse(
        data=[_txn_out(t) for t in txns],
        count=len(account.transactions),
    )


@router.get("/summary", response_model=PortfolioSummaryEnvelope)
def get_summary(
    currency: str = Depends(get_display_currency),
    user_id: str = Depends(get_user_id),
    service: LedgerService = Depends(get_ledger_service),
    valuation: ValuationService = Depends(get_valuation_service),
) -> PortfolioSummaryEnvelope:
    """Total value and P&L against the initial balance."""
    account = service.get_portfolio(user_id)
    summary = valuation.portfolio_summary(account, currency)
    return PortfolioSummaryEnvelope(
        data=PortfolioSummaryResponse(
            currency=summary.currency,
            cash_balance=_f(summary.cash_balance),
            holdings_value=float(summary.holdings_value),
            total_value=_f(summary.total_value),
            initial_balance=_f(summary.initial_balance),
            total_pnl=_f(summary.total_pnl),
            pnl_percent=_f(summary.pnl_percent),
            holdings_count=summary.holdings_count,
            transactions_count=summary.transactions_count,
            unpriced_symbols=summary.unpriced_symbols,
            complete=summary.is_complete,
            as_of=summary.as_of,
        )
    )


@router.get("/holdings", response_model=HoldingValuationListResponse)
def get_holdings(
    currency: str = Depends(get_display_currency),
    user_id: str = Depends(get_user_id),
    service: LedgerService = Depends(get_ledger_service),
    valuation: ValuationService = Depends(get_valuation_service),
) -> HoldingValuationListResponse:
    """Holdings marked to market."""
    account = service.get_portfolio(user_id)
    return HoldingValuationListResponse(
        currency=currency,
        data=[_valuation_out(v) for v in valuation.holding_valuations(account, currency)],
    )


@router.get("/distribution", response_model=DistributionResponse)
def get_distribution(
    currency: str = Depends(get_display_currency),
    user_id: str = Depends(get_user_id),
    service: LedgerService = Depends(get_ledger_service),
    valuation: ValuationService = Depends(get_valuation_service),
) -> DistributionResponse:
    """Each priced holding's share of total holdings value."""
    account = service.get_portfolio(user_id)
    return DistributionResponse(
        currency=currency,
        data=[
            DistributionItemResponse(
                symbol=item.symbol,
                value=float(item.value),
                share_percent=float(item.share_percent),
            )
            for item in valuation.distribution(account, currency)
        ],
    )
