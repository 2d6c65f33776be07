"""Market quote endpoints."""

from fastapi import APIRouter, Depends

from virtual_trading.api.deps import get_display_currency, get_pricing_service
from virtual_trading.api.schemas import QuoteEnvelope, QuoteResponse
from virtual_trading.core.exceptions import NotFoundError
from virtual_trading.domain.models import AssetType
from virtual_trading.services import PricingService

router = APIRouter(prefix="/api/quotes", tags=["quotes"])


@router.get("/{asset_type}/{asset_id}", response_model=QuoteEnvelope)
def get_quote(
    asset_type: AssetType,
    asset_id: str,
    currency: str = Depends(get_display_currency),
    pricing: PricingService = Depends(get_pricing_service),
) -> QuoteEnvelope:
    """Current unit price of an asset in the requested currency."""
    quote = pricing.quote(asset_type, asset_id, currency)
    if quote is None:
        raise NotFoundError("Quote", f"{asset_type.value}/{asset_id}", code="PRICE_UNAVAILABLE")
    return QuoteEnvelope(
        data=QuoteResponse(
            asset_type=asset_type,
            asset_id=quote.asset_id,
            price=float(quote.price),
            currency=quote.currency,
            as_of=quote.as_of,
        )
    )
