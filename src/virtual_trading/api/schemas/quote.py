"""Pydantic schemas for quote endpoints."""

from datetime import datetime
from typing import Optional

from virtual_trading.api.schemas.base import CamelModel
from virtual_trading.domain.models import AssetType


class QuoteResponse(CamelModel):
    """Response schema for a market quote."""

    asset_type: AssetType
    asset_id: str
    price: float
    currency: str
    as_of: Optional[datetime] = None


class QuoteEnvelope(CamelModel):
    data: QuoteResponse
