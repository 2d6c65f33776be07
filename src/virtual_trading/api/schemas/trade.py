"""Pydantic schemas for trade endpoints."""

from decimal import Decimal
from typing import Optional

from pydantic import Field, field_validator

from virtual_trading.api.schemas.base import CamelModel
from virtual_trading.domain.models import AssetType, TradeOrder, TradeType


class TradeRequest(CamelModel):
    """
    Request schema for placing or checking a trade.

    Quantity and price are deliberately unconstrained here: range and step
    checks belong to the trade rules, which report them with a reason code.
    """

    txn_type: TradeType = Field(..., alias="type")
    asset_type: AssetType
    asset_id: Optional[str] = None
    symbol: str = ""
    name: str = ""
    quantity: Optional[Decimal] = None
    price: Optional[Decimal] = None

    @field_validator("asset_id", mode="before")
    @classmethod
    def coerce_asset_id(cls, v):
        # Crypto listing ids arrive as JSON numbers
        if isinstance(v, int) and not isinstance(v, bool):
            return str(v)
        return v

    def to_order(self) -> TradeOrder:
        return TradeOrder(
            txn_type=self.txn_type,
            asset_type=self.asset_type,
            asset_id=self.asset_id,
            symbol=self.symbol,
            name=self.name,
            quantity=self.quantity,
            price=self.price,
        )


class TradeCheckResponse(CamelModel):
    """Outcome of the pre-submit check."""

    ok: bool
    reason: Optional[str] = None
    message: Optional[str] = None
    price: Optional[float] = None
    total: Optional[float] = None
