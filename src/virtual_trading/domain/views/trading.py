"""View models for trade validation results."""

from dataclasses import dataclass
from typing import Optional

from virtual_trading.domain.models import RejectionReason


@dataclass(frozen=True)
class TradeDecision:
    """Outcome of validating an order against an account and a live price."""

    ok: bool
    reason: Optional[RejectionReason] = None
    message: Optional[str] = None

    @classmethod
    def accept(cls) -> "TradeDecision":
        return cls(ok=True)

    @classmethod
    def reject(cls, reason: RejectionReason, message: str) -> "TradeDecision":
        return cls(ok=False, reason=reason, message=message)
