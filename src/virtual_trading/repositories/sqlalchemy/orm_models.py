"""SQLAlchemy ORM model definitions."""

from decimal import Decimal
from typing import Optional

from sqlalchemy import (
    Column,
    String,
    DateTime,
    Integer,
    ForeignKey,
    Enum as SqlEnum,
)
from sqlalchemy.types import TypeDecorator

from virtual_trading.repositories.sqlalchemy.database import Base
from virtual_trading.domain.models.enums import AssetType, TradeType


class DecimalText(TypeDecorator):
    """Decimal stored as its exact string form; SQLite has no fixed-point type."""

    impl = String(64)
    cache_ok = True

    def process_bind_param(self, value, dialect) -> Optional[str]:
        if value is None:
            return None
        return str(Decimal(value))

    def process_result_value(self, value, dialect) -> Optional[Decimal]:
        if value is None:
            return None
        return Decimal(value)


_AMOUNT = DecimalText()


class AccountORM(Base):
    """SQLAlchemy model for a virtual Account."""

    __tablename__ = "virtual_accounts"

    user_id = Column(String(128), primary_key=True)
    balance = Column(_AMOUNT, nullable=False, default=Decimal("0"))
    created_at = Column(DateTime, nullable=True)
    updated_at = Column(DateTime, nullable=True)


class HoldingORM(Base):
    """SQLAlchemy model for a Holding (one row per open position)."""

    __tablename__ = "virtual_holdings"

    user_id = Column(String(128), ForeignKey("virtual_accounts.user_id"), primary_key=True)
    asset_type = Column(SqlEnum(AssetType), primary_key=True)
    asset_id = Column(String(64), primary_key=True)
    position = Column(Integer, nullable=False, default=0)
    symbol = Column(String(32), nullable=False, default="")
    name = Column(String(255), nullable=False, default="")
    quantity = Column(_AMOUNT, nullable=False)
    avg_buy_price = Column(_AMOUNT, nullable=False)
    total_cost = Column(_AMOUNT, nullable=False)


class TransactionORM(Base):
    """SQLAlchemy model for an executed Transaction."""

    __tablename__ = "virtual_transactions"

    txn_id = Column(String(36), primary_key=True)
    user_id = Column(
        String(128),
        ForeignKey("virtual_accounts.user_id"),
        nullable=False,
        index=True,
    )
    seq = Column(Integer, nullable=False)
    timestamp = Column(DateTime, nullable=False)
    txn_type = Column(SqlEnum(TradeType), nullable=False)
    asset_type = Column(SqlEnum(AssetType), nullable=False)
    asset_id = Column(String(64), nullable=False)
    symbol = Column(String(32), nullable=False, default="")
    name = Column(String(255), nullable=False, default="")
    quantity = Column(_AMOUNT, nullable=False)
    price = Column(_AMOUNT, nullable=False)
    total = Column(_AMOUNT, nullable=False)
    balance_after = Column(_AMOUNT, nullable=False)
