"""SQLAlchemy implementation of AccountStore."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy.orm import Session

from virtual_trading.core.timezone import to_utc
from virtual_trading.domain.models import Account, Holding, Transaction
from virtual_trading.repositories.sqlalchemy.orm_models import (
    AccountORM,
    HoldingORM,
    TransactionORM,
)


def _dec(value) -> Decimal:
    return Decimal(str(value)) if value is not None else Decimal("0")


def _naive_utc(dt: Optional[datetime]) -> Optional[datetime]:
    return to_utc(dt).replace(tzinfo=None) if dt else None


def _aware_utc(dt: Optional[datetime]) -> Optional[datetime]:
    return to_utc(dt) if dt else None


class SqlAlchemyAccountStore:
    """
    SQLAlchemy-backed account store.

    save() writes balance, holdings and history in a single DB transaction:
    either the whole account is stored or nothing changes.
    """

    def __init__(self, db: Session):
        self._db = db

    def load(self, user_id: str) -> Optional[Account]:
        """Load an account with its holdings and transactions."""
        orm_account = self._db.query(AccountORM).filter(
            AccountORM.user_id == user_id
        ).first()
        if not orm_account:
            return None

        orm_holdings = (
            self._db.query(HoldingORM)
            .filter(HoldingORM.user_id == user_id)
            .order_by(HoldingORM.position)
            .all()
        )
        orm_txns = (
            self._db.query(TransactionORM)
            .filter(TransactionORM.user_id == user_id)
            .order_by(TransactionORM.seq)
            .all()
        )

        holdings = [self._holding_to_domain(h) for h in orm_holdings]
        return Account(
            user_id=orm_account.user_id,
            balance=_dec(orm_account.balance),
            holdings={h.key: h for h in holdings},
            transactions=[self._txn_to_domain(t) for t in orm_txns],
            created_at=_aware_utc(orm_account.created_at),
            updated_at=_aware_utc(orm_account.updated_at),
        )

    def save(self, account: Account) -> Account:
        """Persist the whole account, replacing stored holdings and history."""
        try:
            orm_account = self._db.query(AccountORM).filter(
                AccountORM.user_id == account.user_id
            ).first()
            if orm_account is None:
                orm_account = AccountORM(user_id=account.user_id)
                self._db.add(orm_account)
                # Parent row must exist before holdings and history reference it
                self._db.flush()
            orm_account.balance = account.balance
            orm_account.created_at = _naive_utc(account.created_at)
            orm_account.updated_at = _naive_utc(account.updated_at)

            # Holdings are small; replace them wholesale
            self._db.query(HoldingORM).filter(
                HoldingORM.user_id == account.user_id
            ).delete(synchronize_session="fetch")
            for position, holding in enumerate(account.holdings.values()):
                self._db.add(self._holding_to_orm(account.user_id, position, holding))

            # History is append-only; only a reset removes rows
            stored_ids = {
                row[0]
                for row in self._db.query(TransactionORM.txn_id).filter(
                    TransactionORM.user_id == account.user_id
                )
            }
            current_ids = {t.txn_id for t in account.transactions}
            stale_ids = stored_ids - current_ids
            if stale_ids:
                self._db.query(TransactionORM).filter(
                    TransactionORM.txn_id.in_(stale_ids)
                ).delete(synchronize_session=False)
            for seq, txn in enumerate(account.transactions):
                if txn.txn_id not in stored_ids:
                    self._db.add(self._txn_to_orm(account.user_id, seq, txn))

            self._db.commit()
        except Exception:
            self._db.rollback()
            raise
        return account

    def delete(self, user_id: str) -> None:
        """Delete an account and everything it owns."""
        try:
            self._db.query(TransactionORM).filter(TransactionORM.user_id == user_id).delete()
            self._db.query(HoldingORM).filter(HoldingORM.user_id == user_id).delete()
            self._db.query(AccountORM).filter(AccountORM.user_id == user_id).delete()
            self._db.commit()
        except Exception:
            self._db.rollback()
            raise

    @staticmethod
    def _holding_to_orm(user_id: str, position: int, holding: Holding) -> HoldingORM:
        return HoldingORM(
            user_id=user_id,
            asset_type=holding.asset_type,
            asset_id=holding.asset_id,
            position=position,
            symbol=holding.symbol,
            name=holding.name,
            quantity=holding.quantity,
            avg_buy_price=holding.avg_buy_price,
            total_cost=holding.total_cost,
        )

    @staticmethod
    def _holding_to_domain(orm: HoldingORM) -> Holding:
        return Holding(
            asset_type=orm.asset_type,
            asset_id=orm.asset_id,
            symbol=orm.symbol,
            name=orm.name,
            quantity=_dec(orm.quantity),
            avg_buy_price=_dec(orm.avg_buy_price),
            total_cost=_dec(orm.total_cost),
        )

    @staticmethod
    def _txn_to_orm(user_id: str, seq: int, txn: Transaction) -> TransactionORM:
        return TransactionORM(
            txn_id=txn.txn_id,
            user_id=user_id,
            seq=seq,
            timestamp=_naive_utc(txn.timestamp),
            txn_type=txn.txn_type,
            asset_type=txn.asset_type,
            asset_id=txn.asset_id,
            symbol=txn.symbol,
            name=txn.name,
            quantity=txn.quantity,
            price=txn.price,
            total=txn.total,
            balance_after=txn.balance_after,
        )

    @staticmethod
    def _txn_to_domain(orm: TransactionORM) -> Transaction:
        return Transaction(
            txn_id=orm.txn_id,
            timestamp=_aware_utc(orm.timestamp),
            txn_type=orm.txn_type,
            asset_type=orm.asset_type,
            asset_id=orm.asset_id,
            symbol=orm.symbol,
            name=orm.name,
            quantity=_dec(orm.quantity),
            price=_dec(orm.price),
            total=_dec(orm.total),
            balance_after=_dec(orm.balance_after),
        )
