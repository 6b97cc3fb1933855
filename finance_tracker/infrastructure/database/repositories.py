"""Data access layer for transactions and budgets"""

import uuid
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from sqlalchemy.orm import Session
from finance_tracker.infrastructure.database.models import TransactionRecord, BudgetRecord
from finance_tracker.domain.models import Transaction, Budget
from finance_tracker.domain.exceptions import TransactionNotFoundError


def _naive_utc(moment: datetime) -> datetime:
    """Store timestamps as naive UTC so date-range filters compare like with like"""
    if moment.tzinfo is not None:
        return moment.astimezone(timezone.utc).replace(tzinfo=None)
    return moment


def _to_domain(record: TransactionRecord) -> Transaction:
    return Transaction(
        id=str(record.id),
        amount=record.amount,
        date=record.date,
        description=record.description,
        category=record.category,
        created_at=record.created_at,
        updated_at=record.updated_at,
    )


class TransactionRepository:
    """Repository for ledger transactions"""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self, limit: int = 50) -> List[Transaction]:
        """Most recent transactions first"""
        records = (
            self.db.query(TransactionRecord)
            .order_by(TransactionRecord.date.desc())
            .limit(limit)
            .all()
        )
        return [_to_domain(r) for r in records]

    def list_expenses(self, start: Optional[datetime] = None, end: Optional[datetime] = None) -> List[Transaction]:
        """Expenses (negative amounts), optionally within an inclusive date range"""
        query = self.db.query(TransactionRecord).filter(TransactionRecord.amount < 0)
        if start is not None:
            query = query.filter(TransactionRecord.date >= _naive_utc(start))
        if end is not None:
            query = query.filter(TransactionRecord.date <= _naive_utc(end))
        return [_to_domain(r) for r in query.order_by(TransactionRecord.date).all()]

    def create(self, amount: float, date: datetime, description: str, category: str) -> Transaction:
        """Persist a new transaction"""
        record = TransactionRecord(
            amount=amount,
            date=_naive_utc(date),
            description=description,
            category=category,
        )
        self.db.add(record)
        self.db.flush()  # Get ID and server defaults without committing
        self.db.refresh(record)
        return _to_domain(record)

    def update(
        self,
        transaction_id: uuid.UUID,
        amount: float,
        date: datetime,
        description: str,
        category: str,
    ) -> Transaction:
        """Replace every mutable field of an existing transaction"""
        record = self._get(transaction_id)
        record.amount = amount
        record.date = _naive_utc(date)
        record.description = description
        record.category = category
        record.updated_at = datetime.now(timezone.utc)
        self.db.flush()
        return _to_domain(record)

    def delete(self, transaction_id: uuid.UUID) -> None:
        record = self._get(transaction_id)
        self.db.delete(record)
        self.db.flush()

    def _get(self, transaction_id: uuid.UUID) -> TransactionRecord:
        record = (
            self.db.query(TransactionRecord)
            .filter(TransactionRecord.id == transaction_id)
            .first()
        )
        if record is None:
            raise TransactionNotFoundError(transaction_id)
        return record


class BudgetRepository:
    """Repository for the budget set"""

    def __init__(self, db: Session):
        self.db = db

    def list_all(self) -> List[Budget]:
        """Budgets in insertion order"""
        records = self.db.query(BudgetRecord).order_by(BudgetRecord.id).all()
        return [Budget(category=r.category, amount=r.amount) for r in records]

    def replace_all(self, budgets: Iterable[Budget]) -> int:
        """Delete every budget, then insert the new set; caller commits"""
        self.db.query(BudgetRecord).delete(synchronize_session=False)
        self.db.flush()

        count = 0
        for budget in budgets:
            self.db.add(BudgetRecord(category=budget.category, amount=budget.amount))
            count += 1

        self.db.flush()
        return count
