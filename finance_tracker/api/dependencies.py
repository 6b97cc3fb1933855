"""Dependency injection for FastAPI endpoints"""

import uuid
from datetime import datetime, timezone
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import TransactionRepository, BudgetRepository


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_now() -> datetime:
    """Reference time for current-month aggregations, naive UTC like stored transaction dates"""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_transaction_id(transaction_id: str) -> uuid.UUID:
    try:
        return uuid.UUID(transaction_id)
    except ValueError:
        raise HTTPException(status_code=400, detail="Invalid transaction ID format")


def get_transaction_repository(db: Session = Depends(get_db)) -> TransactionRepository:
    """Provide a transaction repository bound to the request's session"""
    return TransactionRepository(db)


def get_budget_repository(db: Session = Depends(get_db)) -> BudgetRepository:
    """Provide a budget repository bound to the request's session"""
    return BudgetRepository(db)
