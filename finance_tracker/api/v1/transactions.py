"""/v1/transactions - transaction CRUD and expense aggregations"""

import logging
from datetime import datetime
from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import (
    TransactionRequest,
    TransactionResponse,
    SummaryResponse,
    CategoryTotalSchema,
    MonthlyPointSchema,
)
from finance_tracker.api.dependencies import (
    get_now,
    get_request_id,
    get_transaction_repository,
    parse_transaction_id,
)
from finance_tracker.config import settings
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import TransactionRepository
from finance_tracker.domain.analytics import TREND_MONTHS, build_summary, category_totals, monthly_trend
from finance_tracker.domain.exceptions import TransactionNotFoundError
from finance_tracker.infrastructure.observability.metrics import record_transaction_write, storage_failures_counter
from finance_tracker.infrastructure.observability.logging import log_transaction_write
from finance_tracker.utils.date_utils import month_bounds, shift_months

router = APIRouter()


@router.get("/transactions", response_model=List[TransactionResponse])
def list_transactions(
    limit: int = Query(settings.transactions_page_size, ge=1, le=500),
    repo: TransactionRepository = Depends(get_transaction_repository),
):
    """Most recent transactions, newest date first"""
    return repo.list_all(limit=limit)


@router.post("/transactions", response_model=TransactionResponse, status_code=201)
def create_transaction(
    request_body: TransactionRequest,
    request: Request,
    db: Session = Depends(get_db),
    repo: TransactionRepository = Depends(get_transaction_repository),
):
    request_id = get_request_id(request)

    try:
        transaction = repo.create(
            amount=request_body.amount,
            date=request_body.date,
            description=request_body.description,
            category=request_body.category,
        )
        db.commit()
    except SQLAlchemyError as e:
        storage_failures_counter.inc()
        db.rollback()
        logging.error(f"Storage error creating transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_transaction_write("create")
    log_transaction_write(request_id, "create", transaction.id, transaction.category)
    return transaction


@router.put("/transactions/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: str,
    request_body: TransactionRequest,
    request: Request,
    db: Session = Depends(get_db),
    repo: TransactionRepository = Depends(get_transaction_repository),
):
    """Replace amount, date, description and category of an existing transaction"""
    request_id = get_request_id(request)
    txn_uuid = parse_transaction_id(transaction_id)

    try:
        transaction = repo.update(
            txn_uuid,
            amount=request_body.amount,
            date=request_body.date,
            description=request_body.description,
            category=request_body.category,
        )
        db.commit()
    except TransactionNotFoundError as e:
        db.rollback()
        logging.warning(str(e), extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Transaction not found")
    except SQLAlchemyError as e:
        storage_failures_counter.inc()
        db.rollback()
        logging.error(f"Storage error updating transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_transaction_write("update")
    log_transaction_write(request_id, "update", transaction.id, transaction.category)
    return transaction


@router.delete("/transactions/{transaction_id}", status_code=204)
def delete_transaction(
    transaction_id: str,
    request: Request,
    db: Session = Depends(get_db),
    repo: TransactionRepository = Depends(get_transaction_repository),
):
    request_id = get_request_id(request)
    txn_uuid = parse_transaction_id(transaction_id)

    try:
        repo.delete(txn_uuid)
        db.commit()
    except TransactionNotFoundError as e:
        db.rollback()
        logging.warning(str(e), extra={"request_id": request_id})
        raise HTTPException(status_code=404, detail="Transaction not found")
    except SQLAlchemyError as e:
        storage_failures_counter.inc()
        db.rollback()
        logging.error(f"Storage error deleting transaction: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_transaction_write("delete")
    log_transaction_write(request_id, "delete", transaction_id)
    return Response(status_code=204)


@router.get("/transactions/summary", response_model=SummaryResponse)
def get_summary(
    repo: TransactionRepository = Depends(get_transaction_repository),
    now: datetime = Depends(get_now),
):
    """Total and current-month expenses, expense count and top category"""
    return build_summary(repo.list_expenses(), now)


@router.get("/transactions/categories", response_model=List[CategoryTotalSchema])
def get_category_breakdown(repo: TransactionRepository = Depends(get_transaction_repository)):
    """All-time expenses grouped by category, largest first"""
    return category_totals(repo.list_expenses())


@router.get("/transactions/monthly", response_model=List[MonthlyPointSchema])
def get_monthly_trend(
    repo: TransactionRepository = Depends(get_transaction_repository),
    now: datetime = Depends(get_now),
):
    """Expense totals for the current month and the five before it"""
    window_start, _ = month_bounds(shift_months(now, -(TREND_MONTHS - 1)))
    _, window_end = month_bounds(now)
    expenses = repo.list_expenses(start=window_start, end=window_end)
    return monthly_trend(expenses, now)
