"""/v1/budgets - budget set, progress, comparison and insights"""

import time
import logging
from datetime import datetime
from typing import Dict, List
from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from finance_tracker.api.v1.schemas import (
    BudgetSchema,
    BudgetSaveRequest,
    SuccessResponse,
    BudgetProgressSchema,
    BudgetComparisonSchema,
    InsightSchema,
)
from finance_tracker.api.dependencies import (
    get_budget_repository,
    get_now,
    get_request_id,
    get_transaction_repository,
)
from finance_tracker.infrastructure.database.session import get_db
from finance_tracker.infrastructure.database.repositories import BudgetRepository, TransactionRepository
from finance_tracker.domain.models import Budget
from finance_tracker.domain.analytics import budget_comparison, budget_progress, spend_by_category
from finance_tracker.domain.insights import generate_insights
from finance_tracker.infrastructure.observability.metrics import (
    budget_save_counter,
    record_budget_statuses,
    record_insights,
    storage_failures_counter,
)
from finance_tracker.infrastructure.observability.logging import log_budget_save, log_insights
from finance_tracker.utils.date_utils import month_bounds, shift_months

router = APIRouter()


def _month_spend(repo: TransactionRepository, moment: datetime) -> Dict[str, float]:
    """Expense totals per category for the calendar month containing moment"""
    start, end = month_bounds(moment)
    return spend_by_category(repo.list_expenses(start=start, end=end))


@router.get("/budgets", response_model=List[BudgetSchema])
def list_budgets(repo: BudgetRepository = Depends(get_budget_repository)):
    return repo.list_all()


@router.post("/budgets", response_model=SuccessResponse)
def save_budgets(
    request_body: BudgetSaveRequest,
    request: Request,
    db: Session = Depends(get_db),
    repo: BudgetRepository = Depends(get_budget_repository),
):
    """
    Replace the whole budget set.

    Existing budgets are deleted and the submitted ones inserted in a single
    commit. Concurrent saves are last-writer-wins.
    """
    request_id = get_request_id(request)
    budgets = [Budget(category=b.category, amount=b.amount) for b in request_body.budgets]

    try:
        count = repo.replace_all(budgets)
        db.commit()
    except SQLAlchemyError as e:
        storage_failures_counter.inc()
        db.rollback()
        logging.error(f"Storage error saving budgets: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    budget_save_counter.inc()
    log_budget_save(request_id, count, sum(b.amount for b in budgets))
    return SuccessResponse(success=True)


@router.get("/budgets/progress", response_model=List[BudgetProgressSchema])
def get_budget_progress(
    budget_repo: BudgetRepository = Depends(get_budget_repository),
    txn_repo: TransactionRepository = Depends(get_transaction_repository),
    now: datetime = Depends(get_now),
):
    """Current-month spending against each budget with under/near/over status"""
    budgets = budget_repo.list_all()
    if not budgets:
        return []

    progress = budget_progress(budgets, _month_spend(txn_repo, now))
    record_budget_statuses(p.status for p in progress)
    return progress


@router.get("/budgets/comparison", response_model=List[BudgetComparisonSchema])
def get_budget_comparison(
    budget_repo: BudgetRepository = Depends(get_budget_repository),
    txn_repo: TransactionRepository = Depends(get_transaction_repository),
    now: datetime = Depends(get_now),
):
    """Budgeted vs actual for budgeted categories only"""
    budgets = budget_repo.list_all()
    if not budgets:
        return []

    return budget_comparison(budgets, _month_spend(txn_repo, now))


@router.get("/budgets/insights", response_model=List[InsightSchema])
def get_insights(
    request: Request,
    budget_repo: BudgetRepository = Depends(get_budget_repository),
    txn_repo: TransactionRepository = Depends(get_transaction_repository),
    now: datetime = Depends(get_now),
):
    """Up to five insights, per-budget first, then the overall one"""
    start_time = time.time()
    request_id = get_request_id(request)

    budgets = budget_repo.list_all()
    if not budgets:
        return []

    insights = generate_insights(
        budgets,
        current_spend=_month_spend(txn_repo, now),
        previous_spend=_month_spend(txn_repo, shift_months(now, -1)),
    )

    kinds = [i.kind for i in insights]
    record_insights(kinds)
    log_insights(request_id, kinds, (time.time() - start_time) * 1000)
    return insights
