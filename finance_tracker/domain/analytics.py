"""Expense aggregation engine - category totals, monthly trend, budget progress"""

from collections import defaultdict
from datetime import datetime
from typing import Dict, Iterable, List

from finance_tracker.domain.models import (
    Budget,
    BudgetComparison,
    BudgetProgress,
    CategoryTotal,
    MonthlyPoint,
    Summary,
    TopCategory,
    Transaction,
)
from finance_tracker.utils.date_utils import month_bounds, month_label, shift_months

TREND_MONTHS = 6

# Status thresholds, highest first: first match wins
OVER_BUDGET_PERCENT = 100.0
NEAR_BUDGET_PERCENT = 80.0


def percent_of(part: float, whole: float) -> float:
    """part / whole * 100, or 0.0 when whole is zero"""
    return (part / whole) * 100 if whole > 0 else 0.0


def spend_by_category(transactions: Iterable[Transaction]) -> Dict[str, float]:
    """Sum absolute expense amounts per category; income is ignored"""
    spent: Dict[str, float] = defaultdict(float)
    for txn in transactions:
        if txn.is_expense:
            spent[txn.category] += abs(txn.amount)
    return dict(spent)


def category_totals(transactions: Iterable[Transaction]) -> List[CategoryTotal]:
    """
    Group expenses by category, largest first.

    Percentages are each category's share of all expenses and sum to 100,
    or are all 0 when there is nothing to share.
    """
    spent = spend_by_category(transactions)
    total = sum(spent.values())

    totals = [
        CategoryTotal(category=category, amount=amount, percentage=percent_of(amount, total))
        for category, amount in spent.items()
    ]
    totals.sort(key=lambda t: t.amount, reverse=True)
    return totals


def monthly_trend(transactions: Iterable[Transaction], now: datetime, months: int = TREND_MONTHS) -> List[MonthlyPoint]:
    """
    Expense totals for the current month and the preceding months, oldest first.

    Always returns exactly `months` points; months without expenses report 0.
    """
    expenses = [t for t in transactions if t.is_expense]
    series = []

    for offset in range(months - 1, -1, -1):
        start, end = month_bounds(shift_months(now, -offset))
        total = sum(abs(t.amount) for t in expenses if start <= t.date <= end)
        series.append(MonthlyPoint(month=month_label(start), total_expense=total))

    return series


def classify_budget_status(percentage: float) -> str:
    """Map percentage of budget used to 'over', 'near' or 'under'"""
    if percentage >= OVER_BUDGET_PERCENT:
        return "over"
    elif percentage >= NEAR_BUDGET_PERCENT:
        return "near"
    else:
        return "under"


def budget_progress(budgets: Iterable[Budget], current_spend: Dict[str, float]) -> List[BudgetProgress]:
    """Progress for every budget, including budgets with no spending yet"""
    progress = []
    for budget in budgets:
        spent = current_spend.get(budget.category, 0.0)
        percentage = percent_of(spent, budget.amount)
        progress.append(
            BudgetProgress(
                category=budget.category,
                budgeted=budget.amount,
                spent=spent,
                percentage=percentage,
                status=classify_budget_status(percentage),
            )
        )
    return progress


def budget_comparison(budgets: Iterable[Budget], current_spend: Dict[str, float]) -> List[BudgetComparison]:
    """Budgeted vs actual; categories with spending but no budget are left out"""
    return [
        BudgetComparison(
            category=budget.category,
            budgeted=budget.amount,
            actual=current_spend.get(budget.category, 0.0),
        )
        for budget in budgets
    ]


def build_summary(transactions: Iterable[Transaction], now: datetime) -> Summary:
    """Headline figures: all-time and current-month expenses, count, top category"""
    expenses = [t for t in transactions if t.is_expense]
    month_start, month_end = month_bounds(now)

    totals = category_totals(expenses)
    top = totals[0] if totals else None

    return Summary(
        total_expenses=sum(abs(t.amount) for t in expenses),
        monthly_expenses=sum(abs(t.amount) for t in expenses if month_start <= t.date <= month_end),
        transaction_count=len(expenses),
        top_category=TopCategory(category=top.category, amount=top.amount) if top else None,
    )
