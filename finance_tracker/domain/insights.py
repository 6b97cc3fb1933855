"""Spending insight rules - turn budgets and monthly spend into readable observations"""

from typing import Dict, Iterable, List, Optional

from finance_tracker.domain.analytics import NEAR_BUDGET_PERCENT, OVER_BUDGET_PERCENT, percent_of
from finance_tracker.domain.categories import get_category
from finance_tracker.domain.models import Budget, Insight

MAX_INSIGHTS = 5
ON_TRACK_PERCENT = 50.0
SIGNIFICANT_CHANGE_PERCENT = 20.0
OVERALL_SUCCESS_PERCENT = 70.0


def status_insight(budget: Budget, spent: float) -> Optional[Insight]:
    """
    Budget status for one category.

    - >= 100%: danger, budget exceeded
    - >= 80%: warning, with the remaining amount
    - <= 50% with some spending: success, on track
    - anything else (50-80%, or nothing spent): no insight
    """
    percentage = percent_of(spent, budget.amount)
    name = get_category(budget.category).name

    if percentage >= OVER_BUDGET_PERCENT:
        return Insight(
            kind="danger",
            title=f"{name} Budget Exceeded",
            description=(
                f"You've spent ${spent:.2f} out of your ${budget.amount:.2f} budget ({percentage:.1f}%)."
            ),
            icon="⚠️",
        )
    elif percentage >= NEAR_BUDGET_PERCENT:
        return Insight(
            kind="warning",
            title=f"{name} Budget Alert",
            description=(
                f"You're at {percentage:.1f}% of your budget with ${budget.amount - spent:.2f} remaining."
            ),
            icon="🔔",
        )
    elif percentage <= ON_TRACK_PERCENT and spent > 0:
        return Insight(
            kind="success",
            title=f"{name} On Track",
            description=f"Great job! You're only at {percentage:.1f}% of your budget.",
            icon="✅",
        )
    return None


def month_over_month_insight(category_id: str, current: float, previous: float) -> Optional[Insight]:
    """Flag changes of more than 20% against last month; needs last-month spending"""
    if previous <= 0:
        return None

    change = (current - previous) / previous * 100
    if abs(change) <= SIGNIFICANT_CHANGE_PERCENT:
        return None

    name = get_category(category_id).name
    increased = change > 0
    direction = "increased" if increased else "decreased"

    return Insight(
        kind="info" if increased else "success",
        title=f"{name} Spending {direction}",
        description=(
            f"Your {name.lower()} spending has {direction} by {abs(change):.1f}% compared to last month."
        ),
        icon="📈" if increased else "📉",
    )


def overall_insight(budgets: List[Budget], current_spend: Dict[str, float]) -> Optional[Insight]:
    """Praise overall usage below 70% of the combined budget of budgeted categories"""
    total_budget = sum(b.amount for b in budgets)
    total_spent = sum(current_spend.get(b.category, 0.0) for b in budgets)
    overall = percent_of(total_spent, total_budget)

    if overall >= OVERALL_SUCCESS_PERCENT:
        return None

    return Insight(
        kind="success",
        title="Excellent Budget Management",
        description=f"You've used only {overall:.1f}% of your total monthly budget. Keep it up!",
        icon="🎯",
    )


def generate_insights(
    budgets: Iterable[Budget],
    current_spend: Dict[str, float],
    previous_spend: Dict[str, float],
    max_insights: int = MAX_INSIGHTS,
) -> List[Insight]:
    """
    Build the insight list in generation order and keep the first `max_insights`.

    Generation order: for each budget in list order its status insight then
    its month-over-month insight, and finally the overall insight. Truncation
    is positional, so the overall insight drops out when enough per-budget
    insights precede it.
    """
    budgets = list(budgets)
    if not budgets:
        return []

    insights: List[Insight] = []
    for budget in budgets:
        current = current_spend.get(budget.category, 0.0)
        previous = previous_spend.get(budget.category, 0.0)

        for insight in (
            status_insight(budget, current),
            month_over_month_insight(budget.category, current, previous),
        ):
            if insight is not None:
                insights.append(insight)

    overall = overall_insight(budgets, current_spend)
    if overall is not None:
        insights.append(overall)

    return insights[:max_insights]
