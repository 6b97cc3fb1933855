"""Domain models - pure Python dataclasses representing business entities"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Transaction:
    """Ledger entry; negative amount is an expense"""

    id: str
    amount: float
    date: datetime
    description: str
    category: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @property
    def is_expense(self) -> bool:
        return self.amount < 0


@dataclass
class Budget:
    """Monthly spending ceiling for one category"""

    category: str
    amount: float


@dataclass(frozen=True)
class Category:
    """Static display metadata for a category id"""

    id: str
    name: str
    color: str
    icon: str


@dataclass
class CategoryTotal:
    """Summed expenses for a category and its share of all expenses"""

    category: str
    amount: float
    percentage: float


@dataclass
class MonthlyPoint:
    """Total expenses for one calendar month"""

    month: str
    total_expense: float


@dataclass
class BudgetProgress:
    """Current-month spending against a budget"""

    category: str
    budgeted: float
    spent: float
    percentage: float
    status: str  # "under" | "near" | "over"


@dataclass
class BudgetComparison:
    """Budgeted vs actual current-month spend"""

    category: str
    budgeted: float
    actual: float


@dataclass
class Insight:
    """Human-readable observation about spending"""

    kind: str  # "danger" | "warning" | "success" | "info"
    title: str
    description: str
    icon: str


@dataclass
class TopCategory:
    category: str
    amount: float


@dataclass
class Summary:
    """Headline expense figures"""

    total_expenses: float
    monthly_expenses: float
    transaction_count: int
    top_category: Optional[TopCategory]
