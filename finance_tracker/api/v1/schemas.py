"""Pydantic schemas for API request/response validation"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Serialize with camelCase field names, accept either form on input"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class TransactionRequest(CamelModel):
    """Request body for POST /v1/transactions and PUT /v1/transactions/{id}"""

    amount: float = Field(..., allow_inf_nan=False, description="Signed amount; negative for expenses")
    date: datetime
    description: str = Field(..., min_length=1, max_length=200)
    category: str = Field(..., min_length=1, description="Category identifier")

    @field_validator("amount")
    @classmethod
    def amount_not_zero(cls, value: float) -> float:
        if value == 0:
            raise ValueError("amount must not be zero")
        return value


class TransactionResponse(CamelModel):
    id: str
    amount: float
    date: datetime
    description: str
    category: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class BudgetSchema(CamelModel):
    """Single budget entry"""

    category: str = Field(..., min_length=1)
    amount: float = Field(..., ge=0, allow_inf_nan=False, description="Monthly budget amount")


class BudgetSaveRequest(CamelModel):
    """Request body for POST /v1/budgets; replaces the whole set"""

    budgets: List[BudgetSchema]

    @field_validator("budgets")
    @classmethod
    def unique_categories(cls, value: List[BudgetSchema]) -> List[BudgetSchema]:
        categories = [b.category for b in value]
        if len(categories) != len(set(categories)):
            raise ValueError("each category may have at most one budget")
        return value


class SuccessResponse(CamelModel):
    success: bool = True


class CategorySchema(CamelModel):
    id: str
    name: str
    color: str
    icon: str


class CategoryTotalSchema(CamelModel):
    category: str
    amount: float
    percentage: float


class MonthlyPointSchema(CamelModel):
    month: str
    total_expense: float


class TopCategorySchema(CamelModel):
    category: str
    amount: float


class SummaryResponse(CamelModel):
    """Response for GET /v1/transactions/summary"""

    total_expenses: float
    monthly_expenses: float
    transaction_count: int
    top_category: Optional[TopCategorySchema] = None


class BudgetProgressSchema(CamelModel):
    category: str
    budgeted: float
    spent: float
    percentage: float
    status: str


class BudgetComparisonSchema(CamelModel):
    category: str
    budgeted: float
    actual: float


class InsightSchema(CamelModel):
    kind: str
    title: str
    description: str
    icon: str
