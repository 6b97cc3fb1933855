"""GET /v1/categories - static category registry"""

from typing import List
from fastapi import APIRouter

from finance_tracker.api.v1.schemas import CategorySchema
from finance_tracker.domain.categories import EXPENSE_CATEGORIES, get_category

router = APIRouter()


@router.get("/categories", response_model=List[CategorySchema])
def list_categories():
    return EXPENSE_CATEGORIES


@router.get("/categories/{category_id}", response_model=CategorySchema)
def get_category_by_id(category_id: str):
    """Look up a category; unknown ids return the 'other' category instead of 404"""
    return get_category(category_id)
