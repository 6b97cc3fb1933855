"""Static expense category registry"""

from typing import Dict, List
from finance_tracker.domain.models import Category

FALLBACK_CATEGORY_ID = "other"

EXPENSE_CATEGORIES: List[Category] = [
    Category(id="food", name="Food & Dining", color="#FF6B6B", icon="🍽️"),
    Category(id="transportation", name="Transportation", color="#4ECDC4", icon="🚗"),
    Category(id="shopping", name="Shopping", color="#45B7D1", icon="🛍️"),
    Category(id="entertainment", name="Entertainment", color="#96CEB4", icon="🎬"),
    Category(id="bills", name="Bills & Utilities", color="#FFEAA7", icon="💡"),
    Category(id="healthcare", name="Healthcare", color="#DDA0DD", icon="🏥"),
    Category(id="education", name="Education", color="#98D8C8", icon="📚"),
    Category(id="travel", name="Travel", color="#F7DC6F", icon="✈️"),
    Category(id="fitness", name="Fitness & Sports", color="#BB8FCE", icon="💪"),
    Category(id=FALLBACK_CATEGORY_ID, name="Other", color="#AEB6BF", icon="📦"),
]

_BY_ID: Dict[str, Category] = {category.id: category for category in EXPENSE_CATEGORIES}


def get_category(category_id: str) -> Category:
    """Look up a category; unknown ids resolve to the 'other' category"""
    return _BY_ID.get(category_id, _BY_ID[FALLBACK_CATEGORY_ID])
