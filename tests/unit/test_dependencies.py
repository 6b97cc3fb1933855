"""Unit tests for API dependencies"""

from datetime import datetime, timedelta, timezone
from finance_tracker.api.dependencies import get_now


def test_get_now_is_naive_utc():
    """Month windows are built on the same clock as stored transaction dates"""
    now = get_now()
    utc_now = datetime.now(timezone.utc).replace(tzinfo=None)

    assert now.tzinfo is None
    assert abs(utc_now - now) < timedelta(seconds=5)
