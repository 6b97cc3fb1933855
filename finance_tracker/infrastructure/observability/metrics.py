"""Prometheus metrics for monitoring transaction writes, budget health, and storage failures"""

from typing import Iterable
from prometheus_client import Counter, Histogram

# Write metrics
transaction_write_counter = Counter(
    "finance_transaction_writes_total",
    "Transaction writes by operation",
    ["operation"],  # create | update | delete
)

budget_save_counter = Counter(
    "finance_budget_saves_total",
    "Full budget set replacements",
)

# Analytics metrics
insight_counter = Counter(
    "finance_insights_total",
    "Insights returned to clients",
    ["kind"],  # danger | warning | success | info
)

budget_status_counter = Counter(
    "finance_budget_status_total",
    "Budget progress classifications",
    ["status"],  # under | near | over
)

# Storage metrics
storage_failures_counter = Counter(
    "storage_failures_total",
    "Database operations that raised",
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_transaction_write(operation: str) -> None:
    transaction_write_counter.labels(operation=operation).inc()


def record_insights(kinds: Iterable[str]) -> None:
    """Count returned insights by kind"""
    for kind in kinds:
        insight_counter.labels(kind=kind).inc()


def record_budget_statuses(statuses: Iterable[str]) -> None:
    for status in statuses:
        budget_status_counter.labels(status=status).inc()
