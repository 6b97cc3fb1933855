"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

SERVICE_NAME = "finance-tracker"


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = SERVICE_NAME


def setup_logging(level: str = "INFO") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    # JSON handler for stdout
    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s"
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_transaction_write(request_id: str, operation: str, transaction_id: str, category: str | None = None) -> None:
    """Log a transaction create/update/delete"""
    logging.info(
        "Transaction written",
        extra={
            "request_id": request_id,
            "step": "transaction_write",
            "operation": operation,
            "transaction_id": transaction_id,
            "category": category,
        },
    )


def log_budget_save(request_id: str, budget_count: int, total_budgeted: float) -> None:
    """Log a full budget set replacement"""
    logging.info(
        "Budgets replaced",
        extra={
            "request_id": request_id,
            "step": "budget_save",
            "budget_count": budget_count,
            "total_budgeted": total_budgeted,
        },
    )


def log_insights(request_id: str, insight_kinds: list[str], duration_ms: float) -> None:
    """Log which insights were produced for a request"""
    logging.info(
        "Insights generated",
        extra={
            "request_id": request_id,
            "step": "insights_complete",
            "insight_count": len(insight_kinds),
            "insight_kinds": insight_kinds,
            "duration_ms": duration_ms,
        },
    )
