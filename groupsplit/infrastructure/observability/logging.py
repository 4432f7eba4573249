"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger
from groupsplit.config import settings


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


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


def log_settlement_plan(
    request_id: str,
    member_count: int,
    expense_count: int,
    settlement_count: int,
    transaction_count: int,
    duration_ms: float,
) -> None:
    """Log structured settlement plan outcome for analysis"""
    logging.info(
        "Settlement plan computed",
        extra={
            "request_id": request_id,
            "step": "settlement_plan_complete",
            "member_count": member_count,
            "expense_count": expense_count,
            "settlement_count": settlement_count,
            "transaction_count": transaction_count,
            "outcome": "settled" if transaction_count == 0 else "outstanding",
            "duration_ms": duration_ms,
        },
    )


def log_unknown_reference(request_id: str, source: str, member_id: str) -> None:
    """Warn about a record pointing at a non-member; it is excluded from balances"""
    logging.warning(
        "Unknown member reference ignored",
        extra={
            "request_id": request_id,
            "source": source,
            "member_id": member_id,
        },
    )
