"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from finance_tracker.domain.models import BillPeriod


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def __init__(self, *args: Any, service_name: str = "finance-tracker", **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.service_name = service_name

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = self.service_name


def setup_logging(level: str = "INFO", service_name: str = "finance-tracker") -> None:
    """Configure structured JSON logging"""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Remove existing handlers
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    formatter = CustomJsonFormatter(
        "%(timestamp)s %(level)s %(name)s %(message)s",
        service_name=service_name,
    )
    handler.setFormatter(formatter)
    logger.addHandler(handler)


def log_bill_resolution(
    request_id: str,
    card_id: str,
    mode: str,
    period: BillPeriod,
    total_cents: int,
    duration_ms: float,
) -> None:
    """Log which purchase window an invoice request resolved to"""
    logging.info(
        "Bill period resolved",
        extra={
            "request_id": request_id,
            "card_id": card_id,
            "step": "bill_resolved",
            "mode": mode,
            "invoice_month": str(period.invoice_month),
            "period_start": period.start_date.isoformat(),
            "period_end": period.end_date.isoformat(),
            "total_cents": total_cents,
            "duration_ms": duration_ms,
        },
    )


def log_report(request_id: str, kind: str, transaction_count: int, duration_ms: float) -> None:
    """Log a generated reimbursement report"""
    logging.info(
        "Report generated",
        extra={
            "request_id": request_id,
            "step": "report_generated",
            "kind": kind,
            "transaction_count": transaction_count,
            "duration_ms": duration_ms,
        },
    )
