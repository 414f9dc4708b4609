"""Structured JSON logging for production observability"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict
from pythonjsonlogger import jsonlogger

from auto_lending.config import settings


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


def log_submission(
    command: str,
    entry_point: str,
    tx_hash: str | None,
    error_kind: str | None,
    duration_ms: float,
) -> None:
    """Log structured submission outcome for analysis"""
    extra = {
        "step": "submission_complete",
        "command": command,
        "entry_point": entry_point,
        "tx_hash": tx_hash,
        "outcome": error_kind or "finalized",
        "duration_ms": duration_ms,
    }
    if error_kind is None:
        logging.info("Transaction finalized", extra=extra)
    else:
        logging.warning("Transaction failed", extra=extra)
