# autevo/core/logging.py
import logging
import sys
from datetime import datetime, timezone
from typing import Dict, Any
from pythonjsonlogger import jsonlogger

from autevo.core.config import settings

CONTEXT_FIELDS = ("tenant_id", "user_id", "request_id", "operation")


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """Custom JSON formatter for structured logging"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]):
        super().add_fields(log_record, record, message_dict)

        if not log_record.get("timestamp"):
            log_record["timestamp"] = datetime.now(timezone.utc).isoformat()

        if record.name:
            log_record["logger"] = record.name

        log_record["level"] = record.levelname

        # Request context passed through `extra=`
        for field in CONTEXT_FIELDS:
            if hasattr(record, field):
                log_record[field] = getattr(record, field)


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure structured JSON logging for the `autevo` logger tree"""
    logger = logging.getLogger("autevo")
    logger.setLevel(level)
    logger.propagate = False

    if not logger.handlers:
        console_handler = logging.StreamHandler(sys.stdout)
        formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(logger)s %(message)s"
        )
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    return logger


def context_extra(ctx) -> Dict[str, Any]:
    """Build the `extra` mapping for a log call from a RequestContext"""
    return {
        "tenant_id": ctx.tenant_id,
        "user_id": ctx.user_id,
        "request_id": ctx.request_id,
    }


# Initialize logger
logger = setup_logging(settings.LOG_LEVEL)
