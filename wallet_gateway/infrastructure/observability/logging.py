"""Structured JSON logging and the gateway's logger implementations"""

import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pythonjsonlogger.json import JsonFormatter

from wallet_gateway.config import settings
from wallet_gateway.domain.interfaces import LoggerInterface

NOTICE = 25
ALERT = 55
EMERGENCY = 60

logging.addLevelName(NOTICE, "NOTICE")
logging.addLevelName(ALERT, "ALERT")
logging.addLevelName(EMERGENCY, "EMERGENCY")

LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "notice": NOTICE,
    "warning": logging.WARNING,
    "error": logging.ERROR,
    "critical": logging.CRITICAL,
    "alert": ALERT,
    "emergency": EMERGENCY,
}

# LogRecord attributes that extra= may not overwrite
_RESERVED = set(logging.LogRecord("", 0, "", 0, "", None, None).__dict__) | {"message", "asctime"}


class CustomJsonFormatter(JsonFormatter):
    """Custom JSON formatter with timestamp and service metadata"""

    def add_fields(self, log_record: Dict[str, Any], record: logging.LogRecord, message_dict: Dict[str, Any]) -> None:
        super().add_fields(log_record, record, message_dict)
        log_record["timestamp"] = datetime.now(timezone.utc).isoformat()
        log_record["level"] = record.levelname
        log_record["service"] = settings.service_name


def setup_logging(level: str | None = None, logger_name: str | None = None) -> None:
    """Configure structured JSON logging on the root logger, or on logger_name"""
    logger = logging.getLogger(logger_name)
    logger.setLevel((level or settings.log_level).upper())
    logger.handlers.clear()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(CustomJsonFormatter("%(timestamp)s %(level)s %(name)s %(message)s"))
    logger.addHandler(handler)


class NullLogger(LoggerInterface):
    """Discards everything"""

    def log(self, level: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        pass


class StructuredLogger(LoggerInterface):
    """
    LoggerInterface backed by the standard logging module.

    Context entries become LogRecord attributes, so the JSON formatter emits
    them as top-level fields. Keys that clash with LogRecord attributes are
    prefixed with "context_".
    """

    def __init__(self, name: str = "wallet_gateway"):
        self._logger = logging.getLogger(name)

    def log(self, level: str, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        levelno = LEVELS.get(str(level).lower(), logging.INFO)
        extra = {
            (f"context_{key}" if key in _RESERVED else str(key)): value
            for key, value in (context or {}).items()
        }
        self._logger.log(levelno, message, extra=extra)
