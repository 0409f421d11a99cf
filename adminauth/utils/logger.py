"""Structured logging configuration

Log lines are single JSON objects. Anything passed through ``extra=`` that is
not a standard ``LogRecord`` attribute lands in the object as-is::

    logger.info("Admin logged in", extra={"admin_id": "adm_x", "action": "login"})
"""
import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict

LOGGER_NAME = "adminauth"

_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key not in _RESERVED and not key.startswith("_") and value is not None:
                entry[key] = value

        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(log_level: str = "INFO") -> logging.Logger:
    """Attach a single stdout JSON handler to the service logger"""
    log = logging.getLogger(LOGGER_NAME)
    log.setLevel(log_level.upper())
    log.propagate = False

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JSONFormatter())
    log.handlers = [handler]

    return log


logger = setup_logging()
