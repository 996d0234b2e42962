"""
Structured JSON logging configuration.

Sets up application-wide logging with:
- One JSON object per line on stdout
- Request correlation IDs
- Request path, method, status code and latency
- Query-by-example details (entity, criteria count, result size)

Plain-text output is available for local development.
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict


# Attributes every LogRecord carries; anything else came in through `extra`.
_RECORD_ATTRIBUTES = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime", "taskName"}

NOISY_LOGGERS = ("httpx", "httpcore", "asyncio", "sqlalchemy.engine")


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Base fields:
    - timestamp: ISO 8601 UTC timestamp
    - level: Log level name
    - message: Rendered log message
    - logger: Logger name (module path)
    - exception: Formatted traceback (if exc_info was given)

    Every field passed through ``extra`` is copied as-is.

    Example output:
        {"timestamp": "2025-11-24T10:30:00.123456+00:00", "level": "INFO",
         "message": "Request completed", "logger": "employee_search.middleware.logging",
         "path": "/api/employees/count", "status_code": 200, "latency_ms": 4.1}
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "message": record.getMessage(),
            "logger": record.name,
        }

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        if record.stack_info:
            log_data["stack_info"] = self.formatStack(record.stack_info)

        for key, value in record.__dict__.items():
            if key in _RECORD_ATTRIBUTES or key in log_data:
                continue
            if value is None:
                continue
            log_data[key] = value

        return json.dumps(log_data, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True
) -> None:
    """
    Configure application logging.

    Replaces the root logger's handlers with a single stdout handler and
    lowers the verbosity of chatty third-party loggers.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Use JSONFormatter (True) or a plain text format (False)

    Note:
        Call this once at application startup, before any logging occurs.
    """
    root_logger = logging.getLogger()

    log_level = getattr(logging, level.upper(), logging.INFO)
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if json_format:
        formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            fmt="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get logger instance with given name.

    Example:
        logger = get_logger(__name__)
        logger.info("Searching employees", extra={"criteria": 2})
    """
    return logging.getLogger(name)


def log_with_context(
    logger: logging.Logger,
    level: str,
    message: str,
    **fields: Any
) -> None:
    """
    Log message with structured context fields.

    Fields whose value is None are dropped.

    Example:
        log_with_context(
            logger,
            "info",
            "Employee search completed",
            operation="find_all",
            result_count=2,
        )
    """
    extra = {key: value for key, value in fields.items() if value is not None}
    log_method = getattr(logger, level.lower())
    log_method(message, extra=extra)
