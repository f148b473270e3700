"""Structured logging configuration for parallel suite runs.

This module configures Python logging with:
- JSON structured logging for CI log collectors
- Optional rotating log file
- Quieter third-party loggers (Selenium, urllib3, httpx)
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

from .config import LoggingConfig

_STANDARD_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "created",
        "filename",
        "funcName",
        "levelname",
        "levelno",
        "lineno",
        "module",
        "msecs",
        "message",
        "pathname",
        "process",
        "processName",
        "relativeCreated",
        "thread",
        "threadName",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
    ]
)


class CustomJsonFormatter(jsonlogger.JsonFormatter):
    """JSON formatter that adds logger, level, thread and extra context fields."""

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["logger"] = record.name
        log_record["level"] = record.levelname
        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        # Workers are threads, so the thread name identifies the worker in logs
        log_record["thread"] = record.threadName

        if record.exc_info:
            log_record["exception"] = self.formatException(record.exc_info)

        for key, value in record.__dict__.items():
            if key not in _STANDARD_ATTRS:
                log_record[key] = value


def setup_logging(config: LoggingConfig) -> None:
    """Configure root logging.

    Args:
        config: Logging configuration settings
    """
    if config.json_logs:
        formatter = CustomJsonFormatter(
            "%(timestamp)s %(level)s %(logger)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(threadName)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    root_logger = logging.getLogger()
    root_logger.setLevel(config.log_level)
    root_logger.handlers.clear()

    if config.log_file:
        log_path = Path(config.log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        handler = logging.handlers.RotatingFileHandler(
            filename=str(log_path),
            maxBytes=config.log_rotation_size,
            backupCount=config.log_rotation_count,
            encoding="utf-8",
        )
    else:
        handler = logging.StreamHandler(sys.stderr)

    handler.setLevel(config.log_level)
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    logging.getLogger("parallel_webdriver").setLevel(config.log_level)

    # Suppress overly verbose third-party loggers
    logging.getLogger("selenium").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    root_logger.info("Logging configured successfully")
    root_logger.info(f"Log level: {config.log_level}")
    root_logger.info(f"JSON logs: {config.json_logs}")
    root_logger.info(f"Logs: {config.log_file or 'stderr'}")


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance with the given name."""
    return logging.getLogger(name)


def log_with_context(logger: logging.Logger, level: int, message: str, **context) -> None:
    """Log a message with additional context fields.

    With JSON logging the context fields become searchable attributes.

    Example:
        log_with_context(
            logger, logging.INFO,
            "Session acquired",
            worker="case-3",
            browser="edge",
            endpoint="http://localhost:4444",
        )
    """
    logger.log(level, message, extra=context)
