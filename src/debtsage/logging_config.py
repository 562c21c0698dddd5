"""Structured logging configuration with JSON output and rotation."""

from __future__ import annotations

import json
import logging
import logging.handlers
from datetime import datetime, timezone
from pathlib import Path

from .config import BaseConfig


class JSONFormatter(logging.Formatter):
    """Format log records as JSON for structured logging."""

    # Standard LogRecord attributes that should not be treated as extra fields
    _STANDARD_ATTRS = set(
        logging.LogRecord("", 0, "", 0, "", (), None).__dict__
    ) | {"message", "asctime", "taskName"}

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            exc_type, exc_value, _ = record.exc_info
            log_data["exception"] = {
                "type": exc_type.__name__ if exc_type else None,
                "message": str(exc_value) if exc_value else None,
                "traceback": self.formatException(record.exc_info),
            }

        # Fields passed via logger.info(..., extra={...})
        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in self._STANDARD_ATTRS
        }
        if extra_fields:
            log_data["extra"] = extra_fields

        return json.dumps(log_data, default=str)


def setup_logging(config: BaseConfig) -> logging.Logger:
    """Configure console + rotating JSON file logging for the ``debtsage`` logger.

    Args:
        config: Application configuration with DATA_DIR and DEV_MODE

    Returns:
        Configured package logger
    """
    logs_dir = Path(config.DATA_DIR) / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger("debtsage")
    root_logger.setLevel(logging.DEBUG if config.DEV_MODE else logging.INFO)

    # Remove existing handlers to avoid duplicates
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()

    # Console handler (human-readable format for development)
    console_handler = logging.StreamHandler()
    console_handler.setLevel(logging.INFO if config.DEV_MODE else logging.WARNING)
    if config.DEV_MODE:
        console_format = "[%(asctime)s] %(levelname)-8s [%(name)s.%(funcName)s:%(lineno)d] %(message)s"
    else:
        console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    console_handler.setFormatter(
        logging.Formatter(
            fmt=console_format,
            datefmt="%H:%M:%S" if config.DEV_MODE else "%Y-%m-%d %H:%M:%S",
        )
    )
    root_logger.addHandler(console_handler)

    log_file = logs_dir / config.LOG_FILENAME
    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=config.LOG_MAX_BYTES,
        backupCount=config.LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(logging.DEBUG if config.DEV_MODE else logging.INFO)
    file_handler.setFormatter(JSONFormatter())
    root_logger.addHandler(file_handler)

    root_logger.info(
        "Logging initialized",
        extra={
            "dev_mode": config.DEV_MODE,
            "log_file": str(log_file),
            "data_dir": config.DATA_DIR,
        },
    )

    return root_logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger namespaced under ``debtsage``."""
    return logging.getLogger(f"debtsage.{name}")
