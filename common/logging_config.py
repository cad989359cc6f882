# -*- coding: utf-8 -*-
"""
Centralized logging configuration for the Paperless-ngx installer.

Console output is human-readable; an optional log file receives
JSON-structured records with consistent metadata so a full installation
run can be inspected afterwards.
"""

import json
import logging
import os
import socket
import sys
from datetime import datetime, timezone
from typing import Optional

CONSOLE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_HANDLER_NAME = "console"

_STANDARD_RECORD_ATTRS = frozenset(
    [
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "exc_info",
        "exc_text",
        "stack_info",
        "taskName",
        "message",
        "asctime",
    ]
)


class JSONFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Every record carries timestamp, level, service, logger, message, source
    location and hostname; fields passed through 'extra=' land under "extra".
    """

    def __init__(self, service_name: str = "paperless-installer"):
        super().__init__()
        self.service_name = service_name
        self.hostname = socket.gethostname()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            "timestamp": datetime.fromtimestamp(
                record.created, tz=timezone.utc
            ).isoformat(),
            "level": record.levelname,
            "service": self.service_name,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "hostname": self.hostname,
        }

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        extra_fields = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _STANDARD_RECORD_ATTRS
        }
        if extra_fields:
            log_entry["extra"] = extra_fields

        return json.dumps(log_entry, ensure_ascii=False, default=str)


def setup_logging(
    service_name: str,
    log_level: Optional[str] = None,
    enable_console: bool = True,
    log_file_path: Optional[str] = None,
    log_prefix: Optional[str] = None,
) -> logging.Logger:
    """
    Set up logging for the installer.

    Args:
        service_name: Name of the top-level logger.
        log_level: DEBUG, INFO, WARNING, ERROR or CRITICAL. Defaults to the
            LOG_LEVEL environment variable, then INFO.
        enable_console: Whether to log to stdout.
        log_file_path: Optional path of a JSON log file.
        log_prefix: Optional text put in front of every console line.

    Returns:
        The service logger.
    """
    if log_level is None:
        log_level = os.environ.get("LOG_LEVEL", "INFO")

    numeric_level = getattr(logging, log_level.upper(), None)
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO
        log_level = "INFO"

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    if enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setLevel(numeric_level)
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setFormatter(console_formatter(log_prefix))
        root_logger.addHandler(console_handler)

    if log_file_path:
        file_handler = logging.FileHandler(log_file_path, encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(JSONFormatter(service_name))
        root_logger.addHandler(file_handler)
        root_logger.setLevel(min(numeric_level, logging.DEBUG))

    logger = logging.getLogger(service_name)
    logger.debug(
        "Logging initialized",
        extra={
            "log_level": log_level.upper(),
            "console_enabled": enable_console,
            "log_file": log_file_path,
        },
    )
    return logger


def console_formatter(log_prefix: Optional[str] = None) -> logging.Formatter:
    fmt = f"{log_prefix} {CONSOLE_FORMAT}" if log_prefix else CONSOLE_FORMAT
    return logging.Formatter(fmt)


def set_console_prefix(log_prefix: Optional[str]) -> None:
    """
    Re-format the console handler installed by setup_logging().

    Logging is configured before the settings are loaded, so the prefix from
    config.yaml or the environment is only known afterwards.
    """
    for handler in logging.getLogger().handlers:
        if handler.get_name() == CONSOLE_HANDLER_NAME:
            handler.setFormatter(console_formatter(log_prefix))
