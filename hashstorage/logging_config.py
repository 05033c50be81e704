"""
Logging configuration for hashstorage tools.

Environment Variables:
    HASHSTORAGE_LOG_LEVEL: Log level (DEBUG, INFO, WARNING, ERROR) - default: INFO
    HASHSTORAGE_LOG_FORMAT: Log format (json, text) - default: text

Usage:
    from hashstorage.logging_config import setup_logging, get_logger

    setup_logging()
    logger = get_logger(__name__, trace_id=guard.fingerprint(owner, group, key))
    logger.info("Loaded block")
"""

import logging
import os
import sys
from typing import Optional

from pythonjsonlogger.json import JsonFormatter

LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


class TraceIDFilter(logging.Filter):
    """
    Logging filter that adds trace_id to all log records.

    Library loggers do not go through get_logger(), so the formatters'
    %(trace_id)s field needs a default.
    """

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "trace_id"):
            record.trace_id = "N/A"  # type: ignore
        return True


def setup_logging(level: Optional[str] = None, log_format: Optional[str] = None) -> None:
    """
    Configure the root logger.

    Arguments override HASHSTORAGE_LOG_LEVEL / HASHSTORAGE_LOG_FORMAT.
    Logs go to stderr so command output on stdout stays parseable.
    """
    level_name = (level or os.getenv("HASHSTORAGE_LOG_LEVEL", "INFO")).upper()
    fmt = (log_format or os.getenv("HASHSTORAGE_LOG_FORMAT", "text")).lower()
    resolved = LEVELS.get(level_name, logging.INFO)

    root_logger = logging.getLogger()
    root_logger.setLevel(resolved)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(resolved)
    handler.addFilter(TraceIDFilter())

    if fmt == "json":
        formatter: logging.Formatter = JsonFormatter(
            "%(asctime)s %(name)s %(levelname)s %(message)s %(trace_id)s",
            rename_fields={
                "asctime": "timestamp",
                "name": "logger",
                "levelname": "level",
            },
        )
    else:
        formatter = logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s [trace_id=%(trace_id)s]",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    # Silence noisy libraries
    for name in ("httpx", "httpcore", "botocore", "boto3", "urllib3"):
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str, trace_id: Optional[str] = None) -> logging.LoggerAdapter:
    """
    Get a logger with a trace_id for correlation.

    Args:
        name: Logger name (typically __name__)
        trace_id: Correlation id (block fingerprint, owner prefix)
    """
    logger = logging.getLogger(name)
    return logging.LoggerAdapter(logger, {"trace_id": trace_id or "N/A"})
