"""
Logging setup: stdout plus optional rotating file, every record tagged with
the correlation id of the request that produced it.
"""

import logging
from logging.handlers import RotatingFileHandler
import sys
from pathlib import Path
from contextvars import ContextVar
from typing import Optional

from chat_storage.config.settings import Config

DEFAULT_CORRELATION_ID = "NO Correlation ID"

# Context variable to store correlation ID across async/thread boundaries
correlation_id_var: ContextVar[str] = ContextVar(
    "correlation_id", default=DEFAULT_CORRELATION_ID
)


class CorrelationIdFilter(logging.Filter):
    """Logging filter to add correlation ID to log records."""

    def filter(self, record):
        record.correlation_id = correlation_id_var.get()
        return True


class SafeFormatter(logging.Formatter):
    """Formatter that ensures correlation_id always exists."""

    def format(self, record):
        if not hasattr(record, "correlation_id"):
            record.correlation_id = DEFAULT_CORRELATION_ID
        return super().format(record)


def _is_ours(handler: logging.Handler) -> bool:
    return getattr(handler, "_chat_storage", False)


def setup_logging(level: str = "INFO", log_file: Optional[str] = None):
    """
    Configure stdout (and optional rotating file) logging with correlation ids.

    Safe to call more than once: handlers installed by a previous call are
    replaced, so each app factory call does not duplicate output.
    """
    root = logging.getLogger()
    root.setLevel(logging.WARNING)  # third-party libraries stay quiet
    for handler in [h for h in root.handlers if _is_ours(h)]:
        root.removeHandler(handler)
        handler.close()

    formatter = SafeFormatter(Config.LOG_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stdout)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(log_file, maxBytes=10 * 1024 * 1024, backupCount=5)
        )
    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(CorrelationIdFilter())
        handler._chat_storage = True
        root.addHandler(handler)

    package_logger = logging.getLogger("chat_storage")
    package_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    package_logger.info("Logging is set up: level=%s, log_file=%s", level, log_file)

    return root
