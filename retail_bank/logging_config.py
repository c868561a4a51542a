"""
Structured Logging Configuration Module

Ledger events are logged as one JSON object per line on stderr, so they
never mix with command output on stdout. Each event carries its action and
account label plus the figures involved.
"""

import logging
import json
from datetime import datetime, timezone
from typing import Optional

from .money import Money

# Keys a ledger figure may not overwrite when merged into an entry
RESERVED_KEYS = ("timestamp", "level", "logger", "message", "action", "account")


def _ledger_value(value):
    """JSON fallback: Money and Decimal amounts as exact decimal strings"""
    if isinstance(value, Money):
        return str(value.amount)
    return str(value)


class JSONFormatter(logging.Formatter):
    """JSON formatter for ledger events"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "action": getattr(record, 'action', None),
            "account": getattr(record, 'account', None),
        }

        # Remove None values
        log_entry = {k: v for k, v in log_entry.items() if v is not None}

        for key, value in (getattr(record, 'figures', None) or {}).items():
            if key not in RESERVED_KEYS:
                log_entry[key] = value

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=_ledger_value)


def setup_logging(level: str = "INFO", logger_name: str = "retail_bank",
                  format_type: str = "json") -> logging.Logger:
    """
    Setup logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Name of the logger
        format_type: "json" for structured output, anything else for plain text

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    for handler in logger.handlers[:]:
        logger.removeHandler(handler)

    # Console handler (stderr)
    handler = logging.StreamHandler()
    if format_type == "json":
        handler.setFormatter(JSONFormatter())
    else:
        handler.setFormatter(logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        ))

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    logger.propagate = False

    return logger


def get_logger(name: str = "retail_bank") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str,
               action: Optional[str] = None, account: Optional[str] = None,
               figures: Optional[dict] = None):
    """
    Log a ledger event with structured data.

    Args:
        logger: Logger instance
        level: Log level (info, warning, error, etc.)
        message: Log message
        action: Ledger action, e.g. "deposit" or a command code
        account: Label of the account involved
        figures: Amounts, balances and counts; Money values are allowed
    """
    levelno = getattr(logging, level.upper())
    if not logger.isEnabledFor(levelno):
        return

    record = logger.makeRecord(
        logger.name, levelno, __name__, 0, message, (), None
    )

    if action:
        record.action = action
    if account:
        record.account = account
    if figures:
        record.figures = figures

    logger.handle(record)
