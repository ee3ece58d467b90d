"""
Structured Logging Configuration Module

Provides JSON-formatted structured logging for account operations. Each
record carries the account it concerns, so a log line can be traced back
to one entry in the data file without exposing credentials.
"""

import logging
import json
from datetime import datetime, timezone
from decimal import Decimal
from typing import Optional, Union


TEXT_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# Attribute under which log_action attaches its fields to the LogRecord
FIELDS_ATTR = "bank_fields"


class JSONFormatter(logging.Formatter):
    """One JSON object per record: base fields plus the account fields"""

    def format(self, record):
        log_entry = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        log_entry.update(getattr(record, FIELDS_ATTR, {}))

        if record.exc_info:
            log_entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_entry, default=str)


def setup_logging(level: str = "WARNING", logger_name: str = "dhaka_bank",
                  log_format: str = "json", log_file: Optional[str] = None) -> logging.Logger:
    """
    Setup structured logging for the application.

    Logs go to stderr unless ``log_file`` is given, so they stay out of the
    menu output on stdout.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logger_name: Name of the logger
        log_format: "json" for structured records, "text" for plain lines
        log_file: Optional path to append log records to

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(logger_name)

    # Remove existing handlers to avoid duplicates
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
        handler.close()

    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler()

    if log_format == "text":
        handler.setFormatter(logging.Formatter(TEXT_FORMAT))
    else:
        handler.setFormatter(JSONFormatter())

    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))

    # Prevent propagation to avoid duplicate logs
    logger.propagate = False

    return logger


def get_logger(name: str = "dhaka_bank") -> logging.Logger:
    """Get logger instance"""
    return logging.getLogger(name)


def log_action(logger: logging.Logger, level: str, message: str, action: str,
               account=None, username: Optional[str] = None,
               amount: Optional[Union[Decimal, str]] = None,
               path: Optional[str] = None) -> None:
    """
    Log an account operation.

    ``account`` contributes its id, username and current balance; the
    password hash is never included. ``username`` covers operations that
    did not resolve to an account (failed login, taken username).
    """
    fields = {"action": action}
    if account is not None:
        fields["account_id"] = account.id
        fields["username"] = account.username
        fields["balance"] = str(account.balance)
    elif username is not None:
        fields["username"] = username
    if amount is not None:
        fields["amount"] = str(amount)
    if path is not None:
        fields["path"] = path

    logger.log(getattr(logging, level.upper()), message, extra={FIELDS_ATTR: fields})
