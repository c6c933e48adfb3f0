"""
Logging setup for the storefront API and cart store.

Every module asks for its logger through get_logger(__name__). Output goes to
stdout, where Vercel picks it up; LOG_LEVEL picks the threshold.

Values that come from shoppers (cart keys, product ids, search terms) end up
in log lines, so they pass through the sanitize_* helpers first:

    logger.info(f"Loaded cart '{sanitize_cart_key(key)}'")
"""

import logging
import os
import sys
from functools import cache

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
# Vercel stamps each line itself
LOG_FORMAT_SIMPLE = "%(levelname)s - %(name)s - %(message)s"

# Clients whose per-request INFO lines drown out storefront logs
QUIET_LOGGERS = ("httpx", "httpcore", "hpack")


def _get_log_level() -> int:
    level_name = os.environ.get("LOG_LEVEL", "INFO").upper()
    return getattr(logging, level_name, logging.INFO)


def _configure_root_logger() -> None:
    """Attach a stdout handler to the root logger, unless one is already set up."""
    root = logging.getLogger()
    if root.handlers:
        return

    level = _get_log_level()
    root.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(level)
    on_vercel = os.environ.get("VERCEL") == "1"
    handler.setFormatter(logging.Formatter(LOG_FORMAT_SIMPLE if on_vercel else LOG_FORMAT))
    root.addHandler(handler)

    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)


_configure_root_logger()


@cache
def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _escape_log_injection(value: str) -> str:
    """Escape line breaks and tabs so a value cannot forge extra log lines (CWE-117)."""
    return (
        value.replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
        .replace("\x00", "")
    )


def _truncate(value: str, max_length: int) -> str:
    if len(value) <= max_length:
        return value
    return value[:max_length] + "..."


def sanitize_id_for_logging(id_value) -> str:
    """
    Product or variant id as it should appear in a log line.

    Ids arrive from posted carts as ints or strings; only the first 8
    characters are kept.
    """
    if id_value is None or id_value == "":
        return "N/A"
    return _escape_log_injection(str(id_value))[:8]


def sanitize_string_for_logging(value: str | None, max_length: int = 50) -> str:
    """Free text typed by shoppers (search terms, product names)."""
    if not value:
        return "N/A"
    return _truncate(_escape_log_injection(str(value)), max_length)


def sanitize_cart_key(key: str | None) -> str:
    """Cart storage key; session-scoped keys can be long, keep the head."""
    return sanitize_string_for_logging(key, max_length=40)


__all__ = [
    "LOG_FORMAT",
    "LOG_FORMAT_SIMPLE",
    "get_logger",
    "sanitize_cart_key",
    "sanitize_id_for_logging",
    "sanitize_string_for_logging",
]
