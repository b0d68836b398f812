"""
Name: Structured Logger Configuration

Responsibilities:
  - Emit one JSON object per log line on stdout
  - Scrub extra fields: secrets redacted, student emails masked, long
    values capped
  - Attach exception type, message and stack trace

Collaborators:
  - crosscutting/config.py: log_level / log_json
  - Python logging module (stdlib)

Constraints:
  - Never log passwords or raw moderated text; an "email" extra is reduced
    to its first letter and domain

Notes:
  - Import as: from portal.crosscutting.logger import logger
"""

from __future__ import annotations

import json
import logging
import os
import sys
import traceback
from datetime import datetime, timezone
from typing import Any, Final

# R: Attributes every LogRecord carries; anything else came in through extra=.
_RECORD_ATTRS: Final[frozenset[str]] = frozenset(
    logging.makeLogRecord({}).__dict__
) | {"message", "asctime", "taskName"}

_SECRET_KEYS: Final[frozenset[str]] = frozenset(
    {"password", "new_password", "token", "authorization", "secret", "cookie"}
)
_EMAIL_KEYS: Final[frozenset[str]] = frozenset({"email", "user_email"})

MAX_VALUE_LENGTH: Final[int] = 2_000
MAX_DEPTH: Final[int] = 4


def mask_email(value: str) -> str:
    """priya.24ece@kongu.edu -> p***@kongu.edu"""
    local, sep, domain = value.partition("@")
    if not sep:
        return "***"
    return f"{local[:1]}***@{domain}"


def scrub(value: Any, key: str | None = None, depth: int = 0) -> Any:
    """Make an extra field safe and JSON-friendly."""
    lowered = (key or "").lower()
    if lowered in _SECRET_KEYS:
        return "***REDACTED***"
    if lowered in _EMAIL_KEYS and isinstance(value, str):
        return mask_email(value)
    if depth > MAX_DEPTH:
        return "***TRUNCATED***"

    if isinstance(value, str):
        if len(value) > MAX_VALUE_LENGTH:
            return value[:MAX_VALUE_LENGTH] + "...(truncated)"
        return value
    if isinstance(value, dict):
        return {str(k): scrub(v, str(k), depth + 1) for k, v in value.items()}
    if isinstance(value, (list, tuple, set, frozenset)):
        return [scrub(v, key, depth + 1) for v in value]
    if isinstance(value, (bytes, bytearray)):
        return f"<{len(value)} bytes>"
    return value


class JSONFormatter(logging.Formatter):
    """LogRecord -> single-line JSON."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
            "pid": os.getpid(),
        }
        entry.update(
            (name, scrub(value, name))
            for name, value in record.__dict__.items()
            if name not in _RECORD_ATTRS
        )

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc, tb = record.exc_info
            entry["exception"] = {
                "type": exc_type.__name__,
                "message": str(exc),
                "stacktrace": traceback.format_exception(exc_type, exc, tb),
            }

        return json.dumps(entry, ensure_ascii=False, default=str, separators=(",", ":"))


def setup_logger(name: str = "campus-portal") -> logging.Logger:
    """
    Configure the portal logger from Settings.

    Handlers are attached once; calling again only refreshes the level.
    """
    from .config import get_settings

    settings = get_settings()
    log = logging.getLogger(name)
    log.setLevel(getattr(logging, settings.log_level, logging.INFO))

    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        if settings.log_json:
            handler.setFormatter(JSONFormatter())
        else:
            handler.setFormatter(logging.Formatter("%(levelname)s %(name)s %(message)s"))
        log.addHandler(handler)

    return log


logger = setup_logger()
