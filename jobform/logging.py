"""Logging utilities for the application form.

Every jobform module logs through get_form_logger(). The returned adapter
stamps each record with the current form session (see bind_session), so
all records of one session can be correlated in a log file.
"""

from __future__ import annotations

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict, MutableMapping, Optional

__all__ = [
    "setup_logging",
    "JSONFormatter",
    "FormLogger",
    "get_form_logger",
    "bind_session",
    "clear_session",
    "session_context",
]

# Attributes every LogRecord has; anything else arrived through extra=
_RECORD_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__
) | {"message", "asctime"}

# Shared by every FormLogger in the process
_session: Dict[str, Any] = {}


def bind_session(**kwargs: Any) -> None:
    """Attach fields (e.g. session="a1b2c3") to every later jobform record."""
    _session.update(kwargs)


def clear_session() -> None:
    _session.clear()


def session_context() -> Dict[str, Any]:
    return dict(_session)


class JSONFormatter(logging.Formatter):
    """One JSON object per record.

    The session id, when bound, is a top-level key; other extra= values
    are grouped under "extra".

    Example output:
        {"timestamp": "2025-01-15T10:30:00.123Z", "level": "INFO",
         "logger": "jobform.form.skills", "session": "a1b2c3",
         "message": "Skill added: python"}
    """

    def __init__(self, exclude_fields: Optional[list[str]] = None):
        super().__init__()
        self.exclude_fields = frozenset(exclude_fields or ())

    def format(self, record: logging.LogRecord) -> str:
        log_data: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
        }
        session = getattr(record, "session", None)
        if session is not None:
            log_data["session"] = session
        log_data["message"] = record.getMessage()

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra = {
            k: v
            for k, v in record.__dict__.items()
            if k not in _RECORD_ATTRS and k != "session" and k not in self.exclude_fields
        }
        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, default=str)


class FormLogger(logging.LoggerAdapter):
    """Logger adapter that merges the bound session fields into extra=.

    Example:
        logger = get_form_logger(__name__)
        bind_session(session="a1b2c3")
        logger.info("Skill added: %s", skill_id)  # record.session == "a1b2c3"
    """

    def __init__(self, name: str):
        super().__init__(logging.getLogger(name), {})

    def process(
        self, msg: Any, kwargs: MutableMapping[str, Any]
    ) -> tuple[Any, MutableMapping[str, Any]]:
        extra = dict(_session)
        extra.update(kwargs.get("extra") or {})
        kwargs["extra"] = extra
        return msg, kwargs


def get_form_logger(name: str) -> FormLogger:
    """Get a session-aware logger (name is typically the module path)."""
    return FormLogger(name)


def setup_logging(
    verbose: bool = False,
    json_format: bool = False,
    log_file: Optional[str] = None,
    console: bool = True,
) -> None:
    """Configure the root logger for a form session.

    Args:
        verbose: Enable debug-level logging
        json_format: Use JSONFormatter instead of plain text
        log_file: Optional file path to write logs to
        console: Also log to stdout (the TUI turns this off)
    """
    level = logging.DEBUG if verbose else logging.INFO

    if json_format:
        formatter: logging.Formatter = JSONFormatter()
    else:
        formatter = logging.Formatter(
            "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    handlers: list[logging.Handler] = []
    if console:
        handlers.append(logging.StreamHandler(sys.stdout))
    if log_file:
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # asyncio reports slow callbacks at DEBUG
    logging.getLogger("asyncio").setLevel(logging.WARNING)
