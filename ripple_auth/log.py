# SPDX-License-Identifier: MIT
# Copyright (c) 2025 ripple-auth contributors

"""Structured logging for the Ripple ID strategy.

Loggers accept a message plus arbitrary keyword fields. The stdout driver
emits one JSON object per line and mirrors every record to the stdlib
``logging`` module so test harnesses (``caplog``) can capture it.
"""

import json
import logging
import os
import sys
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class Logger(ABC):
    """Abstract base class for loggers."""

    def __init__(self, level: str = "INFO", name: str | None = None):
        self.level = level.upper()
        self.name = name or "ripple_auth"

        if self.level not in _LEVELS:
            raise ValueError(f"Invalid log level: {level}. Must be one of {list(_LEVELS.keys())}")

    @abstractmethod
    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        """Emit a single record."""

    def info(self, message: str, **kwargs: Any) -> None:
        self._log("INFO", message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log("WARNING", message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log("ERROR", message, **kwargs)

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log("DEBUG", message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Log an error-level message with the active exception attached."""
        kwargs.setdefault("exc_info", True)
        self._log("ERROR", message, **kwargs)


class StdoutLogger(Logger):
    """Logger that writes structured JSON lines to stdout."""

    def __init__(self, level: str = "INFO", name: str | None = None):
        super().__init__(level=level, name=name)
        self._stdlib_logger = logging.getLogger(self.name)
        # NOTSET defers to the root level; stdout filtering uses self.level
        self._stdlib_logger.setLevel(logging.NOTSET)

    def _render(self, level: str, message: str, fields: dict[str, Any]) -> str:
        entry: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "logger": self.name,
            "message": message,
        }
        if fields:
            entry["extra"] = fields

        try:
            return json.dumps(entry, default=str)
        except (TypeError, ValueError):
            return json.dumps({**entry, "extra": {k: repr(v) for k, v in fields.items()}})

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        numeric_level = _LEVELS[level]
        if numeric_level < _LEVELS[self.level]:
            return

        exc_info = kwargs.pop("exc_info", None)
        sys.stdout.write(self._render(level, message, kwargs) + "\n")
        sys.stdout.flush()

        self._stdlib_logger.log(
            numeric_level,
            message,
            exc_info=exc_info,
            extra={"extra": kwargs} if kwargs else None,
        )


class SilentLogger(Logger):
    """Logger that keeps records in memory.

    Used in tests to assert on logging behavior. Records are not filtered
    by level.
    """

    def __init__(self, level: str = "INFO", name: str | None = None):
        super().__init__(level=level, name=name)
        self.logs: list[dict[str, Any]] = []

    def _log(self, level: str, message: str, **kwargs: Any) -> None:
        entry: dict[str, Any] = {"level": level, "message": message}
        if kwargs:
            entry["extra"] = kwargs
        self.logs.append(entry)

    def has_log(self, message: str, level: str | None = None) -> bool:
        """Return True if a record containing ``message`` was captured."""
        return any(
            message in entry["message"] and (level is None or entry["level"] == level.upper())
            for entry in self.logs
        )

    def clear(self) -> None:
        self.logs.clear()


def create_logger(
    logger_type: str | None = None,
    level: str | None = None,
    name: str | None = None,
) -> Logger:
    """Create a logger.

    Explicit arguments win, then the ``LOG_TYPE``, ``LOG_LEVEL`` and
    ``LOG_NAME`` environment variables, then ``stdout``/``INFO``/``ripple_auth``.

    Raises:
        ValueError: If logger_type or level is not recognized

    Example:
        >>> logger = create_logger(logger_type="stdout", level="DEBUG", name="ripple_auth.strategy")
        >>> logger.info("Fetched profile", identity="alice")
    """
    logger_type = (logger_type or os.getenv("LOG_TYPE") or "stdout").lower()
    level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
    name = name or os.getenv("LOG_NAME") or "ripple_auth"

    if logger_type == "stdout":
        return StdoutLogger(level=level, name=name)
    elif logger_type == "silent":
        return SilentLogger(level=level, name=name)
    else:
        raise ValueError(
            f"Unknown logger_type: {logger_type}. "
            f"Must be one of: stdout, silent"
        )
