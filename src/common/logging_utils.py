"""Centralized logging helpers.

Every module logs through ``logging.getLogger(__name__)``; this module owns
handler setup and the structured ``extra`` payloads attached to DEBUG traces.
"""
from __future__ import annotations

import logging
import os
import time
from typing import Any, Dict, Optional

from constants import Constants

_CONTEXT_FIELDS = ("event", "component", "action", "outcome")


def _resolve_level(value: Optional[str]) -> int:
    name = str(value or "INFO").strip().upper()
    level = getattr(logging, name, None)
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> None:
    """Install the console handler once, honoring FXRUN_LOG_LEVEL."""
    root = logging.getLogger()
    level = _resolve_level(os.environ.get(Constants.ENV_LOG_LEVEL))
    if not any(getattr(h, "_fxrun_console", False) for h in root.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(Constants.LOG_FORMAT))
        handler._fxrun_console = True  # type: ignore[attr-defined]
        root.addHandler(handler)
    root.setLevel(level)


def add_file_handler(log_file: str) -> logging.Handler:
    """Mirror log records into ``log_file``."""
    file_handler = logging.FileHandler(log_file)
    file_handler.setFormatter(logging.Formatter(Constants.LOG_FILE_FORMAT))
    logging.getLogger().addHandler(file_handler)
    return file_handler


def is_debug_enabled(logger: logging.Logger) -> bool:
    """Return True when DEBUG records would be emitted by ``logger``."""
    return logger.isEnabledFor(logging.DEBUG)


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for structured log records.

    The well-known keys (event, component, action, outcome) are always present
    so formatters can rely on them; unset ones are None. Other keyword
    arguments are passed through unchanged.
    """
    context: Dict[str, Any] = {key: None for key in _CONTEXT_FIELDS}
    context.update({k: v for k, v in fields.items() if v is not None or k in _CONTEXT_FIELDS})
    return context


class Timer:
    """Context manager measuring elapsed wall time in milliseconds."""

    def __init__(self) -> None:
        self._start = 0.0
        self._end: Optional[float] = None

    def __enter__(self) -> "Timer":
        self._start = time.perf_counter()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self._end = time.perf_counter()

    def duration_ms(self) -> int:
        end = self._end if self._end is not None else time.perf_counter()
        return int((end - self._start) * 1000)
