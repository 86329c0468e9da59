"""Logging setup for mandalagen.

Plain-text or JSON-lines output to stdout or a file, a dedicated per-frame
render logger, and context-carrying adapters for effect diagnostics.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime
import functools
import json
import logging
from pathlib import Path
import sys
import time
from typing import Any, TypeVar

RENDER_LOGGER_NAME = "MANDALAGEN_RENDER"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

F = TypeVar("F", bound=Callable[..., Any])

# Attributes every LogRecord carries; anything else arrived through ``extra``
_BUILTIN_RECORD_FIELDS = frozenset(
    vars(logging.LogRecord("", logging.INFO, "", 0, "", (), None))
) | {"message", "asctime", "taskName"}


class StructuredJSONFormatter(logging.Formatter):
    """One JSON object per record: ``level``, ``message``, ``timestamp``, ``context``.

    ``context`` holds the record's origin (logger, module, function, line),
    any ``extra`` fields such as ``effect`` or ``frame``, and exception
    details when present.
    """

    def format(self, record: logging.LogRecord) -> str:
        context: dict[str, Any] = {
            "logger_name": record.name,
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        context.update(
            (key, value)
            for key, value in vars(record).items()
            if key not in _BUILTIN_RECORD_FIELDS and not key.startswith("_")
        )

        if record.exc_info and record.exc_info[0] is not None:
            exc_type, exc_value, _ = record.exc_info
            context["error_type"] = exc_type.__name__
            context["error_message"] = str(exc_value)
            context["stack_trace"] = record.exc_text or self.formatException(record.exc_info)

        created = datetime.fromtimestamp(record.created, tz=UTC)
        return json.dumps(
            {
                "level": record.levelname,
                "message": record.getMessage(),
                "timestamp": created.isoformat(),
                "context": context,
            },
            default=str,
        )


def _build_handler(filename: str | Path | None) -> logging.Handler:
    if filename is None:
        return logging.StreamHandler(sys.stdout)
    return logging.FileHandler(filename, encoding="utf-8")


def configure_logging(
    level: str = "INFO",
    format_string: str | None = None,
    filename: str | Path | None = None,
    structured: bool = False,
) -> None:
    """(Re)configure the root logger.

    Replaces any handlers installed earlier, so the CLI may call it again
    once the app config has been read.

    Args:
        level: Level name, any case ("debug", "INFO").
        format_string: %-style format for plain output; ignored when structured.
        filename: Log file path; stdout when None.
        structured: Emit JSON lines via StructuredJSONFormatter.

    Example:
        >>> configure_logging(level="DEBUG", structured=True, filename="render.jsonl")
    """
    handler = _build_handler(filename)
    handler.setFormatter(
        StructuredJSONFormatter() if structured else logging.Formatter(format_string or DEFAULT_FORMAT)
    )
    logging.basicConfig(level=level.upper(), handlers=[handler], force=True)


def get_render_logger() -> logging.Logger:
    """Logger for per-frame diagnostics (phase, progress, blend, timings)."""
    return logging.getLogger(RENDER_LOGGER_NAME)


def get_logger(name: str, **context: Any) -> logging.Logger | logging.LoggerAdapter:
    """Logger for ``name``; wrapped in a LoggerAdapter when context is given.

    Context (e.g. ``effect="tree-of-life"``) is attached to every record and
    shows up under ``context`` in structured output.
    """
    base = logging.getLogger(name)
    return logging.LoggerAdapter(base, context) if context else base


def log_performance(func: F) -> F:
    """Log the wall time of each call to the render logger at DEBUG."""

    @functools.wraps(func)
    def timed(*args: Any, **kwargs: Any) -> Any:
        started = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed = time.perf_counter() - started
            get_render_logger().debug(f"{func.__name__!r} took {elapsed * 1000:.2f} ms")

    return timed  # type: ignore[return-value]
