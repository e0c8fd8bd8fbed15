"""Logging setup and configuration using structlog.

The terminal belongs to the dashboard while it runs, so log output goes to
stderr or to a file, never to stdout.
"""

from __future__ import annotations

import json
import logging
import sys
import time
from contextvars import ContextVar
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any

import structlog
from textual.logging import TextualHandler

from dashkit.config.settings import DashboardSettings

_LEVEL_MAP = {
    "critical": logging.CRITICAL,
    "error": logging.ERROR,
    "warning": logging.WARNING,
    "info": logging.INFO,
    "debug": logging.DEBUG,
}

MAX_STRING_LENGTH = 2000

_dashboard_context: ContextVar[dict[str, Any] | None] = ContextVar(
    "dashboard_context", default=None
)


def _json_default(obj: Any) -> Any:
    """Default handler for JSON serialization of special types."""
    if isinstance(obj, datetime):
        return obj.isoformat()
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, set):
        return sorted(obj, key=str)
    return str(obj)


def _truncate_long_strings(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Keep rendered provider output from flooding the log."""
    for key, value in event_dict.items():
        if isinstance(value, str) and len(value) > MAX_STRING_LENGTH:
            event_dict[key] = value[:MAX_STRING_LENGTH] + "...<truncated>"
    return event_dict


def _add_dashboard_context(
    logger: logging.Logger,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Structlog processor to inject the bound dashboard context."""
    ctx = _dashboard_context.get() or {}
    for key, value in ctx.items():
        event_dict.setdefault(key, value)
    return event_dict


def bind_dashboard_context(**values: Any) -> None:
    """Attach key/value pairs to every subsequent log line."""
    ctx = dict(_dashboard_context.get() or {})
    ctx.update(values)
    _dashboard_context.set(ctx)


def clear_dashboard_context() -> None:
    """Forget values bound with ``bind_dashboard_context``."""
    _dashboard_context.set({})


def _resolve_level(level: str) -> int:
    return _LEVEL_MAP.get(level.lower(), logging.INFO)


def configure_logging(
    *,
    level: str = "info",
    output_format: str = "text",
    color: bool = True,
    log_file: Path | None = None,
    to_textual: bool = False,
) -> None:
    """Configure structlog + stdlib logging.

    Parameters
    ----------
    level: str
            Minimum level (debug, info, warning, error, critical).
    output_format: str
            "text" for console-friendly rendering, "json" for machine parsing.
    color: bool
            Enable colored output when using text mode. Ignored for files.
    log_file: Optional[Path]
            When given, logs go to this file instead of stderr.
    to_textual: bool
            Without a log file, send records to Textual's devtools log
            instead of stderr so a running dashboard isn't painted over.
    """
    log_level = _resolve_level(level)
    is_json = output_format.lower() == "json"

    if is_json:
        renderer = structlog.processors.JSONRenderer(
            serializer=json.dumps,
            default=_json_default,
            sort_keys=True,
        )
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=color and log_file is None and not to_textual
        )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            _add_dashboard_context,  # type: ignore[list-item]
            _truncate_long_strings,  # type: ignore[list-item]
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler: logging.Handler
    if log_file:
        handler = logging.FileHandler(log_file, encoding="utf-8")
    elif to_textual:
        handler = TextualHandler()
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # Textual logs through its own devtools channel; keep its stdlib noise down
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("transitions").setLevel(logging.WARNING)


def configure_from_settings(
    settings: DashboardSettings, *, color: bool = True, to_textual: bool = False
) -> None:
    """Configure logging using DashboardSettings values."""
    configure_logging(
        level=settings.log_level,
        output_format=settings.log_format,
        color=color,
        log_file=settings.log_file,
        to_textual=to_textual,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a configured structlog logger."""
    return structlog.get_logger(name) if name else structlog.get_logger()


class timed_operation:
    """Context manager for timing operations and logging duration_ms.

    Usage:
        with timed_operation("frame.compose", logger=log, log_level="debug"):
            frame = dispatcher.compose()
    """

    def __init__(
        self,
        operation_name: str,
        logger: structlog.stdlib.BoundLogger | None = None,
        log_level: str = "info",
        **extra_context: Any,
    ) -> None:
        self.operation_name = operation_name
        self.logger = logger or get_logger()
        self.log_level = log_level
        self.extra_context = extra_context
        self._start_time: float = 0.0

    def __enter__(self) -> timed_operation:
        self._start_time = time.perf_counter()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        duration_ms = (time.perf_counter() - self._start_time) * 1000
        log_method = getattr(self.logger, self.log_level)
        status = "failed" if exc_type else "completed"
        log_method(
            self.operation_name,
            duration_ms=round(duration_ms, 2),
            status=status,
            **self.extra_context,
        )

    @property
    def elapsed_ms(self) -> float:
        """Get elapsed time in milliseconds (useful during operation)."""
        return (time.perf_counter() - self._start_time) * 1000
