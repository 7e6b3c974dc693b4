"""Structured logging setup for ejson on top of structlog.

``configure_logging`` installs either a sorted-key JSON-lines renderer or the
console renderer, filtered at the configured level. It is opt-in: ejson
modules only obtain loggers through ``get_logger`` and never configure
structlog on their own.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING, Any, TextIO

import structlog

from ejson.constants import DEFAULT_LOG_FORMAT, DEFAULT_LOG_LEVEL, LOG_FORMATS

if TYPE_CHECKING:
    from ejson.config.schema import LoggingSettings


def configure_logging(
    settings: LoggingSettings | None = None,
    *,
    stream: TextIO | None = None,
) -> None:
    """Configure structlog rendering and level filtering.

    Parameters
    ----------
    settings:
        ``[logging]`` settings, usually ``get_settings().logging``. ``None``
        selects the defaults (``WARNING``, console rendering).
    stream:
        Sink for rendered lines; defaults to ``sys.stderr``.
    """

    level_name = settings.level if settings is not None else DEFAULT_LOG_LEVEL
    log_format = settings.format if settings is not None else DEFAULT_LOG_FORMAT

    level = _parse_log_level(level_name)
    if log_format not in LOG_FORMATS:
        raise ValueError(f"unsupported log format {log_format!r}")

    renderer: Any
    if log_format == "json":
        renderer = structlog.processors.JSONRenderer(sort_keys=True, ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        logger_factory=structlog.PrintLoggerFactory(
            file=stream if stream is not None else sys.stderr
        ),
        cache_logger_on_first_use=False,
    )


def reset_logging() -> None:
    structlog.reset_defaults()


def get_logger(name: str) -> Any:
    return structlog.get_logger(name)


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


__all__ = ["configure_logging", "get_logger", "reset_logging"]
