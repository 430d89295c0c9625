"""Structured logging setup using structlog."""

import logging
import sys
from pathlib import Path
from typing import Any, TextIO

import structlog
from structlog.typing import FilteringBoundLogger

from portwatch.core.config import get_settings

_log_file_stream: TextIO | None = None


def _stderr_logger_factory(*args: Any) -> structlog.PrintLogger:
    # Looked up per logger so a replaced sys.stderr is honoured
    return structlog.PrintLogger(file=sys.stderr)


def setup_logging(
    level: str | None = None,
    fmt: str | None = None,
    log_file: Path | None = None,
) -> None:
    """Configure structlog for the CLI or the dashboard."""
    global _log_file_stream

    settings = get_settings()
    level = level or settings.log_level
    fmt = fmt or settings.log_format

    if _log_file_stream is not None:
        _log_file_stream.close()
        _log_file_stream = None

    logger_factory: Any = _stderr_logger_factory
    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        _log_file_stream = open(log_file, "a", encoding="utf-8")
        logger_factory = structlog.PrintLoggerFactory(file=_log_file_stream)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, level.upper(), logging.INFO)
        ),
        logger_factory=logger_factory,
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> FilteringBoundLogger:
    """Get a logger bound to a component name."""
    return structlog.get_logger(component=name)
