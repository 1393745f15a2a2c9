"""Structured logging setup using structlog on top of stdlib logging."""

from __future__ import annotations

import logging
import sys
from typing import Any, Literal

import structlog

ROOT_LOGGER = "libpixel"

_PROCESSORS: list[Any] = [
    structlog.stdlib.filter_by_level,
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso", utc=True),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.format_exc_info,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
]

# Silent until the application configures logging
logging.getLogger(ROOT_LOGGER).addHandler(logging.NullHandler())


def setup_logging(level: str = "WARNING", fmt: Literal["console", "json"] = "console") -> None:
    """
    Attach a stderr handler to the libpixel logger.

    Calling it again replaces the handler installed by the previous call.

    Args:
        level: Minimum log level name (e.g. "DEBUG", "INFO")
        fmt: "console" for human-readable output, "json" for one JSON object per line
    """
    renderer: Any
    if fmt == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    logger = logging.getLogger(ROOT_LOGGER)
    for existing in logger.handlers[:]:
        if not isinstance(existing, logging.NullHandler):
            logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper(), logging.WARNING))
    logger.propagate = False


def get_logger(name: str) -> Any:
    """Get a structlog logger backed by the stdlib logger ``name``."""
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=_PROCESSORS,
        wrapper_class=structlog.stdlib.BoundLogger,
    )
