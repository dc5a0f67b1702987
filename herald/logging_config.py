"""Structured logging for herald.

Every herald module logs through ``get_logger(__name__)``: structlog
loggers backed by the stdlib ``herald`` logger hierarchy, with event
names such as ``listener_resolved`` or ``event_emitting`` and keyword
context (``event_name``, ``reference``, ``namespace``). Nothing is
configured on import; an application that wants herald's records calls
``configure_logging`` once at startup.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import structlog

LOGGER_NAME = "herald"


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


def configure_logging(
    level: str = "INFO",
    json_output: bool = False,
    log_file: Path | None = None,
) -> logging.Handler:
    """Route herald's structured logs to stderr or a file.

    Calling it again replaces (and closes) the handler installed by the
    previous call.

    Args:
        level: Log level for the ``herald`` logger (DEBUG shows every
            registration and emission)
        json_output: Render JSON lines instead of console output
        log_file: Optional file to append to instead of stderr

    Returns:
        The handler attached to the ``herald`` logger
    """
    root = logging.getLogger(LOGGER_NAME)
    _close_handlers(root)

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handler: logging.Handler = logging.FileHandler(log_file, encoding="utf-8")
    else:
        handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root.addHandler(handler)
    root.setLevel(getattr(logging, level.upper()))
    root.propagate = False

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=log_file is None and sys.stderr.isatty())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    return handler


def reset_logging() -> None:
    """Undo ``configure_logging``: close herald's handler and restore structlog defaults."""
    root = logging.getLogger(LOGGER_NAME)
    _close_handlers(root)
    root.setLevel(logging.NOTSET)
    root.propagate = True
    structlog.reset_defaults()


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger (``name`` is typically ``__name__``)."""
    return structlog.get_logger(name)
