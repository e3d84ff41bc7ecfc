"""
Structured logging configuration for generatebp.

structlog renders each event and hands it to the standard library logger, whose
RichHandler writes to whatever stderr is current at emit time. Output is
human-readable on a terminal and JSON otherwise.
"""

from __future__ import annotations

import logging
import sys
from typing import TYPE_CHECKING

import structlog
from rich.console import Console
from rich.logging import RichHandler

if TYPE_CHECKING:
    from .config import Config


class _StderrHandler(logging.StreamHandler):
    """Stream handler writing to whatever sys.stderr is at emit time."""

    def __init__(self, level: int = logging.NOTSET) -> None:
        logging.Handler.__init__(self, level)

    @property
    def stream(self):  # type: ignore[override]
        return sys.stderr


def _rich_handler(log_level: str) -> logging.Handler:
    # Console(stderr=True) looks up sys.stderr on every write
    return RichHandler(
        console=Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
        tracebacks_show_locals=log_level == "DEBUG",
    )


def setup_logging(config: Config | None = None) -> None:
    """Configure structured logging for the application.

    Skip decisions (dropped edges, defaulted SDK bounds) are logged at DEBUG,
    so a run is silent on the happy path unless ``config.debug`` is set.

    Args:
        config: Optional configuration. If None, uses INFO level.
    """
    log_level = config.effective_log_level if config else "INFO"
    level = getattr(logging, log_level, logging.INFO)
    interactive = sys.stderr.isatty()

    if interactive:
        handler = _rich_handler(log_level)
    else:
        handler = _StderrHandler()

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
    ]

    if interactive:
        # RichHandler prints time and level itself
        processors.append(structlog.dev.ConsoleRenderer(colors=False))
    else:
        processors += [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured bound logger
    """
    return structlog.get_logger(name)


def bind_context(**kwargs: object) -> None:
    """Bind context variables to all subsequent log entries in this context.

    Args:
        **kwargs: Context key-value pairs to bind
    """
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Clear all bound context variables."""
    structlog.contextvars.clear_contextvars()
