"""Structured logging configuration for the client and the CLI."""

import logging
import sys
from typing import TextIO

import structlog


def configure_logging(
    level: int = logging.INFO,
    output: TextIO = sys.stderr,
    json_format: bool = True,
) -> None:
    """Configure structlog for CLI runs.

    The library itself never configures logging; it only emits events
    through ``structlog.get_logger()``. Applications call this once.

    Args:
        level: Minimum level to emit (default: INFO).
        output: Stream the rendered events go to (default: stderr).
        json_format: Render JSON lines instead of colored console output.
    """
    renderer: structlog.types.Processor
    if json_format:
        renderer = structlog.processors.JSONRenderer(sort_keys=True)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=output.isatty())

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=output),
        cache_logger_on_first_use=False,
    )

    # httpx logs every request through the standard library at INFO
    logging.basicConfig(format="%(message)s", stream=output, level=level)
    logging.getLogger("httpx").setLevel(max(level, logging.WARNING))


def get_logger(component: str | None = None) -> structlog.stdlib.BoundLogger:
    """Get a logger, bound to a component when one is given.

    Args:
        component: Value of the ``component`` field, e.g. "http".

    Returns:
        Bound logger instance.
    """
    logger: structlog.stdlib.BoundLogger = structlog.get_logger()
    if component is not None:
        logger = logger.bind(component=component)
    return logger


def bind_run_context(run_id: str) -> None:
    """Attach a run identifier to every subsequent log event."""
    structlog.contextvars.bind_contextvars(run_id=run_id)


def clear_run_context() -> None:
    structlog.contextvars.unbind_contextvars("run_id")
