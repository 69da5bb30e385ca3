"""Logging configuration for promtext.

The CLI logs through structlog while the exposition parser logs through
stdlib ``logging`` so library users are not forced into structlog. Both
end up on one stderr handler whose ``ProcessorFormatter`` renders every
record, structlog event or plain stdlib record, in the configured format.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import Processor

from promtext.config import get_settings

LOG_STREAM_HANDLER_NAME = "promtext"


def shared_processors() -> list[Processor]:
    """Processors applied to structlog events and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]


def build_renderer(log_format: str) -> Processor:
    """Pick the final renderer for a ``log_format`` setting."""
    if log_format == "json":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(
        colors=sys.stderr.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def setup_logging() -> None:
    """Configure structlog and route the root logger through it."""
    settings = get_settings()
    pre_chain = shared_processors()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=pre_chain,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            build_renderer(settings.log_format),
        ],
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(LOG_STREAM_HANDLER_NAME)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
    root.addHandler(handler)
    root.setLevel(getattr(logging, settings.log_level))


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


def log_error(
    logger: structlog.stdlib.BoundLogger,
    error: Exception,
    operation: str,
    **kwargs: Any,
) -> None:
    """Log a failed CLI operation with the error type and message."""
    logger.error(
        "operation_failed",
        operation=operation,
        error_type=type(error).__name__,
        error_message=str(error),
        **kwargs,
    )
