"""Structured logging for the service.

Every record, whether emitted through structlog or by a stdlib logger such as
uvicorn's, leaves the process as one JSON object per line on stdout. Records
written while a request is in flight carry that request's correlation id.
"""

import logging
import sys
from contextvars import ContextVar
from typing import TextIO

import structlog

from service_skeleton.platform.settings import LogLevel

# Set by the correlation middleware for the lifetime of a request
correlation_id_ctx: ContextVar[str | None] = ContextVar("correlation_id", default=None)

# Loggers held above the configured level; request logging is our middleware's job
QUIET_LOGGERS = {"uvicorn.access": logging.WARNING}


def add_correlation_id(
    logger: structlog.types.WrappedLogger,
    method_name: str,
    event_dict: structlog.types.EventDict,
) -> structlog.types.EventDict:
    """Stamp the in-flight request's correlation id onto the record."""
    correlation_id = correlation_id_ctx.get()
    if correlation_id:
        event_dict["correlation_id"] = correlation_id
    return event_dict


def _pre_chain(console: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_correlation_id,
        structlog.processors.UnicodeDecoder(),
    ]
    if not console:
        # the console renderer prints tracebacks itself
        processors.append(structlog.processors.format_exc_info)
    return processors


def _renderer(console: bool) -> structlog.types.Processor:
    if console:
        return structlog.dev.ConsoleRenderer(colors=True)
    return structlog.processors.JSONRenderer(default=str)


def configure_logging(
    level: LogLevel,
    console: bool = False,
    stream: TextIO | None = None,
) -> None:
    """Route structlog and stdlib records through one handler.

    Replaces any handlers already on the root logger.

    Args:
        level: Minimum level written
        console: Human-readable output for local runs instead of JSON lines
        stream: Destination, stdout when omitted
    """
    pre_chain = _pre_chain(console)

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                _renderer(console),
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(level.logging_level)

    for name, floor in QUIET_LOGGERS.items():
        logging.getLogger(name).setLevel(max(floor, level.logging_level))


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """Return a structlog logger named after the calling module."""
    return structlog.get_logger(name)
