"""structlog setup shared by every rankline module."""

import logging
import sys
from typing import Any

import structlog

REQUEST_KEYS = ("request_id", "path")


def _level(name: str) -> int:
    level = logging.getLevelNamesMapping().get(name.upper())
    if level is None:
        raise ValueError(f"Unknown log level {name!r}")
    return level


def configure_logging(
    level: str = "INFO",
    json_format: bool = True,
    service_name: str = "rankline",
) -> None:
    """
    Route structlog events to stdout.

    Args:
        level: Minimum level name, e.g. "DEBUG" or "WARNING"
        json_format: One JSON object per line; colored console output otherwise
        service_name: Bound as ``service`` on every event
    """
    numeric_level = _level(level)
    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=numeric_level)

    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if json_format:
        processors += [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(service=service_name)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)


def bind_request_context(request_id: str, **kwargs: Any) -> None:
    """Attach ``request_id`` (plus any extra keys) to later events in this context."""
    structlog.contextvars.bind_contextvars(request_id=request_id, **kwargs)


def clear_request_context() -> None:
    """Drop the request-scoped keys, keeping the bound service name."""
    structlog.contextvars.unbind_contextvars(*REQUEST_KEYS)
