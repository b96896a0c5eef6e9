"""
structlog setup.

Console rendering for local runs, one JSON object per line otherwise.
Every event carries the service name and version; request and tenant
ids are merged in from context variables bound by the HTTP middleware.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from billing.config.settings import get_settings


def _add_service(_: Any, __: str, event_dict: EventDict) -> EventDict:
    settings = get_settings()
    event_dict.setdefault("service", settings.app_name)
    event_dict.setdefault("version", settings.app_version)
    return event_dict


def _drop_none(_: Any, __: str, event_dict: EventDict) -> EventDict:
    return {k: v for k, v in event_dict.items() if v is not None}


def configure_logging() -> None:
    """Route structlog through stdlib logging at the configured level."""
    log_settings = get_settings().logging

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service,
        _drop_none,
    ]
    if log_settings.format == "json":
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_settings.level),
        force=True,
    )
    for name in log_settings.quiet_loggers:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)
