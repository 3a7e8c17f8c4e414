"""Logging configuration utilities."""

import logging
import sys
from contextlib import contextmanager
from pathlib import PurePath
from typing import Iterator, Optional

import structlog
from structlog.contextvars import bound_contextvars

from deployinfo.core.config import Settings


def _stringify_paths(_, __, event_dict: dict) -> dict:
    """Render Path values (manifests, APKs, deploy info files) as plain strings."""
    for key, value in event_dict.items():
        if isinstance(value, PurePath):
            event_dict[key] = str(value)
    return event_dict


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """Configure structured logging."""

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.StackInfoRenderer(),
        structlog.dev.set_exc_info,
        structlog.processors.TimeStamper(fmt="iso"),
        _stringify_paths,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper())),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        # Module-level loggers must pick up reconfiguration.
        cache_logger_on_first_use=False,
    )


def configure_logging(settings: Settings) -> None:
    """Configure logging from DEPLOYINFO_LOG_LEVEL / DEPLOYINFO_LOG_FORMAT."""
    setup_logging(settings.log_level, settings.log_format)


@contextmanager
def deploy_context(project: Optional[str] = None, target: Optional[str] = None) -> Iterator[None]:
    """Bind project/target to every log line emitted inside the block."""
    fields = {}
    if project:
        fields["project"] = project
    if target:
        fields["target"] = target
    with bound_contextvars(**fields):
        yield
