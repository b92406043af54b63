"""Structured logging setup for robust_query.

The package only emits events through `structlog.get_logger(__name__)`; it
never configures logging on import. Hosts that already configure structlog
need nothing from this module. Hosts that don't can call
`configure_logging()` once at startup to get retry events rendered on
stdout, as JSON in production and as console lines otherwise.

Only the `robust_query` logger hierarchy is touched: handlers owned by the
host (root logger included) are left alone.
"""

import logging
import sys
from typing import Optional

import structlog
from structlog.types import EventDict, WrappedLogger

from robust_query.config import Settings
from robust_query.config import settings as default_settings

PACKAGE_LOGGER = "robust_query"
_HANDLER_NAME = "robust_query.stdout"


def add_package_context(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Tag events with the emitting package."""
    event_dict.setdefault("package", PACKAGE_LOGGER)
    return event_dict


def build_processors(is_production: bool) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        add_package_context,
    ]
    if is_production:
        processors.append(structlog.processors.format_exc_info)
    return processors


def configure_logging(
    log_level: Optional[str] = None,
    environment: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> logging.Logger:
    """Route robust_query events to stdout through structlog.

    Args:
        log_level: Level for the package logger (defaults to LOG_LEVEL)
        environment: "production" selects JSON output (defaults to ENVIRONMENT)
        settings: Settings to read defaults from (defaults to the global instance)

    Returns:
        The configured `robust_query` stdlib logger

    Per-attempt events are emitted at DEBUG; set LOG_LEVEL=DEBUG to trace
    every retry of a query. Calling this again replaces the handler it
    installed earlier rather than adding a second one.
    """
    settings = settings or default_settings
    log_level = log_level or settings.LOG_LEVEL
    environment = environment or settings.ENVIRONMENT

    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO
    is_production = environment.lower() == "production"

    processors = build_processors(is_production)
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer()
        if is_production
        else structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())
    )

    structlog.configure(
        processors=processors + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=processors)
    )

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    for existing in list(package_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            package_logger.removeHandler(existing)
    package_logger.addHandler(handler)
    package_logger.setLevel(level)
    # Our handler renders the events; don't print them twice via the host's root handlers
    package_logger.propagate = False

    structlog.get_logger(__name__).debug(
        "Logging configured",
        log_level=log_level,
        environment=environment,
        renderer="json" if is_production else "console",
    )
    return package_logger
