"""
Logging Configuration

structlog setup for the report template registry. Modules obtain loggers
through ``get_logger`` so every event carries the registry context.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

from .config import Settings

APP_NAME = "report-template-registry"

# Emit SQL and driver chatter at INFO; kept at WARNING outside DEBUG
NOISY_LOGGERS = ("sqlalchemy.engine", "sqlalchemy.pool", "aiosqlite")


class RegistryContext:
    """Processor stamping events with the registry's version, environment and template home"""

    def __init__(self, settings: Settings):
        self.context = {
            "app": APP_NAME,
            "version": settings.APP_VERSION,
            "environment": settings.ENVIRONMENT,
            "template_home": str(settings.REPORT_TEMPLATE_HOME),
        }

    def __call__(self, logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
        # Values bound on the event itself take precedence
        for key, value in self.context.items():
            event_dict.setdefault(key, value)
        return event_dict


def build_processors(settings: Settings) -> list[Processor]:
    """Processor chain ending in the renderer selected by ``LOG_FORMAT``"""
    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        RegistryContext(settings),
    ]

    if settings.LOG_FORMAT == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))
    return processors


def setup_logging(settings: Settings) -> None:
    """
    Configure structured logging for the registry

    Args:
        settings: Supplies LOG_LEVEL, LOG_FORMAT, DEBUG and the registry context
    """
    level = getattr(logging, settings.LOG_LEVEL.upper())

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    logging.getLogger().setLevel(level)

    if not settings.DEBUG:
        for name in NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)

    structlog.configure(
        processors=build_processors(settings),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__, **initial_values: Any) -> Any:
    """
    Get a registry logger

    Args:
        name: Logger name (usually __name__)
        **initial_values: Context bound to every event of this logger

    Returns:
        structlog logger
    """
    return structlog.get_logger(name, **initial_values)
