"""
Logging Configuration for the Order Analytics Service

structlog events are rendered by one stdlib handler on stdout, so records from
uvicorn and SQLAlchemy share the format of our own log lines.
"""

import logging
import sys
from typing import List, Optional

import structlog
from structlog.typing import Processor

from order_analytics.config.settings import get_settings

# Third-party loggers routed through our handler
_ADOPTED_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")

# Chatty at INFO; only surfaced when the service itself logs at DEBUG
_QUIET_LOGGERS = ("sqlalchemy.engine", "aiosqlite", "asyncio")


def _shared_processors() -> List[Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def _renderer(log_format: str) -> Processor:
    if log_format == "json":
        return structlog.processors.JSONRenderer(ensure_ascii=False)
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(
    log_level: Optional[str] = None,
    log_format: Optional[str] = None,
) -> None:
    """
    Configure structlog and the stdlib root logger.

    Args:
        log_level: Override of LOG_LEVEL (DEBUG, INFO, WARNING, ERROR)
        log_format: Override of LOG_FORMAT ("json" or "text")
    """
    settings = get_settings()
    level_name = (log_level or settings.monitoring.log_level).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        level = logging.INFO
    log_format = log_format or settings.monitoring.log_format

    shared = _shared_processors()
    structlog.configure(
        processors=shared + [structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=_renderer(log_format),
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(level)

    for name in _ADOPTED_LOGGERS:
        adopted = logging.getLogger(name)
        adopted.handlers = [handler]
        adopted.propagate = False
        adopted.setLevel(level)

    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(level if level <= logging.DEBUG else logging.WARNING)

    structlog.get_logger(__name__).info(
        "Logging configured",
        level=level_name,
        format=log_format,
        environment=settings.app_env,
    )


def get_logger(name: str, **initial_values) -> structlog.stdlib.BoundLogger:
    """Logger for a module, optionally pre-bound with context values."""
    logger = structlog.get_logger(name)
    return logger.bind(**initial_values) if initial_values else logger
