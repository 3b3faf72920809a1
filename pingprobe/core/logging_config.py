"""Logging configuration for the ping service.

Configuration generation is kept apart from execution:

    - `get_logging_config`: Build the `logging.config.dictConfig` dictionary
      for the current settings.
    - `configure_structlog_wrapper`: Install structlog's processor chain on
      top of stdlib logging.
    - Context helpers from `structlog.contextvars`, used to attach the
      request ID to every "Ping failed" entry.
"""

from typing import Any

import structlog
from structlog.types import Processor

from pingprobe.config import Settings


# =============================================================================
# CONFIGURATION GENERATORS
# =============================================================================


def get_common_processors() -> list[Processor]:
    """Return the processors shared by structlog and foreign (stdlib) records.

    Returns:
        list[Processor]: Ordered list of structlog processors.
    """
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]


def get_logging_config(settings: Settings) -> dict[str, Any]:
    """Generate a dictionary for `logging.config.dictConfig`.

    Production and staging render JSON lines for log shippers; development
    renders colored console output.

    Note:
        Pure function, no global state is touched.

    Args:
        settings: Provides LOG_LEVEL, ENVIRONMENT and LOGGING_NOISY_MODULES.

    Returns:
        dict[str, Any]: Configuration dictionary compatible with dictConfig.
    """
    log_level = settings.LOG_LEVEL.upper()

    if settings.ENVIRONMENT in ("production", "staging"):
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=True)

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "()": "structlog.stdlib.ProcessorFormatter",
                "processor": renderer,
                "foreign_pre_chain": get_common_processors(),
            },
        },
        "handlers": {
            "console": {
                "level": log_level,
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
            },
        },
        "loggers": {
            "": {
                "handlers": ["console"],
                "level": log_level,
                "propagate": True,
            },
            **{
                lib: {"level": "WARNING", "propagate": False}
                for lib in settings.LOGGING_NOISY_MODULES
            },
        },
    }


def configure_structlog_wrapper() -> None:
    """Route structlog through stdlib logging and the shared processors."""
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *get_common_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


# =============================================================================
# LOGGER RETRIEVAL
# =============================================================================


def get_logger(name: str | None = None) -> Any:
    """Retrieve a structlog logger, named if `name` is given."""
    if name:
        return structlog.get_logger(name)
    return structlog.get_logger()


# =============================================================================
# CONTEXT VARIABLE EXPORTS
# =============================================================================

bind_contextvars = structlog.contextvars.bind_contextvars
clear_contextvars = structlog.contextvars.clear_contextvars
