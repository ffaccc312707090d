"""
Logging configuration for metric lines.

Provides a single entry point for configuring structured logging and a
``get_logger`` accessor used by the producer to reach its sink.

Configuration is read from arguments or, when omitted, from settings:
- METRIC_PRODUCER_LOG_LEVEL: DEBUG | INFO | WARNING | ERROR (default: INFO)
- METRIC_PRODUCER_LOG_FORMAT: json | console (default: console)

Usage:
    # Configure at application startup
    from metric_producer.logging import configure_logging
    configure_logging()

    # Or with explicit settings
    configure_logging(level="DEBUG", format="json")
"""

import logging
import sys
from typing import Any, Literal

import structlog
from structlog.types import Processor

from metric_producer.config import get_settings

# Track if logging has been configured
_configured = False


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None,
    format: Literal["json", "console"] | None = None,
    force: bool = False,
) -> None:
    """
    Configure structured logging for the application.

    Should be called once at application startup.
    Subsequent calls are no-ops unless force=True.

    Args:
        level: Log level (overrides METRIC_PRODUCER_LOG_LEVEL)
        format: Output format (overrides METRIC_PRODUCER_LOG_FORMAT)
        force: Reconfigure even if already configured

    Raises:
        ValueError: If the level is not a known logging level
    """
    global _configured

    if _configured and not force:
        return

    settings = get_settings()
    log_level = (level or settings.log_level).upper()
    log_format = (format or settings.log_format).lower()

    level_num = logging.getLevelName(log_level)
    if not isinstance(level_num, int):
        raise ValueError(f"Unknown log level: {log_level!r}")

    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        # UTC ISO-8601 timestamp
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.format_exc_info,
        structlog.processors.StackInfoRenderer(),
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stderr.isatty(),
                exception_formatter=structlog.dev.plain_traceback,
            )
        )

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # Configure stdlib logging to match
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=level_num,
        force=True,
    )
    logging.getLogger(settings.logger_name).setLevel(level_num)

    _configured = True


def get_logger(name: str | None = None) -> Any:
    """
    Get a structured logger.

    Args:
        name: Logger name (typically __name__)

    Returns:
        structlog logger bound to ``name``
    """
    return structlog.get_logger(name)


def is_debug_enabled() -> bool:
    """Check if DEBUG level logging is enabled."""
    return logging.getLogger(get_settings().logger_name).isEnabledFor(logging.DEBUG)


def is_configured() -> bool:
    """Check if logging has been configured."""
    return _configured
