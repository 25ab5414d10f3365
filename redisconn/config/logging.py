"""structlog setup driven by :class:`LoggingConfig`."""

import logging
import sys

import structlog

from redisconn.config.models import LoggingConfig


def configure_logging(config: LoggingConfig) -> None:
    """Configure structlog rendering, level and output stream.

    Args:
        config: Logging configuration.
    """
    stream = sys.stdout if config.output == "stdout" else sys.stderr
    if config.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)  # type: ignore[assignment]

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.format_exc_info,
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(config.level)
        ),
        logger_factory=structlog.PrintLoggerFactory(file=stream),
        cache_logger_on_first_use=False,
    )
