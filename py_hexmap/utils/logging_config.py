"""structlog configuration shared by scripts and examples."""

import logging
import sys

import structlog


def configure_logging(settings=None) -> None:
    """
    Configure structlog on top of the standard library logger.

    Args:
        settings: ``Settings`` instance; its ``log_level`` and ``log_format``
            pick the threshold and renderer. Defaults to INFO / console.
    """
    level = getattr(settings, "log_level", "INFO").upper()
    log_format = getattr(settings, "log_format", "console")

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level, force=True)

    renderer = (
        structlog.processors.JSONRenderer()
        if log_format == "json"
        else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
