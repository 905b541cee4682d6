"""Structured logging setup.

The library only emits events through ``structlog.get_logger()``; the host
application decides how they are rendered by calling ``configure_logging``.
"""

import logging

import structlog


def configure_logging(*, json_output: bool = True, level: str = "INFO") -> None:
    """Configure structlog for production use.

    Args:
        json_output: If True, output JSON logs (for production)
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level.upper())
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
