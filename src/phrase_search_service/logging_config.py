"""Structured logging configuration using structlog.

Every module logs through ``get_logger(__name__)`` and emits dot-namespaced
events with keyword context, so a single request can be followed from the
endpoint through synonym lookups to link fanout. The request middleware binds
``request_id`` and ``path`` into structlog context variables, and every event
logged while that request is handled carries them.

Usage:
    from phrase_search_service.logging_config import configure_logging, get_logger

    # In main.py startup
    configure_logging()

    # In application code
    logger = get_logger(__name__)
    logger.info("variations.generated", phrase="fast car", count=4)
"""

import logging
import sys
from typing import Any

import structlog


def configure_logging(log_level: str = "INFO", json_logs: bool = False) -> None:
    """Configure structured logging for the application.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        json_logs: If True, output JSON logs for production. If False, use
                   human-readable console output for development.

    Processor Pipeline:
    1. Merge request context (request_id, path)
    2. Add log level
    3. Add logger name
    4. Add timestamp (ISO8601 UTC)
    5. Add callsite info (file, function, line)
    6. Format as console or JSON
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper(), logging.INFO),
    )

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ]
        ),
    ]

    if json_logs:
        # JSONRenderer needs exceptions pre-formatted
        processors.append(structlog.processors.format_exc_info)
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(
            structlog.dev.ConsoleRenderer(
                colors=sys.stdout.isatty(),
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


def get_logger(name: str) -> Any:
    """Get a structured logger instance.

    Args:
        name: Logger name (typically __name__ from calling module)

    Returns:
        Configured structlog logger (BoundLogger)

    Note: Returns Any to avoid complex structlog type annotations.
    The actual type is structlog.stdlib.BoundLogger.
    """
    return structlog.get_logger(name)


def bind_request_context(request_id: str, path: str) -> None:
    """Attach request identifiers to every event logged by the current task."""
    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(request_id=request_id, path=path)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()
