"""
Logging Configuration

Structured logging using structlog for the Task API.

Credential material must never reach the log stream. Event keys listed in
SENSITIVE_KEYS are masked before rendering, so an accidental
``logger.info("...", api_key=key)`` only ever emits a short prefix.
"""

import logging
import sys
from typing import Any

import structlog
from structlog.types import EventDict, Processor

SENSITIVE_KEYS = frozenset({
    "api_key",
    "access_token",
    "token",
    "password",
    "password_hash",
    "secret_key",
    "authorization",
})

# Characters of a credential kept visible for correlation
VISIBLE_PREFIX = 4


def add_app_context(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application context to log events"""
    event_dict["app"] = "task-api"
    return event_dict


def mask_credential(value: Any) -> str:
    """Reduce a credential to a short, non-reversible prefix for logging."""
    text = str(value)
    if len(text) <= VISIBLE_PREFIX * 2:
        return "***"
    return f"{text[:VISIBLE_PREFIX]}***"


def redact_sensitive_fields(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask credential-bearing keys; hashes and passwords are dropped entirely."""
    for key in list(event_dict):
        if key.lower() not in SENSITIVE_KEYS:
            continue
        if key.lower() in ("password", "password_hash", "secret_key"):
            event_dict[key] = "***"
        else:
            event_dict[key] = mask_credential(event_dict[key])
    return event_dict


def setup_logging(log_level: str = "INFO", log_format: str = "json") -> None:
    """
    Configure structured logging for the application

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_format: Output format (json or text)
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    # SQLAlchemy echoes bound parameters at INFO; keep it quiet unless debugging
    if log_level.upper() != "DEBUG":
        logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        redact_sensitive_fields,
        add_app_context,
    ]

    if log_format == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str = __name__) -> Any:
    """
    Get a configured logger instance

    Args:
        name: Logger name (usually __name__)

    Returns:
        Configured structlog logger
    """
    return structlog.get_logger(name)
