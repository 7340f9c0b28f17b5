"""
Structured Logging Configuration.

JSON logs in production, console output in debug mode, optional
forwarding to Google Cloud Logging.
"""
import logging
import sys
import uuid
from typing import Any

import structlog
from google.cloud import logging as cloud_logging
from structlog.types import EventDict, Processor

from app.config import settings

# Customer personal data never leaves the process through logs
REDACTED_KEYS = frozenset({"identification_number", "email", "phone_number", "password"})


def add_app_context(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Add application name and version to every event."""
    event_dict["app_name"] = settings.app_name
    event_dict["app_version"] = settings.app_version
    return event_dict


def add_severity_level(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """
    Add severity level for Cloud Logging.

    Cloud Logging understands the upper-cased Python level names; anything
    else is reported as DEFAULT.
    """
    level = event_dict.get("level", "").upper()
    if level in ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"):
        event_dict["severity"] = level
    else:
        event_dict["severity"] = "DEFAULT"
    return event_dict


def redact_personal_data(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Mask customer personal data passed as log context."""
    for key in REDACTED_KEYS.intersection(event_dict):
        event_dict[key] = "***"
    return event_dict


def drop_color_message_key(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    """Remove the color_message key uvicorn adds to its records."""
    event_dict.pop("color_message", None)
    return event_dict


def configure_logging(enable_cloud_logging: bool = False) -> None:
    """
    Configure structured logging.

    Args:
        enable_cloud_logging: Also ship records to Google Cloud Logging

    Example:
        ```python
        configure_logging(enable_cloud_logging=settings.enable_cloud_logging)

        logger = get_logger(__name__)
        logger.info("Factura generated", transaction_id="abc123", filename="factura_1.xml")
        ```
    """
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, settings.log_level.upper()),
    )

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        add_app_context,
        add_severity_level,
        redact_personal_data,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        drop_color_message_key,
    ]

    if settings.debug:
        processors.append(structlog.dev.ConsoleRenderer())
    else:
        processors.append(structlog.processors.JSONRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    if enable_cloud_logging:
        try:
            client = cloud_logging.Client()
            client.setup_logging()
            logging.info("Cloud Logging configured")
        except Exception as e:
            logging.warning(f"Failed to configure Cloud Logging: {e}")


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    """
    Get structured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        BoundLogger: Structured logger instance
    """
    return structlog.get_logger(name)


class LoggerContextMiddleware:
    """
    ASGI middleware that binds a request id, path and method to all log
    records of a request and echoes the id in the x-request-id header.
    """

    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        request_id = str(uuid.uuid4())

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(
            request_id=request_id,
            path=scope.get("path"),
            method=scope.get("method"),
        )

        async def send_with_request_id(message):
            if message["type"] == "http.response.start":
                headers = list(message.get("headers", []))
                headers.append((b"x-request-id", request_id.encode()))
                message["headers"] = headers
            await send(message)

        await self.app(scope, receive, send_with_request_id)


def bind_context(**kwargs: Any) -> None:
    """
    Bind context variables to all subsequent log records of the current request.

    Example:
        ```python
        bind_context(admin_email=admin.email)
        ```
    """
    structlog.contextvars.bind_contextvars(**kwargs)
