"""
Shared logging configuration for the token service.

Correlation data (request id, token subject) is carried in structlog's
context variables and merged into every event.
"""

import sys
import structlog
import logging
import uuid
from typing import Any, Dict, Optional

from structlog.contextvars import (
    bind_contextvars, clear_contextvars, get_contextvars, merge_contextvars, unbind_contextvars,
)


def configure_logging(service_name: str, log_level: str = "info") -> None:
    """Configure JSON structured logging on top of the stdlib logging backend."""

    structlog.configure(
        processors=[
            merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            add_service_context,
            structlog.processors.JSONRenderer()
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )
    structlog.get_logger(service_name).debug("Logging configured", log_level=log_level)


def add_service_context(logger: Any, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    # "tokens.decoder" -> service "tokens"
    logger_name = event_dict.get("logger", "")
    if "." in logger_name:
        event_dict["service"] = logger_name.split(".")[0]

    return event_dict


def set_request_id(request_id: Optional[str] = None) -> str:
    """Bind a request id, generating one when none is given."""
    if request_id is None:
        request_id = str(uuid.uuid4())
    bind_contextvars(request_id=request_id)
    return request_id


def set_subject(subject: Optional[str]) -> None:
    """Bind the token subject; ``None`` removes any previously bound subject."""
    if subject:
        bind_contextvars(subject=subject)
    else:
        unbind_contextvars("subject")


def current_context() -> Dict[str, Any]:
    return get_contextvars()


def clear_context() -> None:
    clear_contextvars()


def get_logger(name: str) -> structlog.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)
