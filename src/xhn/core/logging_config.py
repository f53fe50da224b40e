"""
Structured Logging Configuration

Every module logs through structlog with event-style keys. Exchange context
(the id of the requested affordance and the response code being rendered) is
bound in context variables by LogContext, so each event logged while a request
is handled or a document is assembled carries it without passing it around.
"""

import logging
import sys
from typing import Any

import structlog
from pythonjsonlogger import jsonlogger


def configure_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """
    Route structlog events through the standard logging module.

    Bound exchange context is merged into every event first. With json_logs
    the stdlib handler emits one JSON object per line, otherwise a console
    rendering meant for development.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_logs: Use JSON formatter for machine-readable logs
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    if json_logs:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(
            jsonlogger.JsonFormatter("%(asctime)s %(levelname)s %(name)s %(message)s")
        )
        logging.basicConfig(level=log_level, handlers=[handler])
    else:
        logging.basicConfig(
            level=log_level,
            format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            stream=sys.stdout,
        )

    renderer = structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            renderer,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.BoundLogger:
    """Structured logger for a module (pass __name__)."""
    return structlog.get_logger(name)


class LogContext:
    """
    Bind exchange fields to every event logged inside the block.

    Fields whose value is None are not bound, so an exchange without an
    incoming request does not log ``request=None``. On exit only the keys
    this block bound are unbound; other keys bound by an enclosing block
    survive.

    Example:
        with LogContext(request="create-user", response="201"):
            logger.info("document_rendered")  # carries request and response
    """

    def __init__(self, **fields: Any) -> None:
        self.fields = {key: value for key, value in fields.items() if value is not None}

    def __enter__(self) -> "LogContext":
        structlog.contextvars.bind_contextvars(**self.fields)
        return self

    def __exit__(self, *args: Any) -> None:
        structlog.contextvars.unbind_contextvars(*self.fields)
