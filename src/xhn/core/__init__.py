"""Core utilities and infrastructure."""

from .config import Settings, get_settings
from .validate import (
    ValidationError,
    ValidationResult,
    RequestRegistration,
    ResponseRegistration,
    ApiValidator,
    validate_api,
)
from .logging_config import configure_logging, get_logger, LogContext
from .json import (
    loads_json,
    safe_json_dumps,
    JSONParseError,
    validate_json_size,
    validate_json_depth,
)
from .tracing import init_tracer, get_tracer, reset_tracer, trace_operation


def create_container(settings: Settings | None = None):
    """Create dependency injection container (lazy import to avoid circular deps)."""
    from .container import create_container as _create_container

    return _create_container(settings)


__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Validation
    "ValidationError",
    "ValidationResult",
    "RequestRegistration",
    "ResponseRegistration",
    "ApiValidator",
    "validate_api",
    # Logging
    "configure_logging",
    "get_logger",
    "LogContext",
    # JSON
    "loads_json",
    "safe_json_dumps",
    "JSONParseError",
    "validate_json_size",
    "validate_json_depth",
    # Tracing
    "init_tracer",
    "get_tracer",
    "reset_tracer",
    "trace_operation",
    # DI
    "create_container",
]
