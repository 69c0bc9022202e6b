"""Core module exports."""

from schemareflect.core.cancellation import CancelToken
from schemareflect.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    ReflectError,
    SchemaReflectError,
    SkipProperty,
)
from schemareflect.core.logging import (
    configure_logging,
    get_logger,
    new_reflection_id,
    reflection_scope,
)

__all__ = [
    # Cancellation
    "CancelToken",
    # Errors
    "SchemaReflectError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "ReflectError",
    "SkipProperty",
    # Logging
    "configure_logging",
    "get_logger",
    "new_reflection_id",
    "reflection_scope",
]
