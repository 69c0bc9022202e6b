"""SchemaReflect error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Reflection (hooks, unsupported types, cancellation)
- 9xxx: Internal
"""

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Reflection (3xxx)
    REFLECT_HOOK_FAILED = 3001
    REFLECT_UNSUPPORTED_TYPE = 3002
    REFLECT_CANCELLED = 3003

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(eq=False)
class SchemaReflectError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    retryable: bool = False
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "retryable": self.retryable,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(SchemaReflectError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


def _render_path(path: Sequence[str]) -> str:
    return ".".join(path) or "<root>"


class ReflectError(SchemaReflectError):
    """Errors raised while a walker traverses a type graph.

    Every factory records the traversal path so callers can report which
    field or type triggered the failure.
    """

    @property
    def path(self) -> str:
        return str(self.details.get("path", ""))

    @classmethod
    def hook_failed(cls, path: Sequence[str], hook: str, reason: str) -> "ReflectError":
        where = _render_path(path)
        return cls(
            code=ErrorCode.REFLECT_HOOK_FAILED,
            message=f"{hook} hook failed at {where}: {reason}",
            details={"path": where, "hook": hook, "reason": reason},
        )

    @classmethod
    def unsupported_type(cls, path: Sequence[str], field: str, reason: str) -> "ReflectError":
        where = _render_path(path)
        return cls(
            code=ErrorCode.REFLECT_UNSUPPORTED_TYPE,
            message=f"Unsupported type for '{field}' at {where}: {reason}",
            details={"path": where, "field": field, "reason": reason},
        )

    @classmethod
    def cancelled(cls, path: Sequence[str]) -> "ReflectError":
        where = _render_path(path)
        return cls(
            code=ErrorCode.REFLECT_CANCELLED,
            message=f"Reflection cancelled at {where}",
            retryable=True,
            details={"path": where},
        )


class InternalError(SchemaReflectError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )


class SkipProperty(Exception):  # noqa: N818
    """Raised by a property hook to drop the property from its parent.

    Not a failure: the walker omits the property and carries on with its
    siblings.
    """
