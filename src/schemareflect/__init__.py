"""SchemaReflect - configurable, cycle-safe core for type-to-schema reflection."""

from schemareflect.core.cancellation import CancelToken
from schemareflect.core.errors import ReflectError, SchemaReflectError, SkipProperty
from schemareflect.reflect import (
    FieldInfo,
    Ref,
    ReflectConfig,
    ReflectContext,
    ReflectContextBuilder,
    Schema,
    TypeIdentity,
    default_definition_name,
)

__version__ = "0.1.0"

__all__ = [
    "CancelToken",
    "FieldInfo",
    "Ref",
    "ReflectConfig",
    "ReflectContext",
    "ReflectContextBuilder",
    "ReflectError",
    "Schema",
    "SchemaReflectError",
    "SkipProperty",
    "TypeIdentity",
    "default_definition_name",
    "__version__",
]
