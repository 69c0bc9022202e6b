"""Config module exports."""

from schemareflect.config.loader import load_config
from schemareflect.config.models import (
    LoggingConfig,
    ReflectSettings,
    SchemaReflectConfig,
)

__all__ = [
    "load_config",
    "LoggingConfig",
    "ReflectSettings",
    "SchemaReflectConfig",
]
