"""Configuration loading.

Layers, later wins:
1. Built-in defaults
2. YAML config file
3. Environment variables (SCHEMAREFLECT__SECTION__KEY)
4. Direct kwargs

Layers are merged section by section, so ``SCHEMAREFLECT__REFLECT__ROOT_REF``
overrides one key of the YAML ``reflect:`` section and keeps the rest.
"""

from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, EnvSettingsSource, SettingsConfigDict

from schemareflect.config.models import LoggingConfig, ReflectSettings, SchemaReflectConfig
from schemareflect.core.errors import ConfigError


class _EnvLayout(BaseSettings):
    """Field layout the environment source resolves SCHEMAREFLECT__* names against."""

    model_config = SettingsConfigDict(
        env_prefix="SCHEMAREFLECT__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reflect: ReflectSettings = Field(default_factory=ReflectSettings)


def _load_yaml(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open() as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level YAML value must be a mapping")
    return data


def _env_values() -> dict[str, Any]:
    """Values set through SCHEMAREFLECT__* variables, nested by section."""
    return EnvSettingsSource(_EnvLayout)()


def _merge(base: Mapping[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = _merge(current, value)
        else:
            merged[key] = value
    return merged


def load_config(config_path: Path | None = None, **kwargs: Any) -> SchemaReflectConfig:
    """Load config: defaults < YAML file < env vars < kwargs.

    Args:
        config_path: Optional YAML file. Must exist when given.
        **kwargs: Section overrides, as dicts or model instances.

    Raises:
        ConfigError: On a missing file, invalid YAML syntax or validation errors.
    """
    data: dict[str, Any] = {}
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError.file_not_found(str(config_path))
        data = _load_yaml(config_path)

    data = _merge(_merge(data, _env_values()), kwargs)
    try:
        return SchemaReflectConfig.model_validate(data)
    except ValidationError as e:
        err = e.errors()[0]
        field = ".".join(str(loc) for loc in err["loc"])
        raise ConfigError.invalid_value(field, err.get("input"), err["msg"]) from e
