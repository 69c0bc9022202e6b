"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (SCHEMAREFLECT__SECTION__KEY)
3. YAML config file passed to load_config()
4. Built-in defaults (this file)

Environment Variable Format:
    SCHEMAREFLECT__<SECTION>__<KEY>=<VALUE>

Examples:
    SCHEMAREFLECT__LOGGING__LEVEL=DEBUG
    SCHEMAREFLECT__REFLECT__DEFINITIONS_PREFIX=#/components/schemas/
    SCHEMAREFLECT__REFLECT__INLINE_REFS=true
"""

from typing import Literal

from pydantic import BaseModel, Field, field_validator

from schemareflect.config.constants import DEFAULT_DEFINITIONS_PREFIX, DEFAULT_PROPERTY_NAME_TAG

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


class LoggingConfig(BaseModel):
    """Rendering of reflection events, applied by configure_logging().

    Env vars:
        SCHEMAREFLECT__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        SCHEMAREFLECT__LOGGING__FORMAT: json or console
    """

    level: LogLevel = Field(
        default="INFO",
        description="Minimum level. DEBUG logs every definition and cycle decision.",
    )
    format: Literal["json", "console"] = "console"
    destination: Literal["stderr", "stdout"] = "stderr"


class ReflectSettings(BaseModel):
    """Scalar reflection defaults, seeded into ReflectContextBuilder.from_settings().

    Hooks and callbacks are code, so they are not loadable from settings.

    Env vars:
        SCHEMAREFLECT__REFLECT__DEFINITIONS_PREFIX: Reference container path
        SCHEMAREFLECT__REFLECT__PROPERTY_NAME_TAG: Primary naming tag
        SCHEMAREFLECT__REFLECT__INLINE_REFS: Inline named shapes everywhere
    """

    definitions_prefix: str = Field(
        default=DEFAULT_DEFINITIONS_PREFIX,
        description="Location prefix of named schemas, e.g. #/components/schemas/.",
    )
    property_name_tag: str = Field(
        default=DEFAULT_PROPERTY_NAME_TAG,
        description="Field tag used for property names.",
    )
    additional_property_name_tags: list[str] = Field(
        default_factory=list,
        description="Fallback tags, consulted in order when the primary tag is absent.",
    )
    strip_definition_name_prefixes: list[str] = Field(
        default_factory=list,
        description="First matching prefix is removed from default definition names.",
    )
    inline_refs: bool = False
    root_nullable: bool = False
    root_ref: bool = False
    process_without_tags: bool = False
    skip_embedded_maps_slices: bool = False
    skip_unsupported_properties: bool = False
    envelop_nullability: bool = False
    unnamed_field_with_tag: bool = False
    skip_non_constraints: bool = False

    @field_validator("property_name_tag")
    @classmethod
    def validate_tag(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Property name tag must not be empty")
        return v


class SchemaReflectConfig(BaseModel):
    """Root configuration for SchemaReflect.

    All settings can be configured via:
    1. Environment variables: SCHEMAREFLECT__SECTION__KEY
    2. A YAML config file
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    reflect: ReflectSettings = Field(default_factory=ReflectSettings)
