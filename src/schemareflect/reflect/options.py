"""Immutable reflection configuration.

A ``ReflectConfig`` is produced by ``ReflectContextBuilder`` before traversal
starts and is read-only from then on: hooks and walkers cannot reassign its
fields.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemareflect.config.constants import DEFAULT_DEFINITIONS_PREFIX, DEFAULT_PROPERTY_NAME_TAG
from schemareflect.reflect.hooks import NullabilityHookChain, PropertyHookChain, TypeHookChain
from schemareflect.reflect.schema import Schema


class ReflectConfig(BaseModel):
    """Configuration for one reflection request."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    # Custom definition naming: (type, default_name) -> name.
    def_name: Callable[[Any, str], str] | None = None
    # Called with (name, schema) for every finished named schema. When set,
    # definitions are not inlined into the resulting document.
    collect_definitions: Callable[[str, Schema], None] | None = None

    definitions_prefix: str = DEFAULT_DEFINITIONS_PREFIX
    property_name_tag: str = DEFAULT_PROPERTY_NAME_TAG
    additional_property_name_tags: tuple[str, ...] = ()
    # Field name -> property name, top-level (including embedded) fields only.
    property_name_mapping: Mapping[str, str] | None = None

    process_without_tags: bool = False
    # Requires the name tag on "_" fields that set up the parent schema.
    unnamed_field_with_tag: bool = False
    # Wraps nullable references in anyOf instead of injecting null into the definition.
    envelop_nullability: bool = False
    inline_refs: bool = False
    root_ref: bool = False
    root_nullable: bool = False
    skip_embedded_maps_slices: bool = False
    # Walker hint: do not parse default/example tags.
    skip_non_constraints: bool = False
    skip_unsupported_properties: bool = False

    intercept_type: TypeHookChain = Field(default_factory=TypeHookChain)
    intercept_property: PropertyHookChain = Field(default_factory=PropertyHookChain)
    intercept_nullability: NullabilityHookChain = Field(default_factory=NullabilityHookChain)

    @field_validator("property_name_mapping")
    @classmethod
    def freeze_mapping(cls, v: Mapping[str, str] | None) -> Mapping[str, str] | None:
        if v is None:
            return None
        return MappingProxyType(dict(v))
