"""Fluent builder for reflection contexts.

Scalar setters overwrite earlier values; hook setters append to their chain,
so independent call sites can layer behavior without replacing each other::

    ctx = (
        ReflectContextBuilder()
        .definitions_prefix("#/components/schemas/")
        .strip_definition_name_prefix("api.")
        .intercept_type(my_type_hook)
        .build()
    )

Option bundles are plain callables taking the builder, applied in order with
``apply()``.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Generic, TypeVar

from schemareflect.config.models import ReflectSettings
from schemareflect.core.cancellation import CancelToken
from schemareflect.core.logging import get_logger, new_reflection_id
from schemareflect.reflect.context import ReflectContext
from schemareflect.reflect.cycles import CycleTracker
from schemareflect.reflect.definitions import DefinitionRegistry
from schemareflect.reflect.hooks import (
    NullabilityHook,
    NullabilityHookChain,
    PropertyHook,
    PropertyHookChain,
    TypeHook,
    TypeHookChain,
)
from schemareflect.reflect.naming import strip_prefix_namer
from schemareflect.reflect.options import ReflectConfig
from schemareflect.reflect.schema import Schema

log = get_logger("reflect.builder")

UserDataT = TypeVar("UserDataT")

Option = Callable[["ReflectContextBuilder[Any]"], object]


class ReflectContextBuilder(Generic[UserDataT]):
    """Collects options and produces fresh ``ReflectContext`` instances."""

    def __init__(self) -> None:
        self._values: dict[str, Any] = {}
        self._type_hooks = TypeHookChain()
        self._property_hooks = PropertyHookChain()
        self._nullability_hooks = NullabilityHookChain()

    @classmethod
    def from_settings(cls, settings: ReflectSettings) -> ReflectContextBuilder[Any]:
        """Seed a builder from loaded settings; later setters still override."""
        builder: ReflectContextBuilder[Any] = cls()
        builder.definitions_prefix(settings.definitions_prefix)
        builder.property_name_tag(
            settings.property_name_tag, *settings.additional_property_name_tags
        )
        if settings.strip_definition_name_prefixes:
            builder.strip_definition_name_prefix(*settings.strip_definition_name_prefixes)
        for flag in (
            "inline_refs",
            "root_nullable",
            "root_ref",
            "process_without_tags",
            "skip_embedded_maps_slices",
            "skip_unsupported_properties",
            "envelop_nullability",
            "unnamed_field_with_tag",
            "skip_non_constraints",
        ):
            if getattr(settings, flag):
                builder._values[flag] = True
        return builder

    def apply(self, *options: Option) -> ReflectContextBuilder[UserDataT]:
        for option in options:
            option(self)
        return self

    # Naming

    def definition_name(self, func: Callable[[Any, str], str]) -> ReflectContextBuilder[UserDataT]:
        """Use ``func(type, default_name)`` instead of the default definition name."""
        self._values["def_name"] = func
        return self

    def strip_definition_name_prefix(self, *prefixes: str) -> ReflectContextBuilder[UserDataT]:
        """Remove the first listed prefix found on default definition names."""
        self._values["def_name"] = strip_prefix_namer(prefixes)
        return self

    def definitions_prefix(self, prefix: str) -> ReflectContextBuilder[UserDataT]:
        self._values["definitions_prefix"] = prefix
        return self

    def property_name_tag(self, tag: str, *additional: str) -> ReflectContextBuilder[UserDataT]:
        self._values["property_name_tag"] = tag
        self._values["additional_property_name_tags"] = tuple(additional)
        return self

    def property_name_mapping(self, mapping: Mapping[str, str]) -> ReflectContextBuilder[UserDataT]:
        self._values["property_name_mapping"] = dict(mapping)
        return self

    def collect_definitions(
        self, func: Callable[[str, Schema], None]
    ) -> ReflectContextBuilder[UserDataT]:
        self._values["collect_definitions"] = func
        return self

    # Flags

    def inline_refs(self) -> ReflectContextBuilder[UserDataT]:
        self._values["inline_refs"] = True
        return self

    def root_nullable(self) -> ReflectContextBuilder[UserDataT]:
        self._values["root_nullable"] = True
        return self

    def root_ref(self) -> ReflectContextBuilder[UserDataT]:
        self._values["root_ref"] = True
        return self

    def process_without_tags(self) -> ReflectContextBuilder[UserDataT]:
        self._values["process_without_tags"] = True
        return self

    def skip_embedded_maps_slices(self) -> ReflectContextBuilder[UserDataT]:
        self._values["skip_embedded_maps_slices"] = True
        return self

    def skip_unsupported_properties(self) -> ReflectContextBuilder[UserDataT]:
        self._values["skip_unsupported_properties"] = True
        return self

    def envelop_nullability(self) -> ReflectContextBuilder[UserDataT]:
        self._values["envelop_nullability"] = True
        return self

    def unnamed_field_with_tag(self) -> ReflectContextBuilder[UserDataT]:
        self._values["unnamed_field_with_tag"] = True
        return self

    def skip_non_constraints(self) -> ReflectContextBuilder[UserDataT]:
        self._values["skip_non_constraints"] = True
        return self

    # Hooks

    def intercept_type(self, hook: TypeHook) -> ReflectContextBuilder[UserDataT]:
        """Append a type hook; earlier hooks run first and may stop the chain."""
        self._type_hooks = self._type_hooks.with_hook(hook)
        return self

    def intercept_property(self, hook: PropertyHook) -> ReflectContextBuilder[UserDataT]:
        """Append a property hook; the first raising hook ends the chain."""
        self._property_hooks = self._property_hooks.with_hook(hook)
        return self

    def intercept_nullability(self, hook: NullabilityHook) -> ReflectContextBuilder[UserDataT]:
        """Append a nullability hook; every registered hook runs."""
        self._nullability_hooks = self._nullability_hooks.with_hook(hook)
        return self

    # Output

    def config(self) -> ReflectConfig:
        return ReflectConfig(
            **self._values,
            intercept_type=self._type_hooks,
            intercept_property=self._property_hooks,
            intercept_nullability=self._nullability_hooks,
        )

    def build(
        self,
        *,
        cancel_token: CancelToken | None = None,
        user_data: UserDataT | None = None,
    ) -> ReflectContext[UserDataT]:
        """Create a fresh context with empty registries and trackers.

        Each context gets a new ``reflection_id``, bound into the loggers of
        its registry and cycle tracker.
        """
        config = self.config()
        reflection_id = new_reflection_id()
        log.debug(
            "reflect_context_created",
            reflection_id=reflection_id,
            definitions_prefix=config.definitions_prefix,
            type_hooks=len(config.intercept_type),
            property_hooks=len(config.intercept_property),
            nullability_hooks=len(config.intercept_nullability),
        )
        return ReflectContext(
            config=config,
            definitions=DefinitionRegistry(
                config.definitions_prefix,
                config.collect_definitions,
                logger=get_logger("reflect.definitions", reflection_id=reflection_id),
            ),
            cycles=CycleTracker(
                logger=get_logger("reflect.cycles", reflection_id=reflection_id)
            ),
            cancel_token=cancel_token or CancelToken(),
            user_data=user_data,
            reflection_id=reflection_id,
        )
