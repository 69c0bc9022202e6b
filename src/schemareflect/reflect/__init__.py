"""Reflection core: context, hooks, naming, definitions and cycle tracking."""

from schemareflect.reflect.builder import Option, ReflectContextBuilder
from schemareflect.reflect.context import ReflectContext
from schemareflect.reflect.cycles import CycleTracker, TraversalPath
from schemareflect.reflect.definitions import DefinitionRegistry
from schemareflect.reflect.hooks import (
    NullabilityHook,
    NullabilityHookChain,
    NullabilityHookParams,
    PropertyHook,
    PropertyHookChain,
    PropertyHookParams,
    TypeHook,
    TypeHookChain,
)
from schemareflect.reflect.identity import FieldInfo, TypeIdentity, default_definition_name
from schemareflect.reflect.naming import (
    resolve_definition_name,
    resolve_property_name,
    strip_prefix_namer,
)
from schemareflect.reflect.options import ReflectConfig
from schemareflect.reflect.schema import Ref, Schema

__all__ = [
    "CycleTracker",
    "DefinitionRegistry",
    "FieldInfo",
    "NullabilityHook",
    "NullabilityHookChain",
    "NullabilityHookParams",
    "Option",
    "PropertyHook",
    "PropertyHookChain",
    "PropertyHookParams",
    "Ref",
    "ReflectConfig",
    "ReflectContext",
    "ReflectContextBuilder",
    "Schema",
    "TraversalPath",
    "TypeHook",
    "TypeHookChain",
    "TypeIdentity",
    "default_definition_name",
    "resolve_definition_name",
    "resolve_property_name",
    "strip_prefix_namer",
]
