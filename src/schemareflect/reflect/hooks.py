"""Interception hooks and their ordered chains.

Three extension points, each with its own composition policy:

- Type hooks run before (``processed=False``, empty schema) and after
  (``processed=True``, populated schema) a type is reflected. The chain stops
  at the first hook that returns True or raises.
- Property hooks run once per field. The chain stops at the first hook that
  raises, ``SkipProperty`` included.
- Nullability hooks run once per type after the default nullability rules.
  They cannot veto, so every hook runs and sees the previous one's mutations.

Hooks always run in registration order.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any, Protocol

from schemareflect.reflect.identity import FieldInfo
from schemareflect.reflect.schema import Schema


class TypeHook(Protocol):
    def __call__(self, value: Any, schema: Schema, processed: bool) -> bool: ...


@dataclass(frozen=True)
class PropertyHookParams:
    """Arguments for a property hook.

    ``path`` ends with the property name. The parent schema is
    ``property_schema.parent``.
    """

    path: tuple[str, ...]
    name: str
    field: FieldInfo
    property_schema: Schema


class PropertyHook(Protocol):
    def __call__(self, params: PropertyHookParams) -> None: ...


@dataclass(frozen=True)
class NullabilityHookParams:
    """Arguments for a nullability hook.

    Attributes:
        orig_schema: Snapshot taken before the default rules ran.
        schema: Schema after the default rules, mutable by the hook.
        type: Reflected type.
        omit_empty: Whether "omit empty" semantics apply to the value.
        null_added: Whether the default rules injected a null type.
        ref_def: Referenced definition, when ``schema`` is a reference.
    """

    orig_schema: Schema
    schema: Schema
    type: Any
    omit_empty: bool
    null_added: bool
    ref_def: Schema | None = None


class NullabilityHook(Protocol):
    def __call__(self, params: NullabilityHookParams) -> None: ...


class _Chain:
    __slots__ = ("_hooks",)

    def __init__(self, hooks: tuple[Any, ...] = ()) -> None:
        self._hooks = hooks

    def __len__(self) -> int:
        return len(self._hooks)

    def __bool__(self) -> bool:
        return bool(self._hooks)

    def __iter__(self) -> Iterator[Any]:
        return iter(self._hooks)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self._hooks)} hooks)"


class TypeHookChain(_Chain):
    def with_hook(self, hook: TypeHook) -> TypeHookChain:
        return TypeHookChain((*self._hooks, hook))

    def __call__(self, value: Any, schema: Schema, processed: bool) -> bool:
        for hook in self._hooks:
            if hook(value, schema, processed):
                return True
        return False


class PropertyHookChain(_Chain):
    def with_hook(self, hook: PropertyHook) -> PropertyHookChain:
        return PropertyHookChain((*self._hooks, hook))

    def __call__(self, params: PropertyHookParams) -> None:
        for hook in self._hooks:
            hook(params)


class NullabilityHookChain(_Chain):
    def with_hook(self, hook: NullabilityHook) -> NullabilityHookChain:
        return NullabilityHookChain((*self._hooks, hook))

    def __call__(self, params: NullabilityHookParams) -> None:
        for hook in self._hooks:
            hook(params)
