"""Shared fixtures for reflection tests.

``walk`` is a minimal dataclass walker that drives ``ReflectContext`` the way
a real type walker would: hooks before and after each named type, cycle
checks, definition registration, property naming and nullability.
"""

from __future__ import annotations

import dataclasses
import types
import typing
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import pytest

from schemareflect.reflect import (
    FieldInfo,
    ReflectContext,
    ReflectContextBuilder,
    Schema,
    TypeIdentity,
    default_definition_name,
)

_PRIMITIVES = {str: "string", int: "integer", float: "number", bool: "boolean"}


@dataclass
class WalkStats:
    """User data carried by the context: counts visited type nodes."""

    steps: int = 0


def _unwrap_optional(tp: Any) -> tuple[Any, bool]:
    if typing.get_origin(tp) in (typing.Union, types.UnionType):
        args = [a for a in typing.get_args(tp) if a is not type(None)]
        if len(args) == 1:
            return args[0], len(args) != len(typing.get_args(tp))
    return tp, False


def _reflect(
    ctx: ReflectContext[WalkStats], tp: Any, label: str, *, is_root: bool = False
) -> Schema:
    if ctx.user_data is not None:
        ctx.user_data.steps += 1
    tp, nullable = _unwrap_optional(tp)

    if dataclasses.is_dataclass(tp):
        out = _reflect_named(ctx, tp, label, is_root=is_root)
    elif typing.get_origin(tp) is list:
        with ctx.descending(label):
            out = Schema(type="array", items=_reflect(ctx, typing.get_args(tp)[0], "[]"))
    else:
        with ctx.descending(label):
            out = Schema(type=_PRIMITIVES[tp])

    ctx.apply_nullability(out, tp, nullable=nullable, is_root=is_root)
    return out


def _reflect_named(ctx: ReflectContext[WalkStats], tp: Any, label: str, *, is_root: bool) -> Schema:
    identity = TypeIdentity.of(tp)
    default_name = default_definition_name(tp)

    if ctx.is_cycle(identity):
        return ctx.reference_to(identity, tp, default_name).schema()
    ref = ctx.definitions.ref_for(identity)
    if ref is not None and ctx.should_reference(is_root):
        return ref.schema()

    schema = Schema()
    with ctx.entering(identity, label):
        if ctx.intercept_type(tp, schema, False):
            return schema
        schema.type = "object"
        _walk_fields(ctx, tp, schema)
        if ctx.intercept_type(tp, schema, True):
            return schema

    if ctx.should_reference(is_root) or ctx.definitions.is_pending(identity):
        ref = ctx.register_definition(identity, tp, default_name, schema)
        if ctx.should_reference(is_root):
            return ref.schema()
    return schema


def _walk_fields(ctx: ReflectContext[WalkStats], tp: Any, parent: Schema) -> None:
    hints = typing.get_type_hints(tp)
    for f in dataclasses.fields(tp):
        ftype = hints[f.name]
        info = FieldInfo(
            name=f.name,
            tags=f.metadata.get("tags", {}),
            embedded=f.metadata.get("embedded", False),
            type=ftype,
        )
        if info.embedded and dataclasses.is_dataclass(ftype):
            _walk_fields(ctx, ftype, parent)
            continue

        name = ctx.property_name(info)
        if name is None:
            continue
        if typing.get_origin(ftype) is typing.get_origin(Callable[[], None]):
            if not ctx.unsupported(name, "callables have no schema"):
                continue

        prop = _reflect(ctx, ftype, name)
        prop.parent = parent
        if ctx.intercept_property(name, info, prop):
            parent.properties[name] = prop


def walk(ctx: ReflectContext[WalkStats], tp: Any) -> Schema:
    with ctx.logging_scope():
        return _reflect(ctx, tp, "#", is_root=True)


@pytest.fixture
def builder() -> ReflectContextBuilder[WalkStats]:
    return ReflectContextBuilder[WalkStats]()


@pytest.fixture
def walker() -> Callable[[ReflectContext[WalkStats], Any], Schema]:
    return walk


@pytest.fixture
def walk_stats() -> WalkStats:
    return WalkStats()
