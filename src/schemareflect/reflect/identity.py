"""Type identities and field metadata supplied by the walker."""

from __future__ import annotations

import sys
import typing
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, order=True)
class TypeIdentity:
    """Stable, comparable key for a runtime type.

    Identities derived from different declarations never compare equal, even
    when the types are structurally identical: ``Page[A]`` and ``Page[B]``
    differ by their arguments.
    """

    key: str
    args: tuple[TypeIdentity, ...] = ()

    @classmethod
    def of(cls, tp: Any) -> TypeIdentity:
        origin = typing.get_origin(tp)
        if origin is not None:
            return cls(_qualified_name(origin), tuple(cls.of(a) for a in typing.get_args(tp)))
        return cls(_qualified_name(tp))

    def __str__(self) -> str:
        if not self.args:
            return self.key
        return f"{self.key}[{', '.join(str(a) for a in self.args)}]"


def _qualified_name(tp: Any) -> str:
    module = getattr(tp, "__module__", None)
    qualname = getattr(tp, "__qualname__", None) or getattr(tp, "__name__", None)
    if qualname is None:
        return repr(tp)
    if module in (None, "builtins"):
        return qualname
    name = f"{module}.{qualname}"
    if not _importable_as(tp, module, qualname):
        # Factory-made or shadowed classes can share a qualified name.
        return f"{name}@{id(tp):x}"
    return name


def _importable_as(tp: Any, module: str, qualname: str) -> bool:
    """Whether ``module.qualname`` resolves back to ``tp`` itself."""
    if "<locals>" in qualname:
        return False
    target: Any = sys.modules.get(module)
    for part in qualname.split("."):
        if target is None:
            return False
        target = getattr(target, part, None)
    return target is tp


def default_definition_name(tp: Any) -> str:
    """Default definition name: last module component plus qualified name.

    Examples:
        myapp.api.Widget -> "api.Widget"
        myapp.api.Page[myapp.api.Widget] -> "api.Page[api.Widget]"
    """
    origin = typing.get_origin(tp)
    if origin is not None:
        args = ", ".join(default_definition_name(a) for a in typing.get_args(tp))
        return f"{default_definition_name(origin)}[{args}]"
    qualname = getattr(tp, "__qualname__", None) or getattr(tp, "__name__", None) or repr(tp)
    module = getattr(tp, "__module__", None)
    if module in (None, "builtins"):
        return qualname
    return f"{module.rsplit('.', 1)[-1]}.{qualname}"


@dataclass(frozen=True)
class FieldInfo:
    """Field metadata handed in by the walker.

    ``tags`` maps a tag key to its raw value, e.g. ``{"json": "fname,omitempty"}``.
    """

    name: str
    tags: Mapping[str, str] = field(default_factory=dict)
    embedded: bool = False
    type: Any = None

    def tag(self, key: str) -> str | None:
        return self.tags.get(key)
