"""In-progress schema nodes and reference tokens.

The walker owns every ``Schema`` while it is being built; the reflection core
only reads and writes the fields that matter for naming, nullability and
referencing.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from schemareflect.config.constants import NULL_TYPE


@dataclass(frozen=True, order=True)
class Ref:
    """Location of a named schema: ``path + name``, e.g. ``#/definitions/Widget``."""

    path: str
    name: str

    def __str__(self) -> str:
        return self.path + self.name

    def schema(self) -> Schema:
        """Schema node that points at this location."""
        return Schema(ref=str(self))


@dataclass
class Schema:
    """Mutable schema node under construction."""

    type: str | list[str] | None = None
    ref: str | None = None
    title: str | None = None
    description: str | None = None
    properties: dict[str, Schema] = field(default_factory=dict)
    items: Schema | None = None
    any_of: list[Schema] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)
    # Enclosing object schema, set for property schemas.
    parent: Schema | None = field(default=None, repr=False, compare=False)

    def is_empty(self) -> bool:
        return (
            self.type is None
            and self.ref is None
            and self.title is None
            and self.description is None
            and not self.properties
            and self.items is None
            and not self.any_of
            and not self.extra
        )

    def types(self) -> list[str]:
        if self.type is None:
            return []
        if isinstance(self.type, str):
            return [self.type]
        return list(self.type)

    def has_type(self, name: str) -> bool:
        return name in self.types()

    def add_type(self, name: str) -> bool:
        """Add ``name`` to the type constraint. Returns False if already present."""
        current = self.types()
        if name in current:
            return False
        if not current:
            self.type = name
        else:
            self.type = [*current, name]
        return True

    def is_nullable(self) -> bool:
        return self.has_type(NULL_TYPE) or any(s.has_type(NULL_TYPE) for s in self.any_of)

    def copy(self) -> Schema:
        """Deep snapshot of this node; the parent pointer is shared, not copied."""
        return Schema(
            type=list(self.type) if isinstance(self.type, list) else self.type,
            ref=self.ref,
            title=self.title,
            description=self.description,
            properties={k: v.copy() for k, v in self.properties.items()},
            items=self.items.copy() if self.items is not None else None,
            any_of=[s.copy() for s in self.any_of],
            extra=dict(self.extra),
            parent=self.parent,
        )

    def replace_with(self, other: Schema) -> None:
        """Overwrite this node's content in place, keeping its identity."""
        self.type = other.type
        self.ref = other.ref
        self.title = other.title
        self.description = other.description
        self.properties = other.properties
        self.items = other.items
        self.any_of = other.any_of
        self.extra = other.extra

    def to_dict(self) -> dict[str, Any]:
        """Plain JSON-Schema-shaped dict (for inspection, not a wire codec)."""
        out: dict[str, Any] = {}
        if self.ref is not None:
            out["$ref"] = self.ref
        if self.type is not None:
            out["type"] = self.type
        if self.title is not None:
            out["title"] = self.title
        if self.description is not None:
            out["description"] = self.description
        if self.properties:
            out["properties"] = {k: v.to_dict() for k, v in self.properties.items()}
        if self.items is not None:
            out["items"] = self.items.to_dict()
        if self.any_of:
            out["anyOf"] = [s.to_dict() for s in self.any_of]
        out.update(self.extra)
        return out
