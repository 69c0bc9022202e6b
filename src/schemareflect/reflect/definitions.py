"""Per-reflection registry of named schemas and their references."""

from __future__ import annotations

from collections.abc import Callable, Iterator
from typing import Any

from schemareflect.core.errors import InternalError
from schemareflect.core.logging import get_logger
from schemareflect.reflect.identity import TypeIdentity
from schemareflect.reflect.schema import Ref, Schema

CollectFunc = Callable[[str, Schema], None]


class DefinitionRegistry:
    """Named schemas keyed by type identity.

    ``_definitions`` and ``_refs`` always hold the same identities. An identity
    is registered once; later encounters get the existing reference back.
    """

    def __init__(
        self, prefix: str, collect: CollectFunc | None = None, *, logger: Any = None
    ) -> None:
        self._prefix = prefix
        self._log = logger if logger is not None else get_logger("reflect.definitions")
        self._collect = collect
        self._definitions: dict[TypeIdentity, Schema] = {}
        self._refs: dict[TypeIdentity, Ref] = {}
        self._names: dict[str, TypeIdentity] = {}
        # Reserved during a cycle, not yet filled with the finished schema.
        self._pending: set[TypeIdentity] = set()
        # Finalization order, used for collection and document assembly.
        self._order: list[TypeIdentity] = []

    @property
    def prefix(self) -> str:
        return self._prefix

    def __contains__(self, identity: object) -> bool:
        return identity in self._refs

    def __len__(self) -> int:
        return len(self._refs)

    def ref_for(self, identity: TypeIdentity) -> Ref | None:
        return self._refs.get(identity)

    def get(self, identity: TypeIdentity) -> Schema | None:
        return self._definitions.get(identity)

    def is_pending(self, identity: TypeIdentity) -> bool:
        return identity in self._pending

    def reserve(self, identity: TypeIdentity, name: str) -> Ref:
        """Register a placeholder so a cyclic encounter can already reference it."""
        if (ref := self._existing(identity)) is not None:
            return ref
        ref = self._add(identity, name, Schema())
        self._pending.add(identity)
        self._log.debug("definition_reserved", ref=str(ref), identity=str(identity))
        return ref

    def register(self, identity: TypeIdentity, name: str, schema: Schema) -> Ref:
        """Register the finished schema for ``identity`` and return its reference.

        A reserved placeholder is filled in place and keeps its reference. An
        already finished identity is left untouched.
        """
        if (ref := self._existing(identity)) is not None:
            if identity in self._pending:
                self._pending.discard(identity)
                self._definitions[identity].replace_with(schema)
                self._finalize(identity, ref)
            return ref
        ref = self._add(identity, name, schema)
        self._finalize(identity, ref)
        return ref

    def lookup(self, ref: str) -> Schema | None:
        """Schema whose rendered reference equals ``ref``; None when nothing matches."""
        for identity, r in self._refs.items():
            if str(r) == ref:
                return self._definitions[identity]
        return None

    def items(self) -> Iterator[tuple[str, Schema]]:
        """Finished definitions as ``(name, schema)`` in construction order."""
        for identity in self._order:
            yield self._refs[identity].name, self._definitions[identity]

    def _existing(self, identity: TypeIdentity) -> Ref | None:
        ref = self._refs.get(identity)
        if (ref is None) != (identity not in self._definitions):
            raise InternalError.unexpected(
                "definition registry out of sync", identity=str(identity)
            )
        return ref

    def _add(self, identity: TypeIdentity, name: str, schema: Schema) -> Ref:
        unique = self._unique_name(name, identity)
        ref = Ref(self._prefix, unique)
        self._definitions[identity] = schema
        self._refs[identity] = ref
        self._names[unique] = identity
        return ref

    def _unique_name(self, name: str, identity: TypeIdentity) -> str:
        candidate = name
        suffix = 1
        while (owner := self._names.get(candidate)) is not None and owner != identity:
            suffix += 1
            candidate = f"{name}{suffix}"
        if candidate != name:
            self._log.debug(
                "definition_renamed", name=name, renamed=candidate, identity=str(identity)
            )
        return candidate

    def _finalize(self, identity: TypeIdentity, ref: Ref) -> None:
        self._order.append(identity)
        self._log.debug("definition_registered", ref=str(ref), identity=str(identity))
        if self._collect is not None:
            self._collect(ref.name, self._definitions[identity])
