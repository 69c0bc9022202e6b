"""Reflection context: the aggregate a walker carries through one traversal.

A context is created per top-level reflection request, consumed by a single
depth-first traversal and then discarded. It is not shared across concurrent
requests; every request builds its own registries and trackers.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import AbstractContextManager, contextmanager
from dataclasses import dataclass, field
from functools import cached_property
from typing import Any, Generic, TypeVar

import structlog

from schemareflect.config.constants import NULL_TYPE
from schemareflect.core.cancellation import CancelToken
from schemareflect.core.errors import ReflectError, SchemaReflectError, SkipProperty
from schemareflect.core.logging import get_logger, reflection_scope
from schemareflect.reflect.cycles import CycleTracker, TraversalPath
from schemareflect.reflect.definitions import DefinitionRegistry
from schemareflect.reflect.hooks import NullabilityHookParams, PropertyHookParams
from schemareflect.reflect.identity import FieldInfo, TypeIdentity
from schemareflect.reflect.naming import resolve_definition_name, resolve_property_name
from schemareflect.reflect.options import ReflectConfig
from schemareflect.reflect.schema import Ref, Schema

UserDataT = TypeVar("UserDataT")


@dataclass
class ReflectContext(Generic[UserDataT]):
    """State for one reflection request.

    ``config`` is frozen; ``definitions``, ``cycles`` and ``path`` are mutated
    as the walker descends and returns.
    """

    config: ReflectConfig
    definitions: DefinitionRegistry
    cycles: CycleTracker = field(default_factory=CycleTracker)
    path: TraversalPath = field(default_factory=TraversalPath)
    cancel_token: CancelToken = field(default_factory=CancelToken)
    user_data: UserDataT | None = None
    reflection_id: str = ""

    @cached_property
    def log(self) -> structlog.stdlib.BoundLogger:
        """Logger bound to this request's ``reflection_id``; walkers may log through it."""
        return get_logger("reflect.context", reflection_id=self.reflection_id)

    def logging_scope(self) -> AbstractContextManager[None]:
        """Tag every structlog event inside the block with this request's id."""
        return reflection_scope(self.reflection_id)

    # -- naming ---------------------------------------------------------------

    def definition_name(self, tp: Any, default_name: str) -> str:
        return resolve_definition_name(tp, default_name, self.config.def_name)

    def property_name(self, field: FieldInfo) -> str | None:
        """Property name for ``field``, or None when the field is skipped.

        Names are resolved before the walker descends into the field, so the
        fields of the root type are resolved while the path holds only the
        root label; the mapping table applies there. Embedded fields are
        flattened without a label and stay top-level.
        """
        cfg = self.config
        return resolve_property_name(
            field,
            tag=cfg.property_name_tag,
            additional_tags=cfg.additional_property_name_tags,
            mapping=cfg.property_name_mapping,
            top_level=len(self.path) <= 1,
            process_without_tags=cfg.process_without_tags,
            unnamed_field_with_tag=cfg.unnamed_field_with_tag,
        )

    # -- hooks ----------------------------------------------------------------

    def intercept_type(self, value: Any, schema: Schema, processed: bool) -> bool:
        """Run the type hook chain. True means the walker must stop processing ``schema``."""
        chain = self.config.intercept_type
        if not chain:
            return False
        try:
            return chain(value, schema, processed)
        except SchemaReflectError:
            raise
        except Exception as e:
            raise ReflectError.hook_failed(self.path.snapshot(), "type", str(e)) from e

    def intercept_property(self, name: str, field: FieldInfo, property_schema: Schema) -> bool:
        """Run the property hook chain. False means the property is omitted."""
        chain = self.config.intercept_property
        if not chain:
            return True
        params = PropertyHookParams(
            path=(*self.path.snapshot(), name),
            name=name,
            field=field,
            property_schema=property_schema,
        )
        try:
            chain(params)
        except SkipProperty:
            self.log.debug("property_skipped", path=".".join(params.path))
            return False
        except SchemaReflectError:
            raise
        except Exception as e:
            raise ReflectError.hook_failed(params.path, "property", str(e)) from e
        return True

    def apply_nullability(
        self,
        schema: Schema,
        tp: Any,
        *,
        nullable: bool,
        omit_empty: bool = False,
        is_root: bool = False,
    ) -> bool:
        """Apply default nullability rules to ``schema``, then the nullability hooks.

        Returns whether the default rules injected a null type.
        """
        orig = schema.copy()
        ref_def = self.get_definition(schema.ref) if schema.ref is not None else None
        null_added = False

        if nullable and (not is_root or self.config.root_nullable):
            if schema.ref is not None:
                # Reserved or untyped definitions cannot take a null type.
                if self.config.envelop_nullability or ref_def is None or ref_def.type is None:
                    schema.any_of = [Schema(type=NULL_TYPE), Schema(ref=schema.ref)]
                    schema.ref = None
                    null_added = True
                else:
                    null_added = ref_def.add_type(NULL_TYPE)
            elif schema.type is not None:
                null_added = schema.add_type(NULL_TYPE)

        if self.config.intercept_nullability:
            self.config.intercept_nullability(
                NullabilityHookParams(
                    orig_schema=orig,
                    schema=schema,
                    type=tp,
                    omit_empty=omit_empty,
                    null_added=null_added,
                    ref_def=ref_def,
                )
            )
        return null_added

    # -- traversal ------------------------------------------------------------

    def check_cancelled(self) -> None:
        if self.cancel_token.cancelled:
            self.log.debug("reflection_cancelled", path=str(self.path))
        self.cancel_token.raise_if_cancelled(self.path.snapshot())

    @contextmanager
    def entering(self, identity: TypeIdentity, label: str) -> Iterator[None]:
        """Descend into a type: check cancellation, push ``label``, mark in progress.

        Both the path and the in-progress mark are restored on exit, including
        when the block raises.
        """
        self.check_cancelled()
        with self.path.descend(label), self.cycles.tracking(identity):
            yield

    def descending(self, label: str) -> AbstractContextManager[None]:
        """Push a field or element label for the duration of a ``with`` block."""
        return self.path.descend(label)

    def is_cycle(self, identity: TypeIdentity) -> bool:
        return self.cycles.is_cycle(identity)

    # -- definitions ----------------------------------------------------------

    def should_reference(self, is_root: bool = False) -> bool:
        """Whether a named shape is emitted as a reference rather than inlined."""
        if self.config.inline_refs:
            return False
        return not is_root or self.config.root_ref

    def reference_to(self, identity: TypeIdentity, tp: Any, default_name: str) -> Ref:
        """Reference for ``identity``, reserving a definition if none exists yet.

        Used on a cycle: the definition is filled in once the outer traversal
        of the type completes.
        """
        ref = self.definitions.ref_for(identity)
        if ref is not None:
            return ref
        return self.definitions.reserve(identity, self.definition_name(tp, default_name))

    def register_definition(
        self, identity: TypeIdentity, tp: Any, default_name: str, schema: Schema
    ) -> Ref:
        ref = self.definitions.ref_for(identity)
        if ref is not None and not self.definitions.is_pending(identity):
            return ref
        name = ref.name if ref is not None else self.definition_name(tp, default_name)
        return self.definitions.register(identity, name, schema)

    def get_definition(self, ref: str) -> Schema | None:
        """Definition whose rendered reference equals ``ref``.

        Returns None when no definition matches, so a missing definition is
        never confused with an intentionally empty one.
        """
        return self.definitions.lookup(ref)

    def definitions_document(self) -> dict[str, Schema]:
        """Definitions to embed in the root document; empty when they are collected."""
        if self.config.collect_definitions is not None:
            return {}
        return dict(self.definitions.items())

    # -- errors ---------------------------------------------------------------

    def unsupported(self, field_name: str, reason: str) -> bool:
        """Handle an unsupported property type detected by the walker.

        Returns False (omit the property) when unsupported properties are
        skipped, raises ``ReflectError`` otherwise.
        """
        if self.config.skip_unsupported_properties:
            self.log.debug(
                "unsupported_property_skipped",
                path=str(self.path),
                field=field_name,
                reason=reason,
            )
            return False
        raise ReflectError.unsupported_type(self.path.snapshot(), field_name, reason)
