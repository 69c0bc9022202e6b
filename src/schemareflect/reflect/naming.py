"""Definition and property name resolution."""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from schemareflect.config.constants import SKIP_TAG_VALUE, TAG_OPTION_SEPARATOR, UNNAMED_FIELD_NAME
from schemareflect.reflect.identity import FieldInfo

DefNameFunc = Callable[[Any, str], str]


def strip_prefix_namer(prefixes: Sequence[str]) -> DefNameFunc:
    """Naming function removing the first listed prefix the default name has.

    Only one prefix is ever removed, even if the remainder starts with
    another listed prefix.
    """
    ordered = tuple(prefixes)

    def namer(_tp: Any, default_name: str) -> str:
        for prefix in ordered:
            if prefix and default_name.startswith(prefix):
                return default_name[len(prefix) :]
        return default_name

    return namer


def resolve_definition_name(tp: Any, default_name: str, namer: DefNameFunc | None) -> str:
    if namer is None:
        return default_name
    return namer(tp, default_name)


def tag_name(raw: str | None) -> str:
    """Property name part of a tag value (``"fname,omitempty"`` -> ``"fname"``)."""
    if not raw:
        return ""
    return raw.split(TAG_OPTION_SEPARATOR, 1)[0]


def resolve_property_name(
    field: FieldInfo,
    *,
    tag: str,
    additional_tags: Sequence[str] = (),
    mapping: Mapping[str, str] | None = None,
    top_level: bool = True,
    process_without_tags: bool = False,
    unnamed_field_with_tag: bool = False,
) -> str | None:
    """Resolve the property name for a field, or None to skip the field.

    Precedence: top-level mapping, primary tag, first present additional tag,
    then the field's own name when untagged fields are processed.
    """
    if mapping and top_level and field.name in mapping:
        return mapping[field.name]

    name = tag_name(field.tag(tag))
    if not name:
        for extra in additional_tags:
            name = tag_name(field.tag(extra))
            if name:
                break

    if name == SKIP_TAG_VALUE:
        return None
    if name:
        return name

    if field.name == UNNAMED_FIELD_NAME and unnamed_field_with_tag:
        return None
    if process_without_tags:
        return field.name
    return None
