"""Configuration constants.

Protocol-level values that are NOT user-configurable. Defaults that users may
override live in models.py (ReflectSettings).
"""

DEFAULT_DEFINITIONS_PREFIX = "#/definitions/"
"""Location of named schemas when no container path is configured."""

DEFAULT_PROPERTY_NAME_TAG = "json"
"""Field tag consulted first when deriving property names."""

SKIP_TAG_VALUE = "-"
"""Tag value that excludes a field from its parent schema."""

TAG_OPTION_SEPARATOR = ","
"""Separates the property name from tag options, e.g. ``name,omitempty``."""

UNNAMED_FIELD_NAME = "_"
"""Field name reserved for parent-schema setup fields."""

NULL_TYPE = "null"
"""JSON Schema type injected for nullable values."""
