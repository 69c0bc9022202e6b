"""Tests for ReflectContextBuilder and ReflectConfig."""

from __future__ import annotations

from typing import Any

import pytest
from pydantic import ValidationError

from schemareflect.config.models import ReflectSettings
from schemareflect.core.cancellation import CancelToken
from schemareflect.reflect.builder import ReflectContextBuilder
from schemareflect.reflect.hooks import PropertyHookParams
from schemareflect.reflect.identity import FieldInfo
from schemareflect.reflect.schema import Schema


class TestScalarOptions:
    """Scalar setters overwrite, later wins."""

    def test_defaults(self) -> None:
        config = ReflectContextBuilder().config()
        assert config.definitions_prefix == "#/definitions/"
        assert config.property_name_tag == "json"
        assert config.additional_property_name_tags == ()
        assert config.def_name is None
        assert not config.inline_refs
        assert not config.root_ref
        assert not config.root_nullable

    def test_later_setter_overwrites(self) -> None:
        config = (
            ReflectContextBuilder()
            .definitions_prefix("#/a/")
            .definitions_prefix("#/components/schemas/")
            .config()
        )
        assert config.definitions_prefix == "#/components/schemas/"

    def test_property_name_tag_with_fallbacks(self) -> None:
        config = ReflectContextBuilder().property_name_tag("query", "header", "path").config()
        assert config.property_name_tag == "query"
        assert config.additional_property_name_tags == ("header", "path")

    def test_strip_prefix_replaces_custom_namer(self) -> None:
        config = (
            ReflectContextBuilder()
            .definition_name(lambda _tp, name: name.upper())
            .strip_definition_name_prefix("api.")
            .config()
        )
        assert config.def_name is not None
        assert config.def_name(object, "api.Widget") == "Widget"

    def test_mapping_is_copied(self) -> None:
        mapping = {"FirstName": "first_name"}
        config = ReflectContextBuilder().property_name_mapping(mapping).config()
        mapping["FirstName"] = "changed"
        assert config.property_name_mapping == {"FirstName": "first_name"}

    def test_mapping_is_read_only(self) -> None:
        config = ReflectContextBuilder().property_name_mapping({"FirstName": "first_name"}).config()
        with pytest.raises(TypeError):
            config.property_name_mapping["FirstName"] = "changed"  # type: ignore[index]
        assert config.property_name_mapping == {"FirstName": "first_name"}

    @pytest.mark.parametrize(
        "flag",
        [
            "inline_refs",
            "root_nullable",
            "root_ref",
            "process_without_tags",
            "skip_embedded_maps_slices",
            "skip_unsupported_properties",
            "envelop_nullability",
            "unnamed_field_with_tag",
            "skip_non_constraints",
        ],
    )
    def test_flag_setters(self, flag: str) -> None:
        builder = ReflectContextBuilder()
        getattr(builder, flag)()
        assert getattr(builder.config(), flag) is True

    def test_config_is_frozen(self) -> None:
        """Hooks and walkers cannot reconfigure a running reflection."""
        config = ReflectContextBuilder().config()
        with pytest.raises(ValidationError):
            config.inline_refs = True  # type: ignore[misc]


class TestHookOptions:
    """Hook setters compose instead of overwriting."""

    def test_hooks_accumulate(self) -> None:
        config = (
            ReflectContextBuilder()
            .intercept_type(lambda _v, _s, _p: False)
            .intercept_type(lambda _v, _s, _p: False)
            .intercept_property(lambda _params: None)
            .intercept_nullability(lambda _params: None)
            .intercept_nullability(lambda _params: None)
            .intercept_nullability(lambda _params: None)
            .config()
        )
        assert len(config.intercept_type) == 2
        assert len(config.intercept_property) == 1
        assert len(config.intercept_nullability) == 3

    def test_option_bundles_apply_in_order(self) -> None:
        calls: list[str] = []

        def audit(builder: ReflectContextBuilder[Any]) -> None:
            builder.intercept_property(lambda p: calls.append(f"audit:{p.name}"))

        def api_conventions(builder: ReflectContextBuilder[Any]) -> None:
            builder.definitions_prefix("#/components/schemas/").intercept_property(
                lambda p: calls.append(f"api:{p.name}")
            )

        config = ReflectContextBuilder().apply(audit, api_conventions).config()
        params = PropertyHookParams(
            path=("#",), name="id", field=FieldInfo(name="Id"), property_schema=Schema()
        )
        config.intercept_property(params)
        assert config.definitions_prefix == "#/components/schemas/"
        assert calls == ["audit:id", "api:id"]


class TestBuild:
    def test_each_build_gets_fresh_registries(self) -> None:
        builder = ReflectContextBuilder()
        a = builder.build()
        b = builder.build()
        assert a.definitions is not b.definitions
        assert a.cycles is not b.cycles
        assert a.path is not b.path
        assert a.reflection_id != b.reflection_id

    def test_cancel_token_and_user_data(self) -> None:
        token = CancelToken()
        ctx = ReflectContextBuilder[dict[str, int]]().build(cancel_token=token, user_data={"n": 1})
        assert ctx.cancel_token is token
        assert ctx.user_data == {"n": 1}

    def test_registry_uses_configured_prefix(self) -> None:
        ctx = ReflectContextBuilder().definitions_prefix("#/components/schemas/").build()
        assert ctx.definitions.prefix == "#/components/schemas/"


class TestFromSettings:
    def test_seeds_scalars(self) -> None:
        settings = ReflectSettings(
            definitions_prefix="#/components/schemas/",
            property_name_tag="yaml",
            additional_property_name_tags=["json"],
            strip_definition_name_prefixes=["api."],
            inline_refs=True,
        )
        config = ReflectContextBuilder.from_settings(settings).config()
        assert config.definitions_prefix == "#/components/schemas/"
        assert config.property_name_tag == "yaml"
        assert config.additional_property_name_tags == ("json",)
        assert config.inline_refs is True
        assert config.root_ref is False
        assert config.def_name is not None
        assert config.def_name(object, "api.Widget") == "Widget"

    def test_setters_override_settings(self) -> None:
        settings = ReflectSettings(definitions_prefix="#/a/")
        config = (
            ReflectContextBuilder.from_settings(settings).definitions_prefix("#/b/").config()
        )
        assert config.definitions_prefix == "#/b/"
