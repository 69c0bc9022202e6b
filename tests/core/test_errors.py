"""Tests for error types and codes."""

import pytest

from schemareflect.core.errors import (
    ConfigError,
    ErrorCode,
    InternalError,
    ReflectError,
    SchemaReflectError,
    SkipProperty,
)


class TestErrorCode:
    """Error code value tests."""

    @pytest.mark.parametrize(
        ("code", "expected_range"),
        [
            (ErrorCode.CONFIG_PARSE_ERROR, 2000),
            (ErrorCode.CONFIG_INVALID_VALUE, 2000),
            (ErrorCode.CONFIG_FILE_NOT_FOUND, 2000),
            (ErrorCode.REFLECT_HOOK_FAILED, 3000),
            (ErrorCode.REFLECT_UNSUPPORTED_TYPE, 3000),
            (ErrorCode.REFLECT_CANCELLED, 3000),
            (ErrorCode.INTERNAL_ERROR, 9000),
        ],
    )
    def test_given_error_code_when_checked_then_in_correct_range(
        self, code: ErrorCode, expected_range: int
    ) -> None:
        """Error codes fall within their designated numeric range."""
        # Given
        error_code = code

        # When
        value = error_code.value

        # Then
        assert expected_range <= value < expected_range + 1000


class TestSchemaReflectError:
    """Base error behavior tests."""

    def test_given_error_when_to_dict_then_serializes_all_fields(self) -> None:
        """Error serializes to dict with all required fields."""
        # Given
        error = SchemaReflectError(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message="Test message",
            retryable=True,
            details={"key": "value"},
        )

        # When
        result = error.to_dict()

        # Then
        assert result == {
            "code": 2001,
            "error": "CONFIG_PARSE_ERROR",
            "message": "Test message",
            "retryable": True,
            "details": {"key": "value"},
        }

    def test_given_error_when_str_then_human_readable(self) -> None:
        """Error string representation is human readable."""
        # Given
        error = SchemaReflectError(code=ErrorCode.INTERNAL_ERROR, message="Something broke")

        # When
        result = str(error)

        # Then
        assert result == "[9001] INTERNAL_ERROR: Something broke"

    def test_given_error_when_raised_then_catchable_as_exception(self) -> None:
        """Errors behave as regular exceptions."""
        with pytest.raises(SchemaReflectError) as exc_info:
            raise ConfigError.file_not_found("/missing.yaml")
        assert exc_info.value.error_name == "CONFIG_FILE_NOT_FOUND"


class TestConfigError:
    """ConfigError factory method tests."""

    @pytest.mark.parametrize(
        ("factory", "kwargs", "expected_code"),
        [
            (
                "parse_error",
                {"path": "/foo", "reason": "bad yaml"},
                ErrorCode.CONFIG_PARSE_ERROR,
            ),
            (
                "invalid_value",
                {"field": "reflect.inline_refs", "value": "maybe", "reason": "not a bool"},
                ErrorCode.CONFIG_INVALID_VALUE,
            ),
            ("file_not_found", {"path": "/missing"}, ErrorCode.CONFIG_FILE_NOT_FOUND),
        ],
    )
    def test_given_factory_when_called_then_correct_code(
        self, factory: str, kwargs: dict[str, object], expected_code: ErrorCode
    ) -> None:
        """Factory methods produce errors with correct error codes."""
        # Given
        factory_method = getattr(ConfigError, factory)

        # When
        error = factory_method(**kwargs)

        # Then
        assert error.code == expected_code


class TestReflectError:
    """ReflectError factories record the traversal path."""

    def test_given_hook_failure_when_created_then_path_joined(self) -> None:
        # Given
        path = ["#", "owner", "address"]

        # When
        error = ReflectError.hook_failed(path, "type", "bad value")

        # Then
        assert error.code == ErrorCode.REFLECT_HOOK_FAILED
        assert error.path == "#.owner.address"
        assert error.details["hook"] == "type"
        assert "#.owner.address" in error.message

    def test_given_empty_path_when_created_then_root_marker(self) -> None:
        error = ReflectError.cancelled([])
        assert error.path == "<root>"
        assert error.retryable is True

    def test_given_unsupported_type_when_created_then_field_in_details(self) -> None:
        error = ReflectError.unsupported_type(("#",), "callback", "callables have no schema")
        assert error.details["field"] == "callback"
        assert error.code == ErrorCode.REFLECT_UNSUPPORTED_TYPE


class TestInternalError:
    """InternalError tests."""

    def test_given_unexpected_error_when_created_then_includes_extras(self) -> None:
        """Unexpected error captures arbitrary extra details."""
        # Given
        extras = {"identity": "api.Widget"}

        # When
        error = InternalError.unexpected("registry out of sync", **extras)

        # Then
        assert error.details == extras
        assert error.code == ErrorCode.INTERNAL_ERROR


class TestSkipProperty:
    def test_sentinel_is_not_a_reflection_error(self) -> None:
        """Property omission must never be mistaken for a failure."""
        assert not issubclass(SkipProperty, SchemaReflectError)
