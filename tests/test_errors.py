"""Tests for mows.errors — exception hierarchy and messages."""

from mows.errors import (
    BindingError,
    BodyTooLargeError,
    ConfigurationError,
    ContentTypeError,
    EmptyBodyError,
    MalformedBodyError,
    MowsError,
    QueryParamError,
    TemplateError,
    TemplatesNotLoadedError,
    ValidationError,
)


class TestHierarchy:
    def test_everything_is_a_mows_error(self) -> None:
        for cls in (
            ConfigurationError,
            BindingError,
            QueryParamError,
            ValidationError,
            TemplateError,
        ):
            assert issubclass(cls, MowsError)

    def test_binding_family(self) -> None:
        for cls in (ContentTypeError, EmptyBodyError, MalformedBodyError, BodyTooLargeError):
            assert issubclass(cls, BindingError)

    def test_templates_not_loaded_is_template_error(self) -> None:
        assert issubclass(TemplatesNotLoadedError, TemplateError)


class TestMessages:
    def test_defaults(self) -> None:
        assert str(ContentTypeError()) == "content-type must be application/json"
        assert str(EmptyBodyError()) == "empty json body"
        assert str(TemplatesNotLoadedError()) == "templates not loaded"

    def test_body_too_large(self) -> None:
        assert str(BodyTooLargeError(1024)) == "request body exceeds 1024 bytes"

    def test_query_param(self) -> None:
        err = QueryParamError("page", "abc", "integer")
        assert str(err) == "query parameter 'page': invalid integer 'abc'"

    def test_validation_message_lists_every_violation(self) -> None:
        err = ValidationError(
            {"name": ["This field is required"], "email": ["Must be a valid email address"]},
            type_name="User",
        )
        assert str(err) == (
            "validation failed: User.name: This field is required; "
            "User.email: Must be a valid email address"
        )

    def test_validation_message_without_type(self) -> None:
        err = ValidationError({"q": ["Must be at most 5 characters"]})
        assert str(err) == "validation failed: q: Must be at most 5 characters"
        assert err.errors == {"q": ["Must be at most 5 characters"]}
