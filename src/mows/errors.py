"""mows exception hierarchy.

Shared across the router, engine, context, and middleware so every module
raises and catches the same types.

Raising a ``MowsError`` from a handler or middleware is how a request fails
on purpose: the dispatcher hands it to the engine's error handler. Any other
exception is treated as an abnormal termination and is only turned into a
response when ``Recover`` is installed.
"""

from collections.abc import Mapping


class MowsError(Exception):
    """Base for all mows errors. Raise it (or a subclass) to fail a request."""


class ConfigurationError(MowsError):
    """Raised when the engine is configured incorrectly.

    Typically surfaces at registration time (a malformed route path) or
    when an optional dependency is missing.
    """


# -- Binding --


class BindingError(MowsError):
    """The request body could not be decoded into the requested target."""


class ContentTypeError(BindingError):
    """The request does not declare ``Content-Type: application/json``."""

    def __init__(self, message: str = "content-type must be application/json") -> None:
        super().__init__(message)


class EmptyBodyError(BindingError):
    """The request carried no body to decode."""

    def __init__(self, message: str = "empty json body") -> None:
        super().__init__(message)


class MalformedBodyError(BindingError):
    """The request body is not valid JSON."""


class BodyTooLargeError(BindingError):
    """The request body exceeds ``EngineConfig.max_body_size``."""

    def __init__(self, limit: int) -> None:
        super().__init__(f"request body exceeds {limit} bytes")
        self.limit = limit


# -- Query --


class QueryParamError(MowsError):
    """A query parameter is present but cannot be parsed as the requested type."""

    def __init__(self, key: str, value: str, expected: str) -> None:
        super().__init__(f"query parameter {key!r}: invalid {expected} {value!r}")
        self.key = key
        self.value = value
        self.expected = expected


# -- Validation --


class ValidationError(MowsError):
    """One or more field constraints were violated.

    ``errors`` maps field names to the messages produced by their rules::

        {"name": ["This field is required"],
         "email": ["Must be a valid email address"]}
    """

    def __init__(self, errors: Mapping[str, list[str]], type_name: str = "") -> None:
        self.errors = {name: list(messages) for name, messages in errors.items()}
        self.type_name = type_name
        super().__init__(self._format())

    def _format(self) -> str:
        prefix = f"{self.type_name}." if self.type_name else ""
        parts = [
            f"{prefix}{name}: {message}"
            for name, messages in self.errors.items()
            for message in messages
        ]
        return "validation failed: " + "; ".join(parts)


# -- Templates --


class TemplateError(MowsError):
    """A template set could not be loaded or rendered."""


class TemplatesNotLoadedError(TemplateError):
    """HTML rendering was attempted before any template set was loaded."""

    def __init__(self, message: str = "templates not loaded") -> None:
        super().__init__(message)
