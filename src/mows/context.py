"""Per-request context.

A ``Context`` is created by the dispatcher for every request and handed to
the middleware chain and the handler. It bundles the response writer, the
request, the matched path parameters, and a read-only reference to the
engine (for templates and the validator). It is never shared across
requests.

Usage::

    @engine.get("/users/:id")
    async def show_user(ctx: Context) -> None:
        page = ctx.default_query_int("page", 1)
        await ctx.json(200, {"id": ctx.param("id"), "page": page})
"""

from __future__ import annotations

import json as json_module
from typing import TYPE_CHECKING, Any

from mows.binding import bind, is_bindable
from mows.errors import (
    ContentTypeError,
    EmptyBodyError,
    MalformedBodyError,
    TemplatesNotLoadedError,
)
from mows.http.request import Request
from mows.http.writer import ResponseWriter

if TYPE_CHECKING:
    from mows.app import Engine


def _dumps(value: Any) -> bytes:
    return json_module.dumps(value, separators=(",", ":"), default=str).encode("utf-8")


class Context:
    """Request-scoped state and response helpers.

    Writing the response is expected to happen once. A second call to a
    response helper appends to the body already sent; the status line from
    the first write stands.
    """

    __slots__ = ("_engine", "params", "request", "writer")

    def __init__(self, writer: ResponseWriter, request: Request, engine: Engine) -> None:
        self.writer = writer
        self.request = request
        self.params: dict[str, str] = {}
        self._engine = engine

    def __repr__(self) -> str:
        return f"Context({self.request.method} {self.request.path})"

    @property
    def engine(self) -> Engine:
        return self._engine

    # -- Responses --

    def set_header(self, name: str, value: str) -> None:
        """Set a response header. Has no effect once the response has started."""
        self.writer.headers[name] = value

    async def json(self, status: int, value: Any) -> None:
        """Write *value* as a compact JSON body."""
        self.writer.headers["content-type"] = "application/json"
        await self.writer.write_header(status)
        await self.writer.write(_dumps(value))

    async def text(self, status: int, body: str) -> None:
        """Write a plain text body."""
        self.writer.headers.setdefault("content-type", "text/plain; charset=utf-8")
        await self.writer.write_header(status)
        await self.writer.write(body)

    async def html(self, status: int, name: str, data: Any = None) -> None:
        """Render template *name* with *data* and write it as HTML.

        In dev mode the template set is reloaded from disk first.
        """
        templates = self._engine.templates
        if templates is None:
            raise TemplatesNotLoadedError()
        if self._engine.dev_mode and templates.reloadable:
            templates.load()
        body = templates.render(name, data)
        self.writer.headers["content-type"] = "text/html; charset=utf-8"
        await self.writer.write_header(status)
        await self.writer.write(body)

    async def blob(self, status: int, content_type: str, data: bytes) -> None:
        """Write raw bytes with an explicit content type."""
        self.writer.headers["content-type"] = content_type
        await self.writer.write_header(status)
        await self.writer.write(data)

    async def no_content(self, status: int = 204) -> None:
        await self.writer.write_header(status)

    async def redirect(self, status: int, location: str) -> None:
        """Send a redirect to *location* (use a 3xx *status*)."""
        self.writer.headers["location"] = location
        await self.writer.write_header(status)

    # -- Lookups --

    def param(self, name: str) -> str:
        """Return the path parameter *name*, or ``""`` if the route has none."""
        return self.params.get(name, "")

    def header(self, name: str) -> str:
        """Return the request header *name*, or ``""`` if absent."""
        return self.request.headers.get(name) or ""

    def query(self, key: str) -> str:
        return self.request.query.value(key)

    def default_query(self, key: str, default: str) -> str:
        return self.request.query.default_value(key, default)

    def query_int(self, key: str) -> int:
        """Query value as int; ``0`` if missing, ``QueryParamError`` if malformed."""
        return self.request.query.int_value(key)

    def default_query_int(self, key: str, default: int) -> int:
        return self.request.query.default_int(key, default)

    def query_bool(self, key: str) -> bool:
        """Query value as bool; ``False`` if missing, ``QueryParamError`` if malformed."""
        return self.request.query.bool_value(key)

    def default_query_bool(self, key: str, default: bool) -> bool:
        return self.request.query.default_bool(key, default)

    # -- Binding --

    async def bind_json(self, target: Any = None) -> Any:
        """Decode the JSON request body.

        With a dataclass type as *target*, returns a populated instance.
        With ``None`` or ``dict``, returns the decoded value as-is.

        Raises:
            ContentTypeError: Content-Type does not name application/json.
            EmptyBodyError: The body is empty.
            MalformedBodyError: The body is not valid JSON.
            BodyTooLargeError: The body exceeds ``max_body_size``.
            BindingError: A field has the wrong JSON type.
        """
        content_type = self.request.content_type or ""
        if "application/json" not in content_type.lower():
            raise ContentTypeError()

        raw = await self.request.body(limit=self._engine.config.max_body_size)
        if not raw.strip():
            raise EmptyBodyError()

        try:
            data = json_module.loads(raw)
        except (json_module.JSONDecodeError, UnicodeDecodeError) as exc:
            raise MalformedBodyError(f"malformed json body: {exc}") from exc

        if is_bindable(target):
            return bind(target, data)
        return data

    def validate(self, obj: Any) -> None:
        """Check *obj* against its field rules; raises ``ValidationError``."""
        self._engine.validator.struct(obj)

    async def bind_json_and_validate(self, target: Any) -> Any:
        """``bind_json`` followed by ``validate``."""
        obj = await self.bind_json(target)
        self.validate(obj)
        return obj
