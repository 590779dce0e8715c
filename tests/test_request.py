"""Tests for mows.http.request — frozen Request with async body access."""

import dataclasses

import pytest

from mows.errors import BodyTooLargeError
from mows.http.request import Request


def _make_scope(**overrides: object) -> dict[str, object]:
    """Build a minimal valid ASGI HTTP scope."""
    base: dict[str, object] = {
        "type": "http",
        "asgi": {"version": "3.0"},
        "http_version": "1.1",
        "method": "GET",
        "path": "/",
        "raw_path": b"/",
        "query_string": b"",
        "root_path": "",
        "headers": [],
        "server": ("localhost", 8000),
        "client": ("127.0.0.1", 54321),
    }
    base.update(overrides)
    return base


def _make_receive(*bodies: bytes):
    """Create an ASGI receive callable that yields bodies."""
    messages = []
    for i, body in enumerate(bodies):
        is_last = i == len(bodies) - 1
        messages.append({"type": "http.request", "body": body, "more_body": not is_last})
    if not messages:
        messages.append({"type": "http.request", "body": b"", "more_body": False})
    it = iter(messages)

    async def receive():
        return next(it)

    return receive


class TestRequestFromASGI:
    def test_basic_fields(self) -> None:
        req = Request.from_asgi(_make_scope(method="POST", path="/users"), _make_receive())

        assert req.method == "POST"
        assert req.path == "/users"
        assert req.http_version == "1.1"
        assert req.server == ("localhost", 8000)
        assert req.client == ("127.0.0.1", 54321)

    def test_headers_and_query(self) -> None:
        scope = _make_scope(
            headers=[(b"content-type", b"application/json"), (b"content-length", b"12")],
            query_string=b"q=hello",
        )
        req = Request.from_asgi(scope, _make_receive())

        assert req.content_type == "application/json"
        assert req.content_length == 12
        assert req.query["q"] == "hello"

    def test_missing_server_and_client(self) -> None:
        scope = _make_scope()
        del scope["server"]
        del scope["client"]
        req = Request.from_asgi(scope, _make_receive())

        assert req.server is None
        assert req.client is None
        assert req.remote_addr == ""

    def test_remote_addr(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        assert req.remote_addr == "127.0.0.1:54321"

    def test_url_includes_query(self) -> None:
        req = Request.from_asgi(_make_scope(path="/s", query_string=b"q=1"), _make_receive())
        assert req.url == "/s?q=1"

    def test_frozen(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive())
        with pytest.raises(dataclasses.FrozenInstanceError):
            req.method = "POST"  # type: ignore[misc]


class TestRequestBody:
    async def test_body_joins_chunks(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"hello ", b"world"))
        assert await req.body() == b"hello world"

    async def test_body_is_cached(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"once"))
        assert await req.body() == b"once"
        assert await req.body() == b"once"

    async def test_text_and_json(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b'{"a": [1, 2]}'))
        assert await req.json() == {"a": [1, 2]}
        assert await req.text() == '{"a": [1, 2]}'

    async def test_limit(self) -> None:
        req = Request.from_asgi(_make_scope(), _make_receive(b"12345", b"67890"))
        with pytest.raises(BodyTooLargeError) as exc_info:
            await req.body(limit=8)
        assert exc_info.value.limit == 8

    async def test_disconnect_ends_stream(self) -> None:
        messages = iter([
            {"type": "http.request", "body": b"part", "more_body": True},
            {"type": "http.disconnect"},
        ])

        async def receive():
            return next(messages)

        req = Request.from_asgi(_make_scope(), receive)
        assert await req.body() == b"part"
