"""Async test client for mows engines.

Sends requests through the ASGI interface directly, no HTTP involved, so
tests exercise exactly the pipeline a server would.
"""

from __future__ import annotations

import json as json_module
from dataclasses import dataclass
from typing import Any

from mows.app import Engine


@dataclass(frozen=True, slots=True)
class TestResponse:
    """A captured response."""

    __test__ = False  # Tell pytest this is not a test class

    status: int
    headers: dict[str, str]
    body: bytes

    @property
    def text(self) -> str:
        return self.body.decode("utf-8")

    @property
    def content_type(self) -> str:
        return self.headers.get("content-type", "")

    def json(self) -> Any:
        return json_module.loads(self.body)


class TestClient:
    """Async test client for mows engines.

    Usage::

        async with TestClient(engine) as client:
            response = await client.get("/ping")
            assert response.status == 200
            assert response.json() == {"message": "pong"}

    Entering the client freezes the engine and runs its startup hooks;
    leaving it runs the shutdown hooks.
    """

    __test__ = False  # Tell pytest this is not a test class

    __slots__ = ("client", "engine")

    def __init__(self, engine: Engine, *, client: tuple[str, int] = ("127.0.0.1", 50000)) -> None:
        self.engine = engine
        self.client = client

    async def __aenter__(self) -> TestClient:
        self.engine._ensure_frozen()
        await self.engine.startup()
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.engine.shutdown()

    async def get(self, path: str, *, headers: dict[str, str] | None = None) -> TestResponse:
        """Send a GET request."""
        return await self.request("GET", path, headers=headers)

    async def post(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send a POST request. ``json=`` encodes the body and sets the content type."""
        return await self.request("POST", path, headers=headers, body=body, json=json)

    async def put(
        self,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send a PUT request."""
        return await self.request("PUT", path, headers=headers, body=body, json=json)

    async def delete(self, path: str, *, headers: dict[str, str] | None = None) -> TestResponse:
        """Send a DELETE request."""
        return await self.request("DELETE", path, headers=headers)

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        body: bytes | None = None,
        json: Any = None,
    ) -> TestResponse:
        """Send an arbitrary request through the ASGI app."""
        request_headers: dict[str, str] = {}
        request_body = body or b""
        if json is not None:
            request_body = json_module.dumps(json).encode("utf-8")
            request_headers["content-type"] = "application/json"
        request_headers.update(headers or {})

        # Split path and query string
        path_part, _, query_string = path.partition("?")

        raw_headers = [
            (name.lower().encode("latin-1"), value.encode("latin-1"))
            for name, value in request_headers.items()
        ]
        if request_body:
            raw_headers.append((b"content-length", str(len(request_body)).encode("latin-1")))

        scope: dict[str, Any] = {
            "type": "http",
            "asgi": {"version": "3.0"},
            "http_version": "1.1",
            "method": method.upper(),
            "scheme": "http",
            "path": path_part,
            "raw_path": path_part.encode("latin-1"),
            "query_string": query_string.encode("latin-1"),
            "root_path": "",
            "headers": raw_headers,
            "server": ("testserver", 80),
            "client": self.client,
        }

        body_sent = False

        async def receive() -> dict[str, Any]:
            nonlocal body_sent
            if not body_sent:
                body_sent = True
                return {"type": "http.request", "body": request_body, "more_body": False}
            return {"type": "http.disconnect"}

        status = 200
        response_headers: dict[str, str] = {}
        body_parts: list[bytes] = []

        async def send(message: dict[str, Any]) -> None:
            nonlocal status
            if message["type"] == "http.response.start":
                status = message["status"]
                for name_b, value_b in message.get("headers", []):
                    response_headers[name_b.decode("latin-1")] = value_b.decode("latin-1")
            elif message["type"] == "http.response.body":
                body_parts.append(message.get("body", b""))

        await self.engine(scope, receive, send)

        return TestResponse(status=status, headers=response_headers, body=b"".join(body_parts))
