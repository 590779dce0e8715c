"""Tests for mows.static — directory and package file serving."""

import pytest

from mows.app import Engine
from mows.static import guess_content_type, route_path
from mows.testing import TestClient


@pytest.fixture
def static_dir(tmp_path):
    """Create temporary static files for testing."""
    static = tmp_path / "static"
    static.mkdir()

    (static / "style.css").write_text("body { color: red; }")
    (static / "app.js").write_text("console.log('hello');")
    (static / "data.bin").write_bytes(b"\x00\x01\x02\x03")
    (static / "index.html").write_text("<h1>Home</h1>")

    sub = static / "css"
    sub.mkdir()
    (sub / "main.css").write_text("h1 { font-size: 2em; }")

    docs = static / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>Docs</h1>")

    empty = static / "empty"
    empty.mkdir()

    (tmp_path / "secret.txt").write_text("top secret")
    return static


class TestHelpers:
    def test_route_path(self) -> None:
        assert route_path("/assets") == "/assets/*filepath"
        assert route_path("/assets/") == "/assets/*filepath"
        assert route_path("/") == "/*filepath"

    def test_guess_content_type(self) -> None:
        assert guess_content_type("site.css") == "text/css; charset=utf-8"
        assert guess_content_type("logo.png") == "image/png"
        assert guess_content_type("blob.unknownext") == "application/octet-stream"


class TestStaticDirectory:
    async def test_serves_file(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir)

        async with TestClient(engine) as client:
            response = await client.get("/static/style.css")

        assert response.status == 200
        assert response.text == "body { color: red; }"
        assert response.content_type.startswith("text/css")
        assert response.headers["content-length"] == str(len("body { color: red; }"))

    async def test_serves_nested_file(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir)

        async with TestClient(engine) as client:
            response = await client.get("/static/css/main.css")

        assert response.text == "h1 { font-size: 2em; }"

    async def test_binary_file(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir)

        async with TestClient(engine) as client:
            response = await client.get("/static/data.bin")

        assert response.body == b"\x00\x01\x02\x03"

    async def test_directory_index(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir)

        async with TestClient(engine) as client:
            root = await client.get("/static/")
            bare = await client.get("/static")
            docs = await client.get("/static/docs")

        assert root.text == "<h1>Home</h1>"
        assert bare.text == "<h1>Home</h1>"
        assert docs.text == "<h1>Docs</h1>"

    async def test_directory_without_index(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir)

        async with TestClient(engine) as client:
            response = await client.get("/static/empty")

        assert response.status == 404

    async def test_missing_file(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir)

        async with TestClient(engine) as client:
            response = await client.get("/static/nope.css")

        assert response.status == 404
        assert response.text == "404 page not found"

    async def test_traversal_blocked(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir)

        async with TestClient(engine) as client:
            response = await client.get("/static/../secret.txt")

        assert response.status == 404
        assert "top secret" not in response.text

    async def test_malformed_name_is_not_found(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir)

        async with TestClient(engine) as client:
            response = await client.get("/static/style\x00.css")

        assert response.status == 404
        assert response.text == "404 page not found"

    async def test_cache_control(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir, cache_control="public, max-age=3600")

        async with TestClient(engine) as client:
            response = await client.get("/static/app.js")

        assert response.headers["cache-control"] == "public, max-age=3600"

    async def test_only_get_is_registered(self, static_dir) -> None:
        engine = Engine()
        engine.static("/static", static_dir)

        async with TestClient(engine) as client:
            response = await client.post("/static/style.css")

        assert response.status == 404


class TestStaticPackage:
    async def test_serves_package_data(self) -> None:
        engine = Engine()
        engine.static_package("/src", "mows", "")

        async with TestClient(engine) as client:
            response = await client.get("/src/config.py")

        assert response.status == 200
        assert b"EngineConfig" in response.body

    async def test_nested_root(self) -> None:
        engine = Engine()
        engine.static_package("/mw", "mows", "middleware")

        async with TestClient(engine) as client:
            response = await client.get("/mw/recover.py")

        assert response.status == 200
        assert b"class Recover" in response.body

    async def test_missing_resource(self) -> None:
        engine = Engine()
        engine.static_package("/src", "mows", "")

        async with TestClient(engine) as client:
            response = await client.get("/src/does-not-exist.txt")

        assert response.status == 404

    async def test_parent_segments_rejected(self) -> None:
        engine = Engine()
        engine.static_package("/mw", "mows", "middleware")

        async with TestClient(engine) as client:
            response = await client.get("/mw/../config.py")

        assert response.status == 404
