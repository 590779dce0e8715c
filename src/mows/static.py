"""Static file handlers.

``Engine.static(prefix, root)`` registers ``GET <prefix>/*filepath`` with a
``StaticDirectory`` handler; ``Engine.static_package`` does the same with a
``StaticPackage`` handler reading package data through
``importlib.resources``.

Security: the requested path is resolved (symlinks included) and must stay
under the root directory. Anything outside it is answered with 404, the
same as a missing file, so probing reveals nothing.
"""

from __future__ import annotations

import mimetypes
from importlib import resources
from importlib.resources.abc import Traversable
from pathlib import Path
from typing import TYPE_CHECKING

import anyio
import anyio.to_thread

from mows.server.errors import not_found

if TYPE_CHECKING:
    from mows.context import Context


def guess_content_type(name: str) -> str:
    content_type, _ = mimetypes.guess_type(name)
    if content_type is None:
        return "application/octet-stream"
    if content_type.startswith("text/") or content_type in {
        "application/javascript",
        "application/json",
    }:
        return f"{content_type}; charset=utf-8"
    return content_type


def route_path(prefix: str) -> str:
    """The catch-all route a static prefix registers (``/assets`` -> ``/assets/*filepath``)."""
    return prefix.rstrip("/") + "/*filepath"


class StaticDirectory:
    """Serve files below a directory on disk.

    Usage::

        engine.static("/assets", "./public")
        # GET /assets/css/site.css -> ./public/css/site.css
        # GET /assets/             -> ./public/index.html
    """

    __slots__ = ("cache_control", "directory", "index")

    def __init__(
        self,
        directory: str | Path,
        *,
        index: str = "index.html",
        cache_control: str | None = None,
    ) -> None:
        self.directory = Path(directory).resolve()
        self.index = index
        self.cache_control = cache_control

    def __repr__(self) -> str:
        return f"StaticDirectory({str(self.directory)!r})"

    async def __call__(self, ctx: Context) -> None:
        relative = ctx.param("filepath").lstrip("/")
        root = anyio.Path(self.directory)
        # Malformed names (embedded NUL, overlong) get a 404
        try:
            file_path = await (root / relative).resolve() if relative else root
            if file_path.is_relative_to(root) and await file_path.is_dir():
                file_path = file_path / self.index
            found = file_path.is_relative_to(root) and await file_path.is_file()
        except (ValueError, OSError):
            found = False

        if not found:
            await not_found(ctx.writer)
            return

        body = await file_path.read_bytes()
        await _send_file(ctx, file_path.name, body, self.cache_control)


class StaticPackage:
    """Serve files bundled as package data.

    Usage::

        engine.static_package("/assets", "myapp", "public")
        # GET /assets/app.js -> myapp/public/app.js
    """

    __slots__ = ("cache_control", "index", "package", "root")

    def __init__(
        self,
        package: str,
        root: str = "",
        *,
        index: str = "index.html",
        cache_control: str | None = None,
    ) -> None:
        self.package = package
        self.root = root.strip("/")
        self.index = index
        self.cache_control = cache_control

    def __repr__(self) -> str:
        return f"StaticPackage({self.package!r}, {self.root!r})"

    def _locate(self, relative: str) -> Traversable | None:
        node = resources.files(self.package)
        parts = [p for p in f"{self.root}/{relative}".split("/") if p]
        for part in parts:
            if part in {".", ".."} or "\\" in part:
                return None
            node = node.joinpath(part)
        if node.is_dir():
            node = node.joinpath(self.index)
        if not node.is_file():
            return None
        return node

    async def __call__(self, ctx: Context) -> None:
        entry = await anyio.to_thread.run_sync(self._locate, ctx.param("filepath"))
        if entry is None:
            await not_found(ctx.writer)
            return
        body = await anyio.to_thread.run_sync(entry.read_bytes)
        await _send_file(ctx, entry.name, body, self.cache_control)


async def _send_file(ctx: Context, name: str, body: bytes, cache_control: str | None) -> None:
    ctx.set_header("content-length", str(len(body)))
    if cache_control:
        ctx.set_header("cache-control", cache_control)
    await ctx.blob(200, guess_content_type(name), body)
