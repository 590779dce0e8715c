"""mows engine.

Mutable during setup (routes, middleware, templates, hooks).
Frozen at runtime when ``engine.run()`` or ``__call__()`` is first invoked.
"""

import logging
import threading
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any

from mows._internal.asgi import Receive, Scope, Send
from mows._internal.invoke import invoke
from mows._internal.types import ErrorHandler, Handler, Next
from mows.config import EngineConfig
from mows.middleware.chain import build_chain, handler_as_middleware
from mows.routing.group import RouterGroup
from mows.routing.route import Route
from mows.routing.router import Router
from mows.server.errors import default_error_handler
from mows.server.handler import handle_request
from mows.static import StaticDirectory, StaticPackage, route_path
from mows.templating.engine import TemplateEngine
from mows.validation.struct import Validator

logger = logging.getLogger("mows.server")


class Engine:
    """The mows application.

    Usage::

        engine = Engine()
        engine.use(Recover(), Logger())

        @engine.get("/ping")
        async def ping(ctx):
            await ctx.json(200, {"message": "pong"})

        engine.run(":8080")

    An ``Engine`` is an ASGI 3.0 application, so any ASGI server can host
    it; ``run()`` uses pounce.

    Thread safety:
        Setup is single-threaded (decorators at import time). The freeze
        transition uses a Lock + double-check so exactly one thread flips
        it, even when several ASGI workers receive their first request at
        once. After that all registration state is read-only.
    """

    __slots__ = (
        "_dev_mode",
        "_error_handler",
        "_freeze_lock",
        "_frozen",
        "_middleware",
        "_root",
        "_router",
        "_shutdown_hooks",
        "_startup_hooks",
        "_template_funcs",
        "_templates",
        "_validator",
        "config",
    )

    def __init__(self, config: EngineConfig | None = None) -> None:
        self.config: EngineConfig = config or EngineConfig()
        self._router = Router()
        self._middleware: list[Any] = []
        self._root = RouterGroup(self)
        self._validator = Validator()
        self._error_handler: ErrorHandler = default_error_handler
        self._templates: TemplateEngine | None = None
        self._template_funcs: dict[str, Callable[..., Any]] = {}
        self._dev_mode: bool = self.config.dev_mode
        self._startup_hooks: list[Callable[..., Any]] = []
        self._shutdown_hooks: list[Callable[..., Any]] = []
        self._frozen: bool = False
        self._freeze_lock: threading.Lock = threading.Lock()

    def __repr__(self) -> str:
        return f"Engine(routes={len(self._router.routes)}, middleware={len(self._middleware)})"

    # -- Read-only collaborators --

    @property
    def router(self) -> Router:
        return self._router

    @property
    def validator(self) -> Validator:
        return self._validator

    @property
    def templates(self) -> TemplateEngine | None:
        return self._templates

    @property
    def error_handler(self) -> ErrorHandler:
        return self._error_handler

    @property
    def middleware(self) -> tuple[Any, ...]:
        """Global middleware, outermost first."""
        return tuple(self._middleware)

    @property
    def dev_mode(self) -> bool:
        """Reload templates from disk before every render."""
        return self._dev_mode

    @dev_mode.setter
    def dev_mode(self, enabled: bool) -> None:
        self._dev_mode = enabled

    # -- Middleware and groups --

    def use(self, *middleware: Any) -> None:
        """Append global middleware. It wraps every matched route."""
        self._check_not_frozen()
        self._middleware.extend(middleware)

    def group(self, prefix: str, *middleware: Any) -> RouterGroup:
        """Create a route group with a path prefix and its own middleware."""
        return self._root.group(prefix, *middleware)

    def build_chain(self, final: Handler) -> Next:
        """Wrap *final* in the global middleware."""
        return build_chain(self._middleware, final)

    # -- Route registration --

    def add_route(
        self,
        method: str,
        path: str,
        handler: Handler,
        *,
        group_middleware: Iterable[Any] = (),
        before: Iterable[Handler] = (),
        middleware: Iterable[Any] = (),
    ) -> Route:
        """Register a route with its full middleware stack.

        Route middleware runs as: *group_middleware*, then each *before*
        handler, then *middleware*. Global middleware wraps all of it at
        dispatch time.
        """
        self._check_not_frozen()
        if not callable(handler):
            msg = f"Handler for {method} {path} must be callable, got {type(handler).__name__}."
            raise TypeError(msg)
        stack = [
            *group_middleware,
            *(handler_as_middleware(h) for h in before),
            *middleware,
        ]
        route = self._router.add(method, path, handler, stack)
        logger.debug("route registered: %s %s (%d middleware)", method.upper(), path, len(stack))
        return route

    def add(self, method: str, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register *handler* for an arbitrary method. Without it, returns a decorator."""
        return self._root.add(method, path, handler, **kwargs)

    def get(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a GET route."""
        return self._root.get(path, handler, **kwargs)

    def post(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a POST route."""
        return self._root.post(path, handler, **kwargs)

    def put(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a PUT route."""
        return self._root.put(path, handler, **kwargs)

    def delete(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a DELETE route."""
        return self._root.delete(path, handler, **kwargs)

    def patch(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a PATCH route."""
        return self._root.patch(path, handler, **kwargs)

    # -- Errors --

    def set_error_handler(self, handler: ErrorHandler) -> ErrorHandler:
        """Replace the handler that turns a ``MowsError`` into a response.

        Usable as a decorator::

            @engine.set_error_handler
            async def on_error(ctx, exc):
                await ctx.json(422, {"detail": str(exc)})
        """
        self._check_not_frozen()
        if not callable(handler):
            msg = f"Error handler must be callable, got {type(handler).__name__}."
            raise TypeError(msg)
        self._error_handler = handler
        return handler

    # -- Templates --

    def load_templates(self, pattern: str) -> TemplateEngine:
        """Load every template matching the glob *pattern*.

        Raises ``TemplateError`` when the pattern matches nothing.
        """
        return self._load_templates(TemplateEngine(
            pattern,
            funcs=self._template_funcs,
            autoescape=self.config.autoescape,
        ))

    def load_templates_package(self, package: str, pattern: str) -> TemplateEngine:
        """Load templates bundled in *package*. Dev-mode reload does not apply."""
        return self._load_templates(TemplateEngine(
            pattern,
            package=package,
            funcs=self._template_funcs,
            autoescape=self.config.autoescape,
        ))

    def _load_templates(self, templates: TemplateEngine) -> TemplateEngine:
        self._check_not_frozen()
        templates.load()
        self._templates = templates
        return templates

    def add_template_func(self, name: str, func: Callable[..., Any]) -> None:
        """Expose *func* to templates as a global and a filter named *name*.

        Functions added before ``load_templates`` are kept for the load.
        """
        self._check_not_frozen()
        self._template_funcs[name] = func
        if self._templates is not None:
            self._templates.add_func(name, func)

    def template_func(
        self,
        name: str | None = None,
    ) -> Callable[[Callable[..., Any]], Callable[..., Any]]:
        """Register a template function via decorator."""

        def decorator(func: Callable[..., Any]) -> Callable[..., Any]:
            self.add_template_func(name or func.__name__, func)
            return func

        return decorator

    # -- Static files --

    def static(
        self,
        prefix: str,
        root: str | Path,
        *,
        index: str = "index.html",
        cache_control: str | None = None,
    ) -> Route:
        """Serve files under *root* at ``prefix/...``."""
        handler = StaticDirectory(root, index=index, cache_control=cache_control)
        return self.add_route("GET", route_path(prefix), handler)

    def static_package(
        self,
        prefix: str,
        package: str,
        root: str = "",
        *,
        index: str = "index.html",
        cache_control: str | None = None,
    ) -> Route:
        """Serve package data under ``package/root`` at ``prefix/...``."""
        handler = StaticPackage(package, root, index=index, cache_control=cache_control)
        return self.add_route("GET", route_path(prefix), handler)

    # -- Lifecycle hooks --

    def on_startup(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync startup hook via decorator.

        Hooks run in registration order during ASGI lifespan startup,
        before the server begins accepting HTTP requests.
        """
        self._check_not_frozen()
        self._startup_hooks.append(func)
        return func

    def on_shutdown(self, func: Callable[..., Any]) -> Callable[..., Any]:
        """Register an async or sync shutdown hook via decorator.

        Hooks run in registration order during ASGI lifespan shutdown,
        after the server stops accepting new requests.
        """
        self._check_not_frozen()
        self._shutdown_hooks.append(func)
        return func

    # -- Server --

    def run(self, address: str | None = None) -> None:
        """Serve over HTTP until interrupted.

        *address* is ``host:port``; ``":8080"`` listens on all interfaces.
        Defaults to ``config.host`` and ``config.port``.
        """
        from mows.server.serve import parse_address, run_server

        self._ensure_frozen()
        if address is None:
            host, port = self.config.host, self.config.port
        else:
            host, port = parse_address(address, default_host=self.config.host)
        run_server(
            self,
            host,
            port,
            ssl_certfile=self.config.ssl_certfile,
            ssl_keyfile=self.config.ssl_keyfile,
        )

    def run_tls(self, address: str, certfile: str, keyfile: str) -> None:
        """Serve over HTTPS with the given certificate and key files."""
        from mows.server.serve import parse_address, run_server

        self._ensure_frozen()
        host, port = parse_address(address, default_host=self.config.host)
        run_server(self, host, port, ssl_certfile=certfile, ssl_keyfile=keyfile)

    # -- ASGI interface --

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        """ASGI 3.0 entry point."""
        if scope["type"] == "lifespan":
            await self._handle_lifespan(scope, receive, send)
            return

        if scope["type"] != "http":
            return

        self._ensure_frozen()
        await handle_request(scope, receive, send, engine=self)

    async def _handle_lifespan(
        self,
        scope: Scope,
        receive: Receive,
        send: Send,
    ) -> None:
        """Run the ASGI lifespan protocol.

        Freezes the engine at startup, runs the registered hooks, and
        signals completion back to the server.
        """
        self._ensure_frozen()

        while True:
            message = await receive()
            msg_type = message["type"]

            if msg_type == "lifespan.startup":
                try:
                    await self.startup()
                    await send({"type": "lifespan.startup.complete"})
                except Exception as exc:
                    logger.exception("startup failed")
                    await send({"type": "lifespan.startup.failed", "message": str(exc)})
                    return

            elif msg_type == "lifespan.shutdown":
                await self.shutdown()
                await send({"type": "lifespan.shutdown.complete"})
                return

    async def startup(self) -> None:
        """Run startup hooks in registration order."""
        for hook in self._startup_hooks:
            await invoke(hook)

    async def shutdown(self) -> None:
        """Run shutdown hooks in registration order."""
        for hook in self._shutdown_hooks:
            await invoke(hook)
        logger.info("server stopped gracefully")

    # -- Internal --

    def _ensure_frozen(self) -> None:
        """Thread-safe freeze with double-check locking."""
        if self._frozen:
            return
        with self._freeze_lock:
            if self._frozen:
                return
            self._frozen = True
            logger.debug(
                "engine frozen: %d routes, %d global middleware",
                len(self._router.routes),
                len(self._middleware),
            )

    def _check_not_frozen(self) -> None:
        if self._frozen:
            msg = (
                "Cannot modify the engine after it has started serving requests. "
                "Register routes, middleware, and templates before calling engine.run()."
            )
            raise RuntimeError(msg)
