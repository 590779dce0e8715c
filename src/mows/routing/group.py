"""Router groups: a shared path prefix plus a shared middleware list.

A group is a resolved snapshot. Nesting concatenates prefixes and copies
the parent's middleware list before appending the child's own, so a child
never changes its parent and needs no back-reference at runtime.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from mows._internal.types import Handler

if TYPE_CHECKING:
    from mows.app import Engine


class RouterGroup:
    """Routes sharing a prefix and middleware.

    Usage::

        api = engine.group("/api", require_token)
        admin = api.group("/admin", audit_log)   # prefix "/api/admin"

        @admin.get("/users/:id")
        async def show_user(ctx):
            await ctx.json(200, {"id": ctx.param("id")})

    Group middleware runs after global middleware and before route-specific
    middleware.
    """

    __slots__ = ("_engine", "middleware", "prefix")

    def __init__(self, engine: Engine, prefix: str = "", middleware: Iterable[Any] = ()) -> None:
        self._engine = engine
        self.prefix = prefix
        self.middleware: list[Any] = list(middleware)

    def __repr__(self) -> str:
        return f"RouterGroup(prefix={self.prefix!r}, middleware={len(self.middleware)})"

    def group(self, prefix: str, *middleware: Any) -> RouterGroup:
        """Create a nested group.

        The prefix is joined by plain string concatenation; duplicate
        slashes are not collapsed.
        """
        return RouterGroup(self._engine, self.prefix + prefix, [*self.middleware, *middleware])

    def use(self, *middleware: Any) -> None:
        """Append middleware for routes registered on this group from now on.

        Routes already registered keep the list they were registered with.
        """
        self._engine._check_not_frozen()
        self.middleware.extend(middleware)

    # -- Registration --

    def add(
        self,
        method: str,
        path: str,
        handler: Handler | None = None,
        *,
        before: Iterable[Handler] = (),
        middleware: Iterable[Any] = (),
    ) -> Any:
        """Register *handler* for *method* at ``prefix + path``.

        *before* handlers run in order ahead of *handler*; each is adapted
        into middleware that continues only if it returns normally.
        *middleware* adds route-scoped middleware after them.

        Without *handler*, returns a decorator::

            @api.add("PATCH", "/users/:id")
            async def patch_user(ctx): ...
        """
        full_path = self.prefix + path
        before = tuple(before)
        middleware = tuple(middleware)

        def register(func: Handler) -> Handler:
            self._engine.add_route(
                method,
                full_path,
                func,
                group_middleware=self.middleware,
                before=before,
                middleware=middleware,
            )
            return func

        if handler is None:
            return register
        return register(handler)

    def get(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a GET route."""
        return self.add("GET", path, handler, **kwargs)

    def post(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a POST route."""
        return self.add("POST", path, handler, **kwargs)

    def put(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a PUT route."""
        return self.add("PUT", path, handler, **kwargs)

    def delete(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a DELETE route."""
        return self.add("DELETE", path, handler, **kwargs)

    def patch(self, path: str, handler: Handler | None = None, **kwargs: Any) -> Any:
        """Register a PATCH route."""
        return self.add("PATCH", path, handler, **kwargs)

