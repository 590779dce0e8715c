"""Middleware protocol.

A middleware is any callable matching::

    async def my_mw(ctx: Context, next: Next) -> None: ...

No base class required. The framework checks the shape, not the lineage.
A middleware may do work before and after awaiting ``next(ctx)``, or skip
``next`` entirely to short-circuit the request.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from mows._internal.types import Next

if TYPE_CHECKING:
    from mows.context import Context


class Middleware(Protocol):
    """Protocol for mows middleware.

    Accepts both functions and callable objects::

        # Function middleware
        async def timing(ctx: Context, next: Next) -> None:
            start = time.monotonic()
            await next(ctx)
            elapsed = time.monotonic() - start
            logger.info("%s took %.3fs", ctx.request.path, elapsed)

        # Class middleware
        class RequireToken:
            async def __call__(self, ctx: Context, next: Next) -> None:
                ...
    """

    async def __call__(self, ctx: Context, next: Next) -> None: ...
