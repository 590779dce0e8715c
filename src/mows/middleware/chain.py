"""Middleware chain composition.

Folds an ordered list of middleware around a terminal handler so that the
first middleware in the list is the outermost wrapper: declaration order
is execution order on the way in, and reverse order on the way out.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Any

from mows._internal.invoke import invoke
from mows._internal.types import Handler, Next

if TYPE_CHECKING:
    from mows.context import Context


def build_chain(middleware: Iterable[Any], final: Handler) -> Next:
    """Wrap *final* in *middleware*, right to left.

    An exception raised anywhere in the chain stops the remaining stages and
    unwinds through the wrappers that already called ``next``.
    """

    async def terminal(ctx: Context) -> None:
        await invoke(final, ctx)

    handler: Next = terminal
    for mw in reversed(list(middleware)):
        inner = handler

        async def make_next(ctx: Context, _mw: Any = mw, _next: Next = inner) -> None:
            await _mw(ctx, _next)

        handler = make_next

    return handler


def handler_as_middleware(handler: Handler) -> Any:
    """Adapt a "before" handler into middleware.

    The handler runs first; if it returns normally, ``next`` runs. An
    exception from either step propagates and halts the chain.
    """

    async def before(ctx: Context, next: Next) -> None:
        await invoke(handler, ctx)
        await next(ctx)

    before.__name__ = getattr(handler, "__name__", "before")
    before.__qualname__ = getattr(handler, "__qualname__", "before")
    return before
