"""Invoke helper: call sync or async callables uniformly.

Handlers, "before" handlers, and error handlers can be ``def`` or
``async def``. Any code that calls a user-provided callable goes through
this helper so the sync/async check lives in exactly one place.

Usage::

    from mows._internal.invoke import invoke

    await invoke(handler, ctx)
"""

import inspect
from typing import Any


async def invoke(func: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *func* and await the result if it is awaitable.

    Works with both sync and async callables::

        # sync: runs inline, nothing to await
        def require_token(ctx):
            if not ctx.header("Authorization"):
                raise MowsError("missing token")

        # async: the coroutine is awaited
        async def show(ctx):
            await ctx.text(200, "ok")
    """
    result = func(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
