"""Crash recovery middleware.

Without ``Recover`` an unexpected exception escapes the engine and the
ASGI server decides what the client sees. With it, the exception is
logged and the client gets a JSON 500.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mows._internal.types import Next
from mows.errors import MowsError

if TYPE_CHECKING:
    from mows.context import Context

logger = logging.getLogger("mows.server")


class Recover:
    """Turn unexpected exceptions into ``500 {"error": "internal server error"}``.

    ``MowsError`` passes through to the error handler unchanged. Install
    it first so it wraps everything else::

        engine.use(Recover(), Logger())
    """

    __slots__ = ()

    async def __call__(self, ctx: Context, next: Next) -> None:
        try:
            await next(ctx)
        except MowsError:
            raise
        except Exception:
            logger.exception(
                "panic recovered: %s %s", ctx.request.method, ctx.request.path
            )
            await ctx.json(500, {"error": "internal server error"})
