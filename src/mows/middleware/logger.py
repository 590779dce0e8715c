"""Access logging middleware."""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import TYPE_CHECKING

from mows._internal.types import Next

if TYPE_CHECKING:
    from mows.context import Context

access_logger = logging.getLogger("mows.access")


def format_latency(seconds: float) -> str:
    """Render a duration with a unit that keeps it readable (``850µs``, ``1.2ms``)."""
    if seconds < 1e-3:
        return f"{seconds * 1e6:.0f}µs"
    if seconds < 1:
        return f"{seconds * 1e3:.3f}ms"
    return f"{seconds:.3f}s"


class Logger:
    """Log one line per successfully handled request.

    Format::

        [2026-10-18 14:02:11] 200 | 1.204ms | GET /users/42 | 127.0.0.1:52114

    Requests that end in an exception are not logged here; the error
    propagates to the error handler (or ``Recover``) untouched.

    Usage::

        engine.use(Logger())
    """

    __slots__ = ("logger",)

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self.logger = logger or access_logger

    async def __call__(self, ctx: Context, next: Next) -> None:
        start = time.perf_counter()
        await next(ctx)
        latency = time.perf_counter() - start

        self.logger.info(
            "[%s] %d | %s | %s %s | %s",
            datetime.now().strftime("%Y-%m-%d %H:%M:%S"),
            ctx.writer.status,
            format_latency(latency),
            ctx.request.method,
            ctx.request.path,
            ctx.request.remote_addr,
        )
