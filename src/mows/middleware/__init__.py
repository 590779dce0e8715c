"""Middleware — Protocol-based, no inheritance required.

A middleware is any callable matching:
    async def mw(ctx: Context, next: Next) -> None

Built-in middleware:
    Logger -- One access log line per handled request
    Recover -- Turn unexpected exceptions into a JSON 500
"""

from mows._internal.types import Next
from mows.middleware.chain import build_chain, handler_as_middleware
from mows.middleware.logger import Logger
from mows.middleware.protocol import Middleware
from mows.middleware.recover import Recover

__all__ = [
    "Logger",
    "Middleware",
    "Next",
    "Recover",
    "build_chain",
    "handler_as_middleware",
]
