"""Shared type aliases used across mows modules."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, TypeAlias

if TYPE_CHECKING:
    from mows.context import Context

# Route handler: receives the request Context, writes through it
Handler: TypeAlias = Callable[["Context"], Any]

# The next handler in a middleware chain
Next: TypeAlias = Callable[["Context"], Awaitable[None]]

# Error handler: receives (ctx, exc) and writes a response
ErrorHandler: TypeAlias = Callable[["Context", Exception], Any]
