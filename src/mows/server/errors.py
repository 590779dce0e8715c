"""Default responses for failed and unmatched requests."""

import json
import logging

from mows.context import Context
from mows.http.writer import ResponseWriter

logger = logging.getLogger("mows.server")

NOT_FOUND_BODY = b"404 page not found"


async def default_error_handler(ctx: Context, exc: Exception) -> None:
    """Write ``400 {"error": "<message>"}``.

    Installed on every engine until ``Engine.set_error_handler`` replaces
    it. Every ``MowsError`` maps to 400; handlers that need another status
    should write the response themselves or install their own handler.
    """
    if ctx.writer.written:
        logger.warning("error after response started: %s", exc)
        return
    ctx.writer.headers["content-type"] = "application/json"
    await ctx.writer.write_header(400)
    await ctx.writer.write(json.dumps({"error": str(exc)}, separators=(",", ":")))


async def not_found(writer: ResponseWriter) -> None:
    """Write the plain-text 404 used when no route matches."""
    writer.headers["content-type"] = "text/plain; charset=utf-8"
    writer.headers["x-content-type-options"] = "nosniff"
    await writer.write_header(404)
    await writer.write(NOT_FOUND_BODY)
