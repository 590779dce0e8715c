"""ASGI handler: one HTTP request through the dispatch pipeline.

The only component that touches raw ASGI http scopes. It builds the typed
``Request`` and ``ResponseWriter``, matches the route, runs the global and
route middleware around the handler, and routes ``MowsError`` failures to
the engine's error handler.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from mows._internal.asgi import Receive, Scope, Send
from mows._internal.invoke import invoke
from mows.context import Context
from mows.errors import MowsError
from mows.http.request import Request
from mows.http.writer import ResponseWriter
from mows.middleware.chain import build_chain
from mows.server.errors import not_found

if TYPE_CHECKING:
    from mows.app import Engine


async def handle_request(
    scope: Scope,
    receive: Receive,
    send: Send,
    *,
    engine: Engine,
) -> None:
    """Process a single HTTP request through the full pipeline.

    An unmatched path gets ``404 page not found`` without running any
    middleware. Exceptions that are not ``MowsError`` propagate to the
    ASGI server unless ``Recover`` is installed.
    """
    request = Request.from_asgi(scope, receive)
    writer = ResponseWriter(send)
    ctx = Context(writer, request, engine)

    match = engine.router.find(request.method, request.path)
    if match is None:
        await not_found(writer)
        await writer.finish()
        return

    ctx.params = match.params

    route_chain = build_chain(match.route.middleware, match.route.handler)
    chain = engine.build_chain(route_chain)

    try:
        await chain(ctx)
    except MowsError as exc:
        await invoke(engine.error_handler, ctx, exc)

    await writer.finish()
