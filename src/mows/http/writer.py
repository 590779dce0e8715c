"""Response writer: the per-request handle on ASGI ``send``.

Handlers and middleware write the response through this object. It records
the status code and the number of body bytes written so middleware such as
``Logger`` can report them after the chain returns.
"""

import logging

from mows._internal.asgi import Send
from mows.http.headers import ResponseHeaders

logger = logging.getLogger("mows.server")


def body_allowed(status: int) -> bool:
    """Whether an HTTP status code permits a response body."""
    # RFC: 1xx, 204, and 304 responses do not include a message body.
    return not (100 <= status < 200 or status in {204, 304})


class ResponseWriter:
    """Streams one HTTP response to the ASGI server.

    The status line goes out on the first ``write_header`` (or implicitly,
    as ``200``, on the first ``write``). Headers must be set before that.
    A second ``write_header`` is logged and ignored, matching the usual
    HTTP writer contract.

    Usage::

        writer.headers["content-type"] = "text/plain; charset=utf-8"
        await writer.write_header(201)
        await writer.write(b"created")
        await writer.finish()
    """

    __slots__ = ("_finished", "_send", "_started", "headers", "size", "status")

    def __init__(self, send: Send) -> None:
        self._send = send
        self.headers = ResponseHeaders()
        self.status = 200
        self.size = 0
        self._started = False
        self._finished = False

    @property
    def written(self) -> bool:
        """True once the status line has been sent."""
        return self._started

    @property
    def finished(self) -> bool:
        return self._finished

    async def write_header(self, status: int) -> None:
        """Send the status line and headers."""
        if self._started:
            logger.warning(
                "superfluous write_header(%d): response already started with %d",
                status,
                self.status,
            )
            return
        self.status = status
        self._started = True
        await self._send(
            {
                "type": "http.response.start",
                "status": status,
                "headers": self.headers.raw(),
            }
        )

    async def write(self, data: bytes | str) -> int:
        """Write a body chunk, sending a ``200`` status line first if needed.

        Returns the number of bytes written.
        """
        if not self._started:
            await self.write_header(200)
        if isinstance(data, str):
            data = data.encode("utf-8")
        if not data or not body_allowed(self.status):
            return 0
        await self._send({"type": "http.response.body", "body": data, "more_body": True})
        self.size += len(data)
        return len(data)

    async def finish(self) -> None:
        """Close the response body. Safe to call more than once."""
        if self._finished:
            return
        if not self._started:
            await self.write_header(self.status)
        self._finished = True
        await self._send({"type": "http.response.body", "body": b"", "more_body": False})
