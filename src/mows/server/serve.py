"""Serving an engine with pounce.

pounce owns the listener, signal handling, and draining of in-flight
requests on shutdown. It is an optional dependency::

    pip install mows[server]
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from mows.errors import ConfigurationError

if TYPE_CHECKING:
    from mows.app import Engine

logger = logging.getLogger("mows.server")


def parse_address(address: str, *, default_host: str = "127.0.0.1") -> tuple[str, int]:
    """Split ``host:port`` into its parts.

    An empty host (``":8080"``) listens on all interfaces.

    Examples::

        parse_address(":8080")           -> ("0.0.0.0", 8080)
        parse_address("localhost:3000")  -> ("localhost", 3000)
        parse_address("[::1]:8443")      -> ("::1", 8443)
        parse_address("9000")            -> ("127.0.0.1", 9000)
    """
    host, sep, port_str = address.rpartition(":")
    if not sep:
        host = default_host
    elif not host:
        host = "0.0.0.0"
    host = host.strip("[]")
    try:
        port = int(port_str)
    except ValueError:
        msg = f"Invalid listen address {address!r}: port must be an integer."
        raise ConfigurationError(msg) from None
    if not 0 <= port <= 65535:
        msg = f"Invalid listen address {address!r}: port out of range."
        raise ConfigurationError(msg)
    return host, port


def run_server(
    engine: Engine,
    host: str,
    port: int,
    *,
    ssl_certfile: str | None = None,
    ssl_keyfile: str | None = None,
) -> None:
    """Start a pounce server for *engine* and block until it stops."""
    try:
        from pounce.config import ServerConfig
        from pounce.server import Server
    except ImportError as exc:
        msg = "Serving requires pounce. Install it with: pip install mows[server]"
        raise ConfigurationError(msg) from exc

    tls = ssl_certfile is not None
    scheme = "https" if tls else "http"
    if tls:
        logger.info("mows HTTPS server running on %s://%s:%d", scheme, host, port)
    else:
        logger.info("mows server running on %s://%s:%d", scheme, host, port)

    config = ServerConfig(
        host=host,
        port=port,
        workers=engine.config.workers,
        reload=False,
        ssl_certfile=ssl_certfile,
        ssl_keyfile=ssl_keyfile,
    )
    Server(config, engine).run()
