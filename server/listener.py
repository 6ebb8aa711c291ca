"""TCP listener and accept loop.

``bind()`` reserves the address and ``start()`` hands the bound socket to
uvicorn, which runs one asyncio event loop and serves every accepted
connection as its own task. Binding happens before uvicorn is involved so
that a failure surfaces as ``BindError`` before anything is announced.

Malformed HTTP on a connection is answered by uvicorn's parser (400 and
close) and never reaches this module.
"""

from __future__ import annotations

import logging
import socket
from typing import Optional

import uvicorn
from fastapi import FastAPI

from backend_stub.config import DEFAULT_ADDRESS, HostPort

from .api import app as default_app


logger = logging.getLogger(__name__)


# Pending-connection queue length handed to listen()
LISTEN_BACKLOG = 2048


class BindError(OSError):
    """The listening socket could not be created or bound."""

    def __init__(self, address: HostPort, cause: OSError):
        reason = cause.strerror or str(cause)
        message = f"cannot bind {address}: {reason}"
        if cause.errno is not None:
            super().__init__(cause.errno, message)
        else:
            super().__init__(message)
        self.address = address
        self.cause = cause

    def __str__(self) -> str:
        return self.strerror or super().__str__()


def bind(address: HostPort = DEFAULT_ADDRESS) -> socket.socket:
    """Create a listening TCP socket on ``address``.

    Raises:
        BindError: If the socket cannot be created, bound or put in
            listening state (address in use, permission denied, address not
            available on this host).
    """
    family = socket.AF_INET6 if address.is_ipv6 else socket.AF_INET
    try:
        sock = socket.socket(family, socket.SOCK_STREAM)
    except OSError as e:
        raise BindError(address, e) from e

    try:
        # Only skips TIME_WAIT; a live listener on the port still makes bind fail
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        sock.bind((address.host, address.port))
        sock.listen(LISTEN_BACKLOG)
    except OSError as e:
        sock.close()
        raise BindError(address, e) from e

    logger.debug("Bound listener on %s (fd=%d)", address, sock.fileno())
    return sock


def announce_line(sock: socket.socket) -> str:
    """Startup line printed once the socket is bound."""
    port = sock.getsockname()[1]
    return f"Server running at http://localhost:{port}"


def build_server(
    app: Optional[FastAPI] = None,
    log_level: str = "warning",
    access_log: bool = False,
) -> uvicorn.Server:
    """Create the uvicorn server that will drive ``app``.

    Args:
        app: ASGI application. Defaults to ``server.api.app``.
        log_level: Level for uvicorn's own loggers.
        access_log: Emit one uvicorn access log line per request.
    """
    if app is None:
        app = default_app

    config = uvicorn.Config(
        app,
        log_level=log_level,
        access_log=access_log,
    )
    return uvicorn.Server(config)


def start(
    address: HostPort = DEFAULT_ADDRESS,
    app: Optional[FastAPI] = None,
    log_level: str = "warning",
    access_log: bool = False,
) -> None:
    """Bind ``address`` and serve forever.

    Prints a single line to stdout after the bind succeeds, then blocks in
    the accept loop. Returns only once uvicorn has shut down.

    Raises:
        BindError: If the address cannot be bound. No retry is attempted.
    """
    sock = bind(address)
    try:
        print(announce_line(sock), flush=True)
        server = build_server(app, log_level=log_level, access_log=access_log)
        logger.info("Serving on %s:%d", *sock.getsockname()[:2])
        server.run(sockets=[sock])
    finally:
        sock.close()
