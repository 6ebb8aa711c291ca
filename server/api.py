"""FastAPI application for the backend stub.

The route table holds a single entry, ``GET /`` (and ``HEAD /``, which
gets the same status and headers without a body), answering with a fixed
plain-text message. Everything else falls through to the framework's
default handling:
- unknown paths get 404 ``{"detail": "Not Found"}``
- other methods on ``/`` get 405 ``{"detail": "Method Not Allowed"}``
  with an ``Allow`` header listing GET and HEAD

The generated OpenAPI/docs routes are switched off so that they do not
show up as extra paths.

Usage:
    from server.listener import start

    start()  # serves server.api.app on 127.0.0.1:8080
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from backend_stub import __version__
from backend_stub.config import ROOT_MESSAGE


# =============================================================================
# Handlers
# =============================================================================


async def root() -> str:
    """Return the fixed status message."""
    return ROOT_MESSAGE


# =============================================================================
# FastAPI application
# =============================================================================


def create_app() -> FastAPI:
    """Build the ASGI application with its single route."""
    application = FastAPI(
        title="Backend stub",
        version=__version__,
        openapi_url=None,
        docs_url=None,
        redoc_url=None,
    )
    application.add_api_route(
        "/",
        root,
        methods=["GET", "HEAD"],
        response_class=PlainTextResponse,
    )
    return application


app = create_app()
