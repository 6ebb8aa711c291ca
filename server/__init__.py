"""Server package for the backend stub.

This package contains:
- The FastAPI application with its single ``GET /`` route
- The TCP listener that binds the address and runs uvicorn on it
"""

from .api import (
    # FastAPI application
    app,
    create_app,
)

from .listener import (
    # Errors
    BindError,
    # Functions
    bind,
    build_server,
    start,
)

__all__ = [
    # FastAPI application
    "app",
    "create_app",
    # Listener - Errors
    "BindError",
    # Listener - Functions
    "bind",
    "build_server",
    "start",
]
