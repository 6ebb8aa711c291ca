"""backend-stub - single-route HTTP server on a fixed loopback address."""

__all__ = ["__version__"]

__version__ = "0.1.0"
