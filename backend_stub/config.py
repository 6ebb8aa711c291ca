"""Fixed runtime settings for the backend stub.

There is no configuration file and no environment lookup: the bind address
and the response text are constants of the program. ``HostPort`` exists so
in-process callers (the test suite) can hand ``start()`` a different address.
"""

from __future__ import annotations

from dataclasses import dataclass


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8080

# Body returned for GET /
ROOT_MESSAGE = "Rust backend is running"


@dataclass(frozen=True)
class HostPort:
    """A TCP bind address.

    Port 0 asks the OS for an ephemeral port.
    """
    host: str
    port: int

    def __post_init__(self) -> None:
        if not self.host:
            raise ValueError("host must not be empty")
        if isinstance(self.port, bool) or not isinstance(self.port, int):
            raise ValueError(f"port must be an integer, got {self.port!r}")
        if not (0 <= self.port <= 65535):
            raise ValueError(f"port out of range: {self.port}")

    @property
    def is_ipv6(self) -> bool:
        return ":" in self.host

    def __str__(self) -> str:
        if self.is_ipv6:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"


DEFAULT_ADDRESS = HostPort(DEFAULT_HOST, DEFAULT_PORT)
