"""
Shared test fixtures for backend stub tests.

This module provides pytest fixtures for unit and integration tests,
including:
- An in-process FastAPI TestClient
- A live uvicorn server on an ephemeral loopback port
"""

import sys
import threading
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Generator, Iterator, Tuple

import pytest
from fastapi.testclient import TestClient

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from backend_stub.config import HostPort  # noqa: E402
from server.api import create_app  # noqa: E402
from server.listener import bind, build_server  # noqa: E402


# Seconds to wait for uvicorn to report it has started
SERVER_START_TIMEOUT = 10.0


@contextmanager
def run_live_server(address: HostPort) -> Iterator[Tuple[str, int]]:
    """Serve the app on ``address`` from a background thread.

    Yields:
        Tuple of (base URL, bound port).
    """
    sock = bind(address)
    port = sock.getsockname()[1]
    server = build_server(create_app())
    thread = threading.Thread(
        target=server.run,
        kwargs={"sockets": [sock]},
        daemon=True,
    )
    thread.start()

    try:
        deadline = time.monotonic() + SERVER_START_TIMEOUT
        while not server.started:
            if not thread.is_alive() or time.monotonic() > deadline:
                raise RuntimeError(f"Server failed to start on port {port}")
            time.sleep(0.01)

        yield f"http://127.0.0.1:{port}", port
    finally:
        server.should_exit = True
        thread.join(timeout=5)
        sock.close()


# =============================================================================
# Function-scoped fixtures (created fresh for each test)
# =============================================================================

@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for a fresh FastAPI app."""
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def live_server() -> Generator[Tuple[str, int], None, None]:
    """Start a real server on an ephemeral port.

    Yields:
        Tuple of (base URL, bound port), e.g. ("http://127.0.0.1:41234", 41234)
    """
    with run_live_server(HostPort("127.0.0.1", 0)) as server_info:
        yield server_info


# =============================================================================
# Test markers
# =============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers", "unit: Unit tests (in-process, no subprocesses)"
    )
    config.addinivalue_line(
        "markers", "integration: Integration tests (real sockets, subprocesses)"
    )
    config.addinivalue_line(
        "markers", "slow: Tests that take longer than 10 seconds"
    )
