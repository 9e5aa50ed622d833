"""Shared fixtures for manifest pipeline tests."""

import asyncio
import threading
from collections.abc import Generator

import pytest
from aiohttp import web

from tests.mock_server import (
    BLOBS,
    USER_AGENTS,
    create_app,
    generate_manifest_xml,
)
from tests.utils import find_free_port


@pytest.fixture
def manifest_xml() -> str:
    """Generate the default container listing.

    Returns:
        XML string listing all mock blobs.
    """
    return generate_manifest_xml()


@pytest.fixture
def expected_blob_count() -> int:
    """The number of blobs in the mock listing."""
    return len(BLOBS)


# =============================================================================
# aiohttp test server fixtures
# =============================================================================


class AioHttpTestServer:
    """Wrapper to run aiohttp server in a background thread."""

    def __init__(self, app: web.Application, port: int) -> None:
        self.app = app
        self.port = port
        self.host = "127.0.0.1"
        self._loop: asyncio.AbstractEventLoop | None = None
        self._runner: web.AppRunner | None = None
        self._thread: threading.Thread | None = None
        self._started = threading.Event()

    @property
    def url(self) -> str:
        """Get the base URL of the server."""
        return f"http://{self.host}:{self.port}"

    @property
    def user_agents(self) -> list[str]:
        """User-Agent headers seen by the manifest route."""
        return self.app[USER_AGENTS]

    def start(self) -> None:
        """Start the server in a background thread."""
        self._thread = threading.Thread(target=self._run_server, daemon=True)
        self._thread.start()
        self._started.wait(timeout=5.0)

    def _run_server(self) -> None:
        """Run the server in an asyncio event loop."""
        self._loop = asyncio.new_event_loop()
        asyncio.set_event_loop(self._loop)

        async def start() -> None:
            self._runner = web.AppRunner(self.app)
            await self._runner.setup()
            site = web.TCPSite(self._runner, self.host, self.port)
            await site.start()

        self._loop.run_until_complete(start())
        self._started.set()
        self._loop.run_forever()

    def stop(self) -> None:
        """Stop the server and clean up resources."""
        if self._loop and self._runner:
            runner = self._runner
            future = asyncio.run_coroutine_threadsafe(
                runner.cleanup(), self._loop
            )
            future.result(timeout=2.0)

        if self._loop:
            self._loop.call_soon_threadsafe(self._loop.stop)

        if self._thread:
            self._thread.join(timeout=2.0)


@pytest.fixture
def manifest_server() -> Generator[AioHttpTestServer, None, None]:
    """Create and start an aiohttp server serving the mock container.

    Yields:
        AioHttpTestServer instance with the manifest app running.
    """
    app = create_app()
    port = find_free_port()
    server = AioHttpTestServer(app, port)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def server_url(manifest_server: AioHttpTestServer) -> str:
    """Get the base URL of the test server.

    Args:
        manifest_server: The test server fixture.

    Returns:
        The base URL string (e.g., "http://127.0.0.1:8080").
    """
    return manifest_server.url
