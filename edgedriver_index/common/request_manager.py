"""HTTP transport for fetching the manifest.

This module provides SyncRequestManager, which owns an httpx.Client and
turns a GET of the manifest URL into its body text, plus fetch_manifest(),
the plain-function form the pipeline takes as its transport.

No retries or backoff happen here. Any failure is a TransportError.
"""

from __future__ import annotations

import logging
from typing import Any

import httpx

from edgedriver_index.common.exceptions import TransportError

logger = logging.getLogger(__name__)


class SyncRequestManager:
    """Manages HTTP requests for the manifest fetch.

    Example::

        with SyncRequestManager(timeout=30.0) as manager:
            text = manager.fetch_text(url, user_agent)
    """

    def __init__(self, timeout: float | None = None) -> None:
        """Initialize the request manager.

        Args:
            timeout: Request timeout in seconds. None means no timeout (default).
        """
        self.timeout = timeout
        self._client = httpx.Client(timeout=timeout, follow_redirects=True)

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> SyncRequestManager:
        """Context manager entry."""
        return self

    def __exit__(self, *args: Any) -> None:
        """Context manager exit - closes the client."""
        self.close()

    def fetch_text(self, url: str, user_agent: str) -> str:
        """GET ``url`` with the given User-Agent and return the body text.

        Args:
            url: Absolute URL to fetch.
            user_agent: Value for the ``User-Agent`` header.

        Returns:
            The full response body decoded as text.

        Raises:
            TransportError: On any httpx error or a non-2xx status.
        """
        try:
            http_response = self._client.get(
                url, headers={"User-Agent": user_agent}
            )
        except httpx.TimeoutException as e:
            logger.error(f"Request to {url} timed out after {self.timeout}s")
            raise TransportError(url, f"timed out: {e}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(url, f"{type(e).__name__}: {e}") from e

        if not http_response.is_success:
            logger.error(f"HTTP {http_response.status_code} from {url}")
            raise TransportError(
                url,
                f"HTTP {http_response.status_code}",
                status_code=http_response.status_code,
            )

        return http_response.text


def fetch_manifest(
    url: str, user_agent: str, timeout: float | None = None
) -> str:
    """Fetch the manifest document with a one-shot request manager."""
    with SyncRequestManager(timeout=timeout) as manager:
        return manager.fetch_text(url, user_agent)
