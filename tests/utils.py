"""Test utilities for manifest pipeline tests."""

import socket
from collections.abc import Callable
from contextlib import closing

from edgedriver_index.data_types import ManifestEntry


def make_entry(name: str, **fields: str) -> ManifestEntry:
    """Build a ManifestEntry with a url derived from its name.

    Example:
        entry = make_entry("1.0/edgedriver_win32.zip", etag="0x1")
    """
    fields.setdefault("url", f"https://example.com/{name}")
    return ManifestEntry(name=name, **fields)


def static_fetch(
    text: str,
) -> tuple[Callable[[str, str], str], list[tuple[str, str]]]:
    """Create a fetch callable that always returns ``text``.

    Returns:
        A tuple of (fetch_function, calls_list). Each call appends its
        (url, user_agent) pair to the calls list.

    Example:
        fetch, calls = static_fetch(manifest_xml)
        ManifestPipeline(root=tmp_path / "dist", fetch=fetch).run()
        assert len(calls) == 1
    """
    calls: list[tuple[str, str]] = []

    def fetch(url: str, user_agent: str) -> str:
        calls.append((url, user_agent))
        return text

    return fetch, calls


def find_free_port() -> int:
    """Find a free port on localhost.

    Returns:
        An available port number.
    """
    with closing(socket.socket(socket.AF_INET, socket.SOCK_STREAM)) as s:
        s.bind(("", 0))
        s.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        return s.getsockname()[1]
