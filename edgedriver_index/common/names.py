"""Entry name parsing.

Manifest entries are named ``<version>/edgedriver_<platform>.zip``, e.g.
``100.0.1154.0/edgedriver_arm64.zip``. This module splits such a name into
its Version and Platform. Parsing is pure: callers decide whether to log
and skip a name that does not match.
"""

from __future__ import annotations

from edgedriver_index.common.exceptions import NameParseFailure
from edgedriver_index.data_types import Platform, Version

PLATFORM_PREFIX = "edgedriver_"
PLATFORM_SUFFIX = ".zip"


def split_name(name: str) -> tuple[Version, Platform]:
    """Split an entry name into (version, platform).

    Args:
        name: Raw entry name from the manifest.

    Returns:
        Tuple of (Version, Platform).

    Raises:
        NameParseFailure: If the name is not exactly two ``/``-separated
            segments, the version is empty, or the file segment is not
            ``edgedriver_<platform>.zip`` with a non-empty platform.
    """
    sides = name.split("/")
    if len(sides) != 2:
        raise NameParseFailure(name, f"expected 2 segments, got {len(sides)}")

    version_raw, file_raw = sides
    if not version_raw:
        raise NameParseFailure(name, "empty version")

    if not file_raw.startswith(PLATFORM_PREFIX):
        raise NameParseFailure(name, f"missing prefix {PLATFORM_PREFIX!r}")
    if not file_raw.endswith(PLATFORM_SUFFIX):
        raise NameParseFailure(name, f"missing suffix {PLATFORM_SUFFIX!r}")

    # Prefix and suffix must not overlap.
    wrapper_length = len(PLATFORM_PREFIX) + len(PLATFORM_SUFFIX)
    if len(file_raw) <= wrapper_length:
        raise NameParseFailure(name, "empty platform")

    platform_raw = file_raw[len(PLATFORM_PREFIX) : -len(PLATFORM_SUFFIX)]

    return Version(version_raw), Platform(platform_raw)


def parse_version_and_platform(name: str) -> tuple[Version, Platform] | None:
    """Parse an entry name, returning None if it does not match.

    Example::

        parse_version_and_platform("100.0.1154.0/edgedriver_arm64.zip")
        # -> ("100.0.1154.0", "arm64")
    """
    try:
        return split_name(name)
    except NameParseFailure:
        return None
