"""Group manifest entries into an OutputIndex.

Entries are folded in listing order into version -> platform ->
ArtifactProperties. A later entry with the same (version, platform) pair
replaces the earlier one. Entries whose names do not parse are logged and
skipped.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence

from edgedriver_index.common.exceptions import (
    NameParseFailure,
    UnexpectedEmptyManifestError,
)
from edgedriver_index.common.names import split_name
from edgedriver_index.data_types import (
    ArtifactProperties,
    ManifestEntry,
    OutputIndex,
)

logger = logging.getLogger(__name__)

# A real listing always has more than one archive.
MIN_ENTRY_COUNT = 2


def check_manifest_not_empty(entries: Sequence[ManifestEntry]) -> None:
    """Reject a listing with one entry or none.

    Raises:
        UnexpectedEmptyManifestError: If fewer than two entries are present.
    """
    if len(entries) < MIN_ENTRY_COUNT:
        raise UnexpectedEmptyManifestError(len(entries))


def aggregate(entries: Sequence[ManifestEntry]) -> OutputIndex:
    """Build an OutputIndex from manifest entries.

    Args:
        entries: Entries in listing order.

    Returns:
        Mapping of version to a mapping of platform to ArtifactProperties.

    Raises:
        UnexpectedEmptyManifestError: If fewer than two entries are given.
    """
    check_manifest_not_empty(entries)

    output: OutputIndex = {}
    skipped = 0
    for entry in entries:
        try:
            version, platform = split_name(entry.name)
        except NameParseFailure as e:
            logger.warning(str(e))
            skipped += 1
            continue

        platforms = output.setdefault(version, {})
        if platform in platforms:
            logger.debug(
                f"Duplicate entry for {version}/{platform}, keeping the later one"
            )
        platforms[platform] = ArtifactProperties.from_entry(entry)

    logger.info(
        f"Aggregated {len(entries) - skipped} entries into "
        f"{len(output)} versions ({skipped} skipped)"
    )
    return output
