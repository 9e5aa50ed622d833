"""Write an OutputIndex to ``versions/<version>.json`` files.

Each version gets its own file containing a JSON object that maps
platform to its properties, keys in the order ``url, lastModified, etag,
md5, contentLength, contentType``. Output is deterministic, so two runs
over the same manifest produce byte-identical files.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from edgedriver_index.common.exceptions import ManifestFormatError
from edgedriver_index.common.workspace import Workspace
from edgedriver_index.data_types import (
    ArtifactProperties,
    OutputIndex,
    Platform,
    Version,
)

logger = logging.getLogger(__name__)


def serialize_platforms(platforms: dict[Platform, ArtifactProperties]) -> bytes:
    """Serialize one version's platform mapping as pretty-printed JSON."""
    content = json.dumps(
        {
            platform: properties.model_dump(by_alias=True)
            for platform, properties in platforms.items()
        },
        indent=2,
        ensure_ascii=False,
    )
    return content.encode("utf-8")


def emit_versions(index: OutputIndex, workspace: Workspace) -> list[Path]:
    """Write one JSON file per version into the workspace.

    Args:
        index: The aggregated OutputIndex.
        workspace: Prepared workspace whose ``versions_dir`` exists.

    Returns:
        Paths of the files written, in index order.

    Raises:
        WorkspaceIOError: If any file cannot be written. The run is
            aborted; files already written are left in place.
    """
    written: list[Path] = []
    for version, platforms in index.items():
        path = workspace.versions_dir / f"{version}.json"
        workspace.write_file(path, serialize_platforms(platforms))
        logger.debug(f"Wrote {path} ({len(platforms)} platforms)")
        written.append(path)
    return written


def load_versions(workspace: Workspace) -> OutputIndex:
    """Read ``versions/*.json`` back into an OutputIndex.

    Versions are ordered by exact string comparison; platforms keep the
    order they have in each file.

    Raises:
        WorkspaceIOError: If the directory or a file cannot be read.
        ManifestFormatError: If a file is not a valid version record.
    """
    paths = sorted(
        workspace.list_files(workspace.versions_dir, ".json"),
        key=lambda p: p.stem,
    )

    index: OutputIndex = {}
    for path in paths:
        raw = workspace.read_file(path)
        try:
            data = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("expected a JSON object")
            index[Version(path.stem)] = {
                Platform(platform): ArtifactProperties.model_validate(fields)
                for platform, fields in data.items()
            }
        except (ValueError, ValidationError) as e:
            raise ManifestFormatError(
                "invalid version file", {"path": str(path), "detail": str(e)}
            ) from e
    return index
