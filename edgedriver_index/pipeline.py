"""Manifest pipeline driver.

ManifestPipeline runs the whole job as a strict sequence:

1. Resolve the working root.
2. Wipe and recreate the workspace (root and ``versions/``).
3. Fetch the manifest and save it verbatim as ``manifest.xml``, before
   any parsing, so a bad document is still left on disk for inspection.
4. Parse, check the listing is not degenerate, aggregate, and emit one
   JSON file per version.

Any failure aborts the run. Nothing written before the failure is rolled
back.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from edgedriver_index import __version__
from edgedriver_index.common.aggregator import aggregate
from edgedriver_index.common.emitter import emit_versions
from edgedriver_index.common.manifest import parse_manifest
from edgedriver_index.common.request_manager import fetch_manifest
from edgedriver_index.common.workspace import Workspace

logger = logging.getLogger(__name__)

MANIFEST_URL = "https://msedgedriver.azureedge.net"
USER_AGENT = f"edgedriver-index {__version__}"
DIST = "dist"

# (url, user_agent) -> manifest text
Fetcher = Callable[[str, str], str]


@dataclass(frozen=True)
class PipelineResult:
    """Outcome of a successful pipeline run.

    Attributes:
        root: Resolved workspace root.
        manifest_path: Where the raw manifest was saved.
        version_files: One path per version written, in index order.
        entry_count: Number of entries in the manifest.
    """

    root: Path
    manifest_path: Path
    version_files: list[Path]
    entry_count: int


class ManifestPipeline:
    """Fetches the manifest and writes the per-version index.

    Example::

        pipeline = ManifestPipeline(root=Path.cwd() / "dist")
        result = pipeline.run()
        print(len(result.version_files))
    """

    def __init__(
        self,
        root: Path | None = None,
        fetch: Fetcher | None = None,
        manifest_url: str = MANIFEST_URL,
        user_agent: str = USER_AGENT,
        timeout: float | None = None,
    ) -> None:
        """Initialize the pipeline.

        Args:
            root: Workspace root. Defaults to ``<cwd>/dist``.
            fetch: Transport callable taking (url, user_agent) and returning
                the body text. Defaults to an httpx-backed fetch.
            manifest_url: Manifest location.
            user_agent: User-Agent header sent with the fetch.
            timeout: Request timeout for the default fetch. None means none.
        """
        self.root = root
        self.manifest_url = manifest_url
        self.user_agent = user_agent
        self.timeout = timeout
        self._fetch = fetch or self._default_fetch

    def _default_fetch(self, url: str, user_agent: str) -> str:
        return fetch_manifest(url, user_agent, timeout=self.timeout)

    def resolve_root(self) -> Path:
        root = self.root if self.root is not None else Path.cwd() / DIST
        return root.resolve()

    def run(self) -> PipelineResult:
        """Run fetch, parse, aggregate and emit.

        Returns:
            PipelineResult describing what was written.

        Raises:
            WorkspaceIOError: If the workspace cannot be prepared or written.
            TransportError: If the manifest cannot be fetched.
            ManifestFormatError: If the manifest cannot be parsed.
            UnexpectedEmptyManifestError: If the manifest lists <= 1 entries.
        """
        workspace = Workspace(self.resolve_root())
        workspace.prepare()
        logger.info(f"Prepared workspace at {workspace.root}")

        manifest = self._fetch(self.manifest_url, self.user_agent)
        raw = manifest.encode("utf-8")
        workspace.write_file(workspace.manifest_path, raw)
        logger.info(
            f"Fetched manifest from {self.manifest_url} ({len(raw)} bytes)"
        )

        entries = parse_manifest(manifest)
        logger.info(f"Parsed {len(entries)} manifest entries")

        index = aggregate(entries)
        version_files = emit_versions(index, workspace)
        logger.info(
            f"Wrote {len(version_files)} version files to {workspace.versions_dir}"
        )

        return PipelineResult(
            root=workspace.root,
            manifest_path=workspace.manifest_path,
            version_files=version_files,
            entry_count=len(entries),
        )
