"""Filesystem capability for the pipeline workspace.

The workspace is a directory the pipeline owns outright. ``prepare()``
deletes whatever is there and recreates the root and its ``versions/``
subdirectory, so every run starts from a clean slate. Any files placed in
the root by hand are lost.

All OSErrors are re-raised as WorkspaceIOError.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path

from edgedriver_index.common.exceptions import WorkspaceIOError

logger = logging.getLogger(__name__)

VERSIONS_DIR = "versions"
MANIFEST_FILENAME = "manifest.xml"


class Workspace:
    """Output directory tree rooted at ``root``.

    Example::

        workspace = Workspace(Path("dist"))
        workspace.prepare()
        workspace.write_file(workspace.manifest_path, data)
    """

    def __init__(self, root: Path) -> None:
        """Initialize the workspace.

        Args:
            root: Directory the workspace owns. Need not exist yet.
        """
        self.root = root

    @property
    def versions_dir(self) -> Path:
        return self.root / VERSIONS_DIR

    @property
    def manifest_path(self) -> Path:
        return self.root / MANIFEST_FILENAME

    def exists(self, path: Path) -> bool:
        return path.exists()

    def remove_recursive(self, path: Path) -> None:
        try:
            shutil.rmtree(path)
        except OSError as e:
            raise WorkspaceIOError("remove", str(path), e) from e

    def create_dir(self, path: Path) -> None:
        try:
            path.mkdir(parents=True)
        except OSError as e:
            raise WorkspaceIOError("create", str(path), e) from e

    def write_file(self, path: Path, data: bytes) -> None:
        try:
            path.write_bytes(data)
        except OSError as e:
            raise WorkspaceIOError("write", str(path), e) from e

    def list_files(self, path: Path, suffix: str) -> list[Path]:
        try:
            return [p for p in path.iterdir() if p.suffix == suffix]
        except OSError as e:
            raise WorkspaceIOError("read", str(path), e) from e

    def read_file(self, path: Path) -> bytes:
        try:
            return path.read_bytes()
        except OSError as e:
            raise WorkspaceIOError("read", str(path), e) from e

    def prepare(self) -> None:
        """Wipe the workspace and recreate ``root`` and ``root/versions``.

        Raises:
            WorkspaceIOError: If removal or creation fails.
        """
        if self.exists(self.root):
            logger.info(f"Removing previous workspace at {self.root}")
            self.remove_recursive(self.root)
        self.create_dir(self.root)
        self.create_dir(self.versions_dir)
