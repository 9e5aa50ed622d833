"""edgedriver-index CLI — build and inspect the Edge WebDriver index.

Usage:
    edgedriver-index build                   # Fetch the manifest into ./dist
    edgedriver-index build --root out -v     # Custom root, debug logging
    edgedriver-index list                    # List versions in ./dist
"""

from __future__ import annotations

import logging
from pathlib import Path

import click

from edgedriver_index.common.emitter import load_versions
from edgedriver_index.common.exceptions import EdgeDriverIndexError
from edgedriver_index.common.workspace import Workspace
from edgedriver_index.pipeline import (
    DIST,
    MANIFEST_URL,
    USER_AGENT,
    ManifestPipeline,
)

_root_option = click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=Path),
    default=DIST,
    show_default=True,
    help="Workspace root directory.",
)


@click.group()
@click.version_option(package_name="edgedriver-index")
def cli() -> None:
    """edgedriver-index — Edge WebDriver release index builder."""


@cli.command()
@_root_option
@click.option(
    "--url",
    default=MANIFEST_URL,
    show_default=True,
    help="Manifest URL.",
)
@click.option(
    "--user-agent",
    default=USER_AGENT,
    show_default=True,
    help="User-Agent header for the manifest request.",
)
@click.option(
    "--timeout",
    type=float,
    default=None,
    help="Request timeout in seconds (default: none).",
)
@click.option("-v", "--verbose", is_flag=True, help="Verbose logging.")
def build(
    root: Path,
    url: str,
    user_agent: str,
    timeout: float | None,
    verbose: bool,
) -> None:
    """Fetch the manifest and write one JSON file per version.

    The root directory is deleted and recreated on every run.

    \b
    Examples:
        edgedriver-index build
        edgedriver-index build --root /srv/edgedriver --timeout 60
    """
    log_level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    pipeline = ManifestPipeline(
        root=root,
        manifest_url=url,
        user_agent=user_agent,
        timeout=timeout,
    )
    click.echo(f"Root:     {pipeline.resolve_root()}")
    click.echo(f"Manifest: {url}")

    try:
        result = pipeline.run()
    except EdgeDriverIndexError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}") from e

    click.echo(f"Versions: {len(result.version_files)}")
    click.echo("Done.")


@cli.command("list")
@_root_option
def list_versions(root: Path) -> None:
    """List versions and platforms in an existing workspace."""
    try:
        index = load_versions(Workspace(root))
    except EdgeDriverIndexError as e:
        raise click.ClickException(f"{type(e).__name__}: {e}") from e

    if not index:
        click.echo("No versions found.")
        return

    for version, platforms in index.items():
        click.echo(f"{version}  {', '.join(platforms)}")


def main() -> None:
    """Entry point for the ``edgedriver-index`` console script."""
    cli()
