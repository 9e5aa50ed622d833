"""
Edge WebDriver release index builder.

This package fetches the public msedgedriver blob listing, groups the listed
archives by version and platform, and writes one JSON record per version
into a local workspace.

The pipeline lives in ``edgedriver_index.pipeline``; the CLI in
``edgedriver_index.cli``.
"""

__version__ = "0.1.0"
