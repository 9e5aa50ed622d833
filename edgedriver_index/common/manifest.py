"""Manifest deserialization.

The manifest is an Azure blob container listing::

    <EnumerationResults>
      <Blobs>
        <Blob>
          <Name>...</Name>
          <Url>...</Url>
          <Properties>
            <Last-Modified>...</Last-Modified>
            <Etag>...</Etag>
            <Content-Length>...</Content-Length>
            <Content-Type>...</Content-Type>
            <Content-MD5>...</Content-MD5>
          </Properties>
        </Blob>
      </Blobs>
    </EnumerationResults>

Parsing is tolerant: a missing field becomes an empty string and a
missing ``Blobs`` element becomes an empty listing. Only a document that
is not XML, or whose root is not ``EnumerationResults``, is rejected.
"""

from __future__ import annotations

import logging

from lxml import etree

from edgedriver_index.common.exceptions import ManifestFormatError
from edgedriver_index.data_types import ManifestEntry

logger = logging.getLogger(__name__)

ROOT_TAG = "EnumerationResults"

# Properties child tag -> ManifestEntry field
PROPERTY_FIELDS = {
    "Last-Modified": "last_modified",
    "Etag": "etag",
    "Content-Length": "content_length",
    "Content-Type": "content_type",
    "Content-MD5": "content_md5",
}


def _make_parser() -> etree.XMLParser:
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        huge_tree=True,
        encoding="utf-8",
    )


def parse_manifest(text: str) -> list[ManifestEntry]:
    """Deserialize a manifest document into entries, in listing order.

    Args:
        text: The manifest document as fetched.

    Returns:
        List of ManifestEntry, one per ``<Blob>``.

    Raises:
        ManifestFormatError: If the text is not well-formed XML or the
            root element is not ``EnumerationResults``.
    """
    # lxml rejects str input carrying an encoding declaration, so parse
    # bytes. The parser is pinned to UTF-8 since the text is already decoded.
    data = text.lstrip("\ufeff").encode("utf-8")
    try:
        root = etree.fromstring(data, parser=_make_parser())
    except etree.XMLSyntaxError as e:
        raise ManifestFormatError(
            "document is not well-formed XML", {"detail": str(e)}
        ) from e

    if root is None or root.tag != ROOT_TAG:
        raise ManifestFormatError(
            f"expected <{ROOT_TAG}> root element",
            {"root": None if root is None else root.tag},
        )

    blobs = root.find("Blobs")
    if blobs is None:
        logger.debug("Manifest has no <Blobs> element")
        return []

    return [_parse_blob(blob) for blob in blobs.iterfind("Blob")]


def _parse_blob(blob: etree._Element) -> ManifestEntry:
    fields = {
        "name": _text(blob, "Name"),
        "url": _text(blob, "Url"),
    }
    properties = blob.find("Properties")
    if properties is not None:
        for tag, field in PROPERTY_FIELDS.items():
            fields[field] = _text(properties, tag)
    return ManifestEntry(**fields)


def _text(element: etree._Element, tag: str) -> str:
    return element.findtext(tag, default="").strip()
