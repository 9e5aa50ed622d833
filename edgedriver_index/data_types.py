"""Core data types for the manifest pipeline.

This module defines the typed form of the remote blob listing and the
normalized records written to disk:

- ManifestEntry: one ``<Blob>`` from the listing, with every metadata
  field defaulting to an empty string.
- ArtifactProperties: the output-facing record for one (version, platform)
  pair. Field order here is the field order in the emitted JSON.
- OutputIndex: version -> platform -> ArtifactProperties.
"""

from __future__ import annotations

from typing import NewType

from pydantic import BaseModel, ConfigDict, Field

Version = NewType("Version", str)
Platform = NewType("Platform", str)


class ManifestEntry(BaseModel):
    """One listed artifact from the manifest.

    Attributes:
        name: Raw identifier, ``"<version>/<platform-file>"``.
        url: Download location.
        last_modified: ``Last-Modified`` property.
        etag: ``Etag`` property.
        content_length: ``Content-Length`` property, kept as a string.
        content_type: ``Content-Type`` property.
        content_md5: ``Content-MD5`` property.
    """

    model_config = ConfigDict(frozen=True)

    name: str = ""
    url: str = ""
    last_modified: str = ""
    etag: str = ""
    content_length: str = ""
    content_type: str = ""
    content_md5: str = ""


class ArtifactProperties(BaseModel):
    """Normalized properties for one (version, platform) archive.

    Serialized with camelCase keys via ``model_dump(by_alias=True)``.
    """

    model_config = ConfigDict(populate_by_name=True)

    url: str = ""
    last_modified: str = Field(default="", alias="lastModified")
    etag: str = ""
    md5: str = ""
    content_length: str = Field(default="", alias="contentLength")
    content_type: str = Field(default="", alias="contentType")

    @classmethod
    def from_entry(cls, entry: ManifestEntry) -> ArtifactProperties:
        """Project a ManifestEntry onto output field names."""
        return cls(
            url=entry.url,
            last_modified=entry.last_modified,
            etag=entry.etag,
            md5=entry.content_md5,
            content_length=entry.content_length,
            content_type=entry.content_type,
        )


OutputIndex = dict[Version, dict[Platform, ArtifactProperties]]
