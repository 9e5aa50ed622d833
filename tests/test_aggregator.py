"""Tests for grouping entries into an OutputIndex."""

import logging

import pytest

from edgedriver_index.common.aggregator import aggregate
from edgedriver_index.common.exceptions import UnexpectedEmptyManifestError
from edgedriver_index.data_types import ArtifactProperties
from tests.utils import make_entry


def test_groups_by_version_and_platform():
    entries = [
        make_entry("1.0/edgedriver_arm64.zip", etag="A"),
        make_entry("1.0/edgedriver_win32.zip", etag="B"),
        make_entry("2.0/edgedriver_arm64.zip", etag="C"),
    ]

    index = aggregate(entries)

    assert set(index) == {"1.0", "2.0"}
    assert set(index["1.0"]) == {"arm64", "win32"}
    assert set(index["2.0"]) == {"arm64"}
    assert index["2.0"]["arm64"].etag == "C"


def test_last_write_wins():
    entries = [
        make_entry("1.0/edgedriver_arm64.zip", etag="A"),
        make_entry("1.0/edgedriver_arm64.zip", etag="B"),
    ]

    index = aggregate(entries)

    assert index["1.0"]["arm64"] == ArtifactProperties.from_entry(entries[1])
    assert len(index["1.0"]) == 1


def test_unparseable_names_are_skipped_and_logged(caplog):
    entries = [
        make_entry("LICENSE"),
        make_entry("1.0/edgedriver_arm64.zip"),
        make_entry("1.0/readme.txt"),
    ]

    with caplog.at_level(logging.WARNING):
        index = aggregate(entries)

    assert list(index) == ["1.0"]
    assert list(index["1.0"]) == ["arm64"]
    assert "unknown version/platform format: LICENSE" in caplog.text
    assert "unknown version/platform format: 1.0/readme.txt" in caplog.text


def test_all_names_unparseable_gives_empty_index():
    assert aggregate([make_entry("a"), make_entry("b")]) == {}


@pytest.mark.parametrize("count", [0, 1])
def test_degenerate_listing_is_rejected(count):
    entries = [make_entry("1.0/edgedriver_arm64.zip")] * count

    with pytest.raises(UnexpectedEmptyManifestError) as exc_info:
        aggregate(entries)

    assert exc_info.value.entry_count == count


def test_field_projection_renames_only():
    entry = make_entry(
        "1.0/edgedriver_arm64.zip",
        url="https://example.com/x.zip",
        last_modified="Tue, 08 Mar 2022 01:24:31 GMT",
        etag="0x8DA",
        content_length="123",
        content_type="application/octet-stream",
        content_md5="q1Zk==",
    )

    properties = aggregate([entry, make_entry("other")])["1.0"]["arm64"]

    assert properties.url == "https://example.com/x.zip"
    assert properties.last_modified == "Tue, 08 Mar 2022 01:24:31 GMT"
    assert properties.etag == "0x8DA"
    assert properties.md5 == "q1Zk=="
    assert properties.content_length == "123"
    assert properties.content_type == "application/octet-stream"
