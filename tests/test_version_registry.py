# tests/test_version_registry.py
"""
Tests for mcdata.versions.

Covers:
  - ordering of protocolVersions.json (newest-first on disk, oldest-first in
    the registry, synthetic data versions for entries without one)
  - resolution of exact, prefixed, major, snapshot-only and protocol inputs
  - InvalidVersion for anything else
"""

from __future__ import annotations

import pytest

from mcdata.errors import InvalidVersion, JsonParseError
from mcdata.schema import Edition
from mcdata.versions import VersionRegistry, load_registry, parse_version_string
from tests.fakes.fake_minecraft_data import PC_VERSIONS_ORDERED


@pytest.fixture
def pc_registry(source) -> VersionRegistry:
    return load_registry(source, "pc")


@pytest.fixture
def bedrock_registry(source) -> VersionRegistry:
    return load_registry(source, Edition.BEDROCK)


def test_parse_version_string_prefixes() -> None:
    assert parse_version_string("1.18.2").edition is Edition.PC
    assert parse_version_string("1.18.2").explicit_edition is False

    parsed = parse_version_string("pc_1.16.5")
    assert (parsed.edition, parsed.version, parsed.explicit_edition) == (Edition.PC, "1.16.5", True)

    parsed = parse_version_string("bedrock_1.19.80")
    assert (parsed.edition, parsed.version) == (Edition.BEDROCK, "1.19.80")

    parsed = parse_version_string("1.19.80", default_edition="bedrock")
    assert parsed.edition is Edition.BEDROCK


@pytest.mark.parametrize("raw", ["", "   ", "pc_", "bedrock_"])
def test_parse_version_string_rejects_empty(raw: str) -> None:
    with pytest.raises(InvalidVersion):
        parse_version_string(raw)


def test_registry_orders_oldest_to_newest(pc_registry: VersionRegistry) -> None:
    assert pc_registry.supported_versions() == PC_VERSIONS_ORDERED
    assert [r.ordinal for r in pc_registry.records] == list(range(len(PC_VERSIONS_ORDERED)))


def test_missing_data_version_gets_synthetic_negative(pc_registry: VersionRegistry) -> None:
    old = pc_registry.get("1.8.8")
    assert old is not None
    # Lowest protocol of 13 entries -> rank 12.
    assert old.data_version == -12
    assert old.ordinal == 0


def test_bedrock_registry_without_data_versions(bedrock_registry: VersionRegistry) -> None:
    assert bedrock_registry.supported_versions() == ["1.18.30", "1.19.70", "1.19.80"]
    assert all(r.edition is Edition.BEDROCK for r in bedrock_registry.records)
    assert bedrock_registry.get("1.19.80").data_version == 0


def test_resolve_exact(pc_registry: VersionRegistry) -> None:
    record = pc_registry.resolve("1.18.2")
    assert record.minecraft_version == "1.18.2"
    assert record.version == 758
    assert record.key == "pc_1.18.2"


def test_resolve_major_picks_newest_release(pc_registry: VersionRegistry) -> None:
    # 1.19.4-pre1 is a snapshot and 1.19.4 is newer anyway.
    assert pc_registry.resolve("1.19").minecraft_version == "1.19.4"
    assert pc_registry.resolve("1.16").minecraft_version == "1.16.5"
    assert pc_registry.resolve("1.8").minecraft_version == "1.8.8"


def test_resolve_major_with_only_snapshots(pc_registry: VersionRegistry) -> None:
    record = pc_registry.resolve("1.20")
    assert record.minecraft_version == "23w13a"
    assert not record.is_release


def test_resolve_protocol_number_prefers_newest_release(pc_registry: VersionRegistry) -> None:
    # 1.19.1 and 1.19.2 share protocol 760.
    assert pc_registry.resolve("760").minecraft_version == "1.19.2"
    assert pc_registry.resolve("47").minecraft_version == "1.8.8"


@pytest.mark.parametrize("bad", ["0.0.999", "1.99", "2.0", "999999", "foo"])
def test_resolve_unknown_raises_invalid_version(pc_registry: VersionRegistry, bad: str) -> None:
    with pytest.raises(InvalidVersion) as excinfo:
        pc_registry.resolve(bad)
    assert excinfo.value.version == bad


def test_resolve_is_deterministic(pc_registry: VersionRegistry) -> None:
    first = pc_registry.resolve("1.19")
    for _ in range(5):
        assert pc_registry.resolve("1.19") is first


def test_major_helpers(pc_registry: VersionRegistry) -> None:
    assert pc_registry.oldest_in_major("1.19").minecraft_version == "1.19"
    assert pc_registry.newest_in_major("1.19").minecraft_version == "1.19.4"
    assert pc_registry.oldest_in_major("1.42") is None
    assert pc_registry.newest().minecraft_version == "23w13a"


def test_from_document_tolerates_missing_optional_fields() -> None:
    registry = VersionRegistry.from_document(
        "pc",
        [
            {"minecraftVersion": "1.12.2", "version": 340},
            {"minecraftVersion": "1.12.1", "version": 338, "dataVersion": 1241},
        ],
    )
    newer = registry.get("1.12.2")
    assert newer.major_version == "1.12"
    assert newer.release_type == "release"
    assert newer.uses_netty is True


def test_from_document_duplicate_version_last_wins() -> None:
    registry = VersionRegistry.from_document(
        "pc",
        [
            {"minecraftVersion": "1.12.2", "version": 340, "dataVersion": 1343, "majorVersion": "1.12"},
            {"minecraftVersion": "1.12.2", "version": 340, "dataVersion": 1343,
             "majorVersion": "1.12", "releaseType": "snapshot"},
        ],
    )
    assert len(registry) == 1
    assert registry.get("1.12.2").release_type == "snapshot"


@pytest.mark.parametrize(
    "document",
    [
        {"minecraftVersion": "1.12.2"},
        [{"version": 340}],
        [{"minecraftVersion": "1.12.2", "version": "not-a-number"}],
        ["1.12.2"],
    ],
)
def test_from_document_rejects_bad_shapes(document) -> None:
    with pytest.raises(JsonParseError):
        VersionRegistry.from_document("pc", document)
