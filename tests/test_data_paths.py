# tests/test_data_paths.py
"""
Tests for mcdata.paths.DataPaths.

Goal:
  - Many versions share one directory (many-to-one mapping).
  - Major-version keys are used when the exact version has no entry.
  - A missing version and a missing kind are distinct errors.
"""

from __future__ import annotations

import pytest

from mcdata.errors import DataPathNotFound, JsonParseError, VersionNotFound
from mcdata.paths import DataPaths, load_data_paths
from mcdata.versions import load_registry


@pytest.fixture
def data_paths(source) -> DataPaths:
    return load_data_paths(source)


@pytest.fixture
def pc(source):
    return load_registry(source, "pc")


def test_shared_directory_across_versions(data_paths: DataPaths, pc) -> None:
    dirs = {
        data_paths.directory_for(pc.get(v), "blocks")
        for v in ("1.19", "1.19.1", "1.19.2", "1.19.3", "1.19.4")
    }
    assert dirs == {"pc/1.19"}


def test_kinds_can_live_in_different_directories(data_paths: DataPaths, pc) -> None:
    record = pc.get("1.18.2")
    assert data_paths.directory_for(record, "blocks") == "pc/1.18"
    assert data_paths.directory_for(record, "windows") == "pc/1.16.1"
    assert data_paths.directory_for(record, "tints") == "pc/1.17"


def test_major_version_key_fallback(data_paths: DataPaths, pc) -> None:
    assert data_paths.directory_for(pc.get("1.8.8"), "blocks") == "pc/1.8"
    assert data_paths.directory_for(pc.get("1.17.1"), "effects") == "pc/1.17"


def test_missing_kind_is_data_path_not_found(data_paths: DataPaths, pc) -> None:
    with pytest.raises(DataPathNotFound) as excinfo:
        data_paths.directory_for(pc.get("1.16.5"), "tints")
    assert excinfo.value.kind == "tints"
    assert excinfo.value.version == "1.16.5"


def test_missing_version_is_version_not_found(data_paths: DataPaths, pc) -> None:
    with pytest.raises(VersionNotFound):
        data_paths.kinds_for(pc.get("23w13a"))


def test_pre_release_falls_back_to_its_major(data_paths: DataPaths, pc) -> None:
    assert data_paths.directory_for(pc.get("1.19.4-pre1"), "blocks") == "pc/1.19"


def test_version_not_found_is_not_a_data_path_error(data_paths: DataPaths, pc) -> None:
    with pytest.raises(LookupError) as excinfo:
        data_paths.directory_for(pc.get("23w12a"), "blocks")
    assert not isinstance(excinfo.value, DataPathNotFound)


def test_bedrock_paths(data_paths: DataPaths, source) -> None:
    bedrock = load_registry(source, "bedrock")
    assert data_paths.directory_for(bedrock.get("1.19.70"), "items") == "bedrock/1.19.80"


def test_rejects_non_object_document() -> None:
    with pytest.raises(JsonParseError):
        DataPaths(["pc"])
    with pytest.raises(JsonParseError):
        DataPaths({"pc": {"1.18.2": ["blocks"]}})


def test_empty_document_has_no_versions() -> None:
    paths = DataPaths(None)
    assert dict(paths.versions("pc")) == {}
