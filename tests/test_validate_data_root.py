# tests/test_validate_data_root.py

from __future__ import annotations

import pytest

from mcdata.config import Settings
from mcdata.errors import ConfigError
from tools.validate_data_root import validate


def test_fake_tree_validates(data_root, capsys) -> None:
    problems = validate(Settings(data_root=data_root))
    out = capsys.readouterr().out

    assert problems == []
    assert "pc: 13 versions, newest 23w13a" in out
    # The 1.20 snapshots have neither an exact nor a major dataPaths entry.
    assert "pc: 2 versions without dataPaths entries" in out


def test_broken_version_list_is_reported(data_root) -> None:
    (data_root / "bedrock" / "common" / "protocolVersions.json").write_text("[", encoding="utf-8")
    problems = validate(Settings(data_root=data_root))
    assert len(problems) == 1
    assert problems[0].startswith("bedrock versions:")


def test_missing_data_paths_stops_early(data_root) -> None:
    (data_root / "dataPaths.json").unlink()
    problems = validate(Settings(data_root=data_root))
    assert len(problems) == 1
    assert problems[0].startswith("dataPaths.json:")


def test_unset_root_raises(tmp_path) -> None:
    with pytest.raises(ConfigError):
        validate(Settings(data_root=tmp_path / "nowhere"))
