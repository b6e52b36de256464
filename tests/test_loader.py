# tests/test_loader.py
"""
Tests for mcdata.loader and mcdata.source reading.

Covers:
  - optional fields defaulting and numeric width coercion
  - legacy block state ranges
  - empty / null documents
  - malformed JSON and wrong shapes -> JsonParseError
  - missing files / directories -> DataFileNotFound
"""

from __future__ import annotations

from pathlib import Path

import pytest

from mcdata.errors import DataFileNotFound, IoError, JsonParseError
from mcdata.loader import (
    freeze_json,
    parse_collision_shapes,
    parse_legacy,
    parse_records,
    parse_tints,
)
from mcdata.source import DataSource
from tests.fakes.fake_minecraft_data import (
    BLOCKS_1_18,
    BLOCKS_1_8,
    COLLISION_SHAPES_1_18,
    ITEMS_1_18,
    LEGACY_PC,
    TINTS_1_17,
    WINDOWS_1_16_1,
)


def test_modern_blocks_keep_state_range() -> None:
    blocks = parse_records("blocks", BLOCKS_1_18)
    lever = next(b for b in blocks if b.name == "lever")
    assert (lever.min_state_id, lever.max_state_id, lever.default_state) == (10, 13, 11)
    assert list(lever.state_ids) == [10, 11, 12, 13]
    assert [s.name for s in lever.states] == ["face", "powered"]
    assert lever.states[0].values == ("floor", "wall")


def test_blocks_tolerate_missing_and_null_fields() -> None:
    blocks = parse_records("blocks", BLOCKS_1_18)
    bedrock = next(b for b in blocks if b.name == "bedrock")
    assert bedrock.hardness is None
    assert bedrock.material is None
    assert bedrock.harvest_tools == ()
    assert bedrock.states == ()
    assert bedrock.resistance == 3600000.0


def test_numeric_widths_are_coerced() -> None:
    blocks = parse_records("blocks", BLOCKS_1_18)
    obsidian = next(b for b in blocks if b.name == "obsidian")
    assert obsidian.stack_size == 64 and isinstance(obsidian.stack_size, int)
    assert obsidian.hardness == 50.0 and isinstance(obsidian.hardness, float)


def test_harvest_tools_become_item_ids() -> None:
    stone = parse_records("blocks", BLOCKS_1_18)[1]
    assert stone.harvest_tools == (585, 590)


def test_legacy_blocks_get_synthesized_state_ids() -> None:
    air, stone = parse_records("blocks", BLOCKS_1_8)
    assert (air.min_state_id, air.max_state_id, air.default_state) == (0, 15, 0)
    assert (stone.min_state_id, stone.max_state_id, stone.default_state) == (16, 31, 16)
    assert [v.display_name for v in stone.variations] == ["Stone", "Granite"]
    # Complex drops stay as frozen JSON.
    assert stone.drops[0]["drop"]["id"] == 4


def test_items_optional_fields() -> None:
    items = parse_records("items", ITEMS_1_18)
    assert items[0].max_durability is None
    assert items[0].enchant_categories is None
    pickaxe = items[2]
    assert pickaxe.max_durability == 59
    assert pickaxe.repair_with == ("oak_planks",)


def test_windows_have_string_ids() -> None:
    windows = parse_records("windows", WINDOWS_1_16_1)
    assert windows[0].id == "minecraft:generic_9x3"
    assert windows[0].slots[0].size == 27
    assert windows[1].slots[0].size is None
    assert windows[1].opened_with[0].type == "block"


@pytest.mark.parametrize("document", [[], None])
def test_empty_documents_yield_empty_tuple(document) -> None:
    assert parse_records("blocks", document) == ()


def test_wrong_top_level_type_is_parse_error() -> None:
    with pytest.raises(JsonParseError):
        parse_records("blocks", {"stone": {}})


def test_entry_missing_required_key_is_parse_error() -> None:
    with pytest.raises(JsonParseError) as excinfo:
        parse_records("items", [{"id": 1, "name": "stone"}, {"id": 2}], Path("items.json"))
    assert "items[1]" in str(excinfo.value)
    assert excinfo.value.path == Path("items.json")


def test_tints_and_shapes_and_legacy() -> None:
    tints = parse_tints(TINTS_1_17)
    assert tints.grass.default == 7979098
    assert tints.grass.data[0].keys == ("plains",)
    assert tints.water.default is None

    shapes = parse_collision_shapes(COLLISION_SHAPES_1_18)
    assert shapes.blocks["lever"] == (0, 0, 2, 2)
    assert shapes.shapes[1] == ((0.0, 0.0, 0.0, 1.0, 1.0, 1.0),)

    legacy = parse_legacy(LEGACY_PC)
    assert legacy.blocks["1:1"] == "minecraft:granite"


def test_freeze_json_is_read_only() -> None:
    frozen = freeze_json({"a": [1, {"b": 2}]})
    assert frozen["a"][1]["b"] == 2
    with pytest.raises(TypeError):
        frozen["a"] = 3  # type: ignore[index]
    assert isinstance(frozen["a"], tuple)


# ---------------------------------------------------------------------------
# DataSource reading
# ---------------------------------------------------------------------------

def test_read_json_malformed(tmp_path: Path) -> None:
    bad = tmp_path / "blocks.json"
    bad.write_text("[{\"id\": 1,", encoding="utf-8")
    with pytest.raises(JsonParseError) as excinfo:
        DataSource(tmp_path).read_json(bad)
    assert excinfo.value.path == bad


def test_read_json_missing_file(tmp_path: Path) -> None:
    with pytest.raises(DataFileNotFound):
        DataSource(tmp_path).read_json(tmp_path / "nope.json")


def test_read_json_directory_is_io_error(tmp_path: Path) -> None:
    (tmp_path / "blocks.json").mkdir()
    with pytest.raises(IoError):
        DataSource(tmp_path).read_json(tmp_path / "blocks.json")


def test_dataset_file_missing_dir_and_file(source: DataSource) -> None:
    with pytest.raises(DataFileNotFound) as excinfo:
        source.dataset_file("pc/9.9", "blocks")
    assert excinfo.value.path.name == "9.9"

    with pytest.raises(DataFileNotFound) as excinfo:
        source.dataset_file("pc/1.8", "tints")
    assert excinfo.value.path.name == "tints.json"

    assert source.dataset_file("pc/1.18", "blocks").is_file()
