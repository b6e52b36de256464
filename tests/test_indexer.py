# tests/test_indexer.py
"""
Tests for mcdata.indexer.

Goal:
  - State-id expansion covers every id in minStateId..maxStateId.
  - Duplicate keys and overlapping ranges resolve to the later record.
  - Entities split into mobs/objects on their type.
  - Collision shapes resolve per state and per default state.
"""

from __future__ import annotations

import pytest

from mcdata.indexer import (
    build_record_index,
    index_block_shapes,
    index_blocks_by_state_id,
    index_by,
    partition_entities,
    standard_index,
)
from mcdata.loader import parse_collision_shapes, parse_records
from mcdata.schema import Block, Entity, Item
from tests.fakes.fake_minecraft_data import BLOCKS_1_18, COLLISION_SHAPES_1_18, ENTITIES_1_18


def test_state_id_range_expands_inclusively() -> None:
    lever = Block(id=3, name="lever", min_state_id=10, max_state_id=13, default_state=11)
    index = index_blocks_by_state_id([lever])
    assert set(index) == {10, 11, 12, 13}
    assert all(index[s] is lever for s in (10, 11, 12, 13))


def test_overlapping_state_ranges_last_wins() -> None:
    first = Block(id=1, name="first", min_state_id=0, max_state_id=5)
    second = Block(id=2, name="second", min_state_id=4, max_state_id=7)
    index = index_blocks_by_state_id([first, second])
    assert [index[s].name for s in range(8)] == ["first"] * 4 + ["second"] * 4


def test_duplicate_keys_last_wins() -> None:
    a = Item(id=1, name="stone")
    b = Item(id=2, name="stone")
    index = standard_index([a, b])
    assert index.by_name["stone"] is b
    assert index.by_id[1] is a
    assert index.records == (a, b)


def test_index_by_is_read_only() -> None:
    mapping = index_by([Item(id=1, name="stone")], lambda i: i.id)
    with pytest.raises(TypeError):
        mapping[2] = Item(id=2, name="dirt")  # type: ignore[index]


def test_build_record_index_without_ids() -> None:
    index = build_record_index(
        [Item(id=1, name="stone")],
        name_key=lambda i: i.display_name or i.name,
    )
    assert dict(index.by_id) == {}
    assert list(index.by_name) == ["stone"]
    assert len(index) == 1


def test_partition_entities_by_type() -> None:
    entities = parse_records("entities", ENTITIES_1_18)
    mobs, objects = partition_entities(entities)
    assert {e.name for e in mobs.values()} == {"creeper", "zombie"}
    assert {e.name for e in objects.values()} == {"area_effect_cloud"}
    # Projectiles are neither.
    assert 2 not in mobs and 2 not in objects


def test_partition_entities_keyed_by_id() -> None:
    zombie = Entity(id=54, name="zombie", type="mob")
    boat = Entity(id=1, name="boat", type="object")
    mobs, objects = partition_entities([zombie, boat])
    assert mobs[54] is zombie
    assert objects[1] is boat


def test_block_shapes_per_state_and_default() -> None:
    blocks = parse_records("blocks", BLOCKS_1_18)
    shapes = parse_collision_shapes(COLLISION_SHAPES_1_18)
    by_state, by_name = index_block_shapes(blocks, shapes)

    full = ((0.0, 0.0, 0.0, 1.0, 1.0, 1.0),)
    assert by_state[1] == full          # stone
    assert by_state[14] == full         # obsidian
    assert 0 not in by_state            # air: shape 0
    assert 10 not in by_state and 11 not in by_state
    assert by_state[12] == by_state[13] == ((0.3125, 0.0, 0.25, 0.6875, 0.375, 0.75),)
    assert 15 not in by_state           # bedrock has no entry

    assert by_name["stone"] == full
    assert "lever" not in by_name       # default state 11 has no box
    assert "air" not in by_name
