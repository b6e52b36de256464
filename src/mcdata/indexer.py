# src/mcdata/indexer.py
"""
Build lookup maps from loaded record tuples.

Every map is derived only from the records passed in. When two records share
a key the later one in sequence order wins. Results are wrapped in
MappingProxyType so a published dataset cannot be modified through them.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Sequence, Tuple, TypeVar

from .schema import Block, BlockCollisionShapes, Box, Entity, RecordIndex


T = TypeVar("T")
K = TypeVar("K")


def index_by(records: Iterable[T], key_fn: Callable[[T], K]) -> Mapping[K, T]:
    """Map key_fn(record) -> record, last record wins on duplicate keys."""
    out: Dict[K, T] = {}
    for record in records:
        out[key_fn(record)] = record
    return MappingProxyType(out)


def build_record_index(
    records: Sequence[T],
    id_key: Optional[Callable[[T], Any]] = None,
    name_key: Optional[Callable[[T], str]] = None,
) -> RecordIndex[T]:
    """RecordIndex with by_id / by_name filled when a key function is given."""
    return RecordIndex(
        records=tuple(records),
        by_id=index_by(records, id_key) if id_key else MappingProxyType({}),
        by_name=index_by(records, name_key) if name_key else MappingProxyType({}),
    )


def standard_index(records: Sequence[T]) -> RecordIndex[T]:
    """by_id on `.id`, by_name on `.name`."""
    return build_record_index(records, lambda r: r.id, lambda r: r.name)


# ---------------------------------------------------------------------------
# Blocks
# ---------------------------------------------------------------------------

def index_blocks_by_state_id(blocks: Iterable[Block]) -> Mapping[int, Block]:
    """
    Expand every block's minStateId..maxStateId (inclusive) range.

    Overlapping ranges resolve to the later block in sequence order.
    """
    out: Dict[int, Block] = {}
    for block in blocks:
        for state_id in block.state_ids:
            out[state_id] = block
    return MappingProxyType(out)


def index_block_shapes(
    blocks: Iterable[Block],
    shapes: BlockCollisionShapes,
) -> Tuple[Mapping[int, Tuple[Box, ...]], Mapping[str, Tuple[Box, ...]]]:
    """
    Resolve collision boxes per state id and per block name.

    The shape reference for a block is either a single shape id shared by all
    of its states, or one id per state (indexed by stateId - minStateId).
    Shape id 0 is "no collision" and is left out of both maps. The per-name
    map uses the block's default state.
    """
    by_state: Dict[int, Tuple[Box, ...]] = {}
    by_name: Dict[str, Tuple[Box, ...]] = {}
    for block in blocks:
        ref = shapes.blocks.get(block.name)
        if ref is None:
            continue
        for state_id in block.state_ids:
            if isinstance(ref, tuple):
                offset = state_id - block.min_state_id
                if offset >= len(ref):
                    break
                shape_id = ref[offset]
            else:
                shape_id = ref
            boxes = shapes.shapes.get(shape_id)
            if shape_id == 0 or boxes is None:
                continue
            by_state[state_id] = boxes
            if state_id == block.default_state:
                by_name[block.name] = boxes
    return MappingProxyType(by_state), MappingProxyType(by_name)


# ---------------------------------------------------------------------------
# Entities
# ---------------------------------------------------------------------------

def partition_entities(
    entities: Iterable[Entity],
) -> Tuple[Mapping[int, Entity], Mapping[int, Entity]]:
    """Split entities into (mobs_by_id, objects_by_id) on the `type` field."""
    mobs: Dict[int, Entity] = {}
    objects: Dict[int, Entity] = {}
    for entity in entities:
        if entity.type == "mob":
            mobs[entity.id] = entity
        elif entity.type == "object":
            objects[entity.id] = entity
    return MappingProxyType(mobs), MappingProxyType(objects)


__all__ = [
    "index_by",
    "build_record_index",
    "standard_index",
    "index_blocks_by_state_id",
    "index_block_shapes",
    "partition_entities",
]
