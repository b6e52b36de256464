# src/mcdata/dataset.py
"""
IndexedDataset: everything known about one resolved version, fully indexed.

A dataset is built once per canonical version (see mcdata.cache) and then
shared by reference between all callers and threads. It is a frozen
dataclass whose maps are MappingProxyType views and whose sequences are
tuples, so nothing reachable from it can be modified.

Usage:

    import mcdata

    data = mcdata.load("1.18.2")
    stone = data.blocks.by_name["stone"]
    block = data.blocks_by_state_id[1]
    data.is_newer_or_equal_to("1.16")      # True
    data.support_feature("dimensionIsAnInt")
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Tuple

from .errors import EditionMismatch
from .features import evaluate_feature
from .indexer import (
    build_record_index,
    index_by,
    index_block_shapes,
    index_blocks_by_state_id,
    partition_entities,
    standard_index,
)
from .loader import (
    UNTYPED_KINDS,
    KindLoader,
    load_legacy,
    parse_collision_shapes,
    parse_language,
    parse_tints,
)
from .paths import DataPaths
from .schema import (
    Attribute,
    Biome,
    Block,
    BlockCollisionShapes,
    BlockLoot,
    Box,
    Edition,
    Effect,
    Enchantment,
    Entity,
    EntityLoot,
    FeatureRule,
    Food,
    Instrument,
    Item,
    Legacy,
    MapIcon,
    Particle,
    RecordIndex,
    Sound,
    Tints,
    VersionRecord,
    Window,
)
from .source import DataSource
from .versions import VersionRegistry, parse_version_string


logger = logging.getLogger(__name__)

_EMPTY: Mapping[Any, Any] = MappingProxyType({})


@dataclass(frozen=True, eq=False)
class IndexedDataset:
    """
    Fully built data for one version.

    Per-kind RecordIndex attributes expose `.records`, `.by_id` and
    `.by_name`. Kind-specific maps sit next to them:

    - blocks_by_state_id: every state id in each block's range -> Block
    - mobs_by_id / objects_by_id: entities split on their `type`
    - attributes_by_resource: "minecraft:generic.max_health" -> Attribute
    - windows_by_id: string window id -> Window
    - block_loot_by_block / entity_loot_by_entity: loot tables by name
    - block_shapes_by_state_id / block_shapes_by_name: collision boxes

    Optional kinds that a version does not ship are empty (or None for
    tints and block_collision_shapes).
    """
    version: VersionRecord
    registry: VersionRegistry = field(repr=False, compare=False)
    feature_rules: Tuple[FeatureRule, ...] = field(default=(), repr=False, compare=False)

    blocks: RecordIndex[Block] = field(default_factory=RecordIndex, repr=False)
    items: RecordIndex[Item] = field(default_factory=RecordIndex, repr=False)
    foods: RecordIndex[Food] = field(default_factory=RecordIndex, repr=False)
    biomes: RecordIndex[Biome] = field(default_factory=RecordIndex, repr=False)
    effects: RecordIndex[Effect] = field(default_factory=RecordIndex, repr=False)
    entities: RecordIndex[Entity] = field(default_factory=RecordIndex, repr=False)
    sounds: RecordIndex[Sound] = field(default_factory=RecordIndex, repr=False)
    particles: RecordIndex[Particle] = field(default_factory=RecordIndex, repr=False)
    instruments: RecordIndex[Instrument] = field(default_factory=RecordIndex, repr=False)
    attributes: RecordIndex[Attribute] = field(default_factory=RecordIndex, repr=False)
    enchantments: RecordIndex[Enchantment] = field(default_factory=RecordIndex, repr=False)
    map_icons: RecordIndex[MapIcon] = field(default_factory=RecordIndex, repr=False)
    windows: RecordIndex[Window] = field(default_factory=RecordIndex, repr=False)
    block_loot: RecordIndex[BlockLoot] = field(default_factory=RecordIndex, repr=False)
    entity_loot: RecordIndex[EntityLoot] = field(default_factory=RecordIndex, repr=False)

    blocks_by_state_id: Mapping[int, Block] = field(default_factory=lambda: _EMPTY, repr=False)
    mobs_by_id: Mapping[int, Entity] = field(default_factory=lambda: _EMPTY, repr=False)
    objects_by_id: Mapping[int, Entity] = field(default_factory=lambda: _EMPTY, repr=False)
    attributes_by_resource: Mapping[str, Attribute] = field(default_factory=lambda: _EMPTY, repr=False)
    windows_by_id: Mapping[str, Window] = field(default_factory=lambda: _EMPTY, repr=False)
    block_loot_by_block: Mapping[str, BlockLoot] = field(default_factory=lambda: _EMPTY, repr=False)
    entity_loot_by_entity: Mapping[str, EntityLoot] = field(default_factory=lambda: _EMPTY, repr=False)

    block_collision_shapes: Optional[BlockCollisionShapes] = field(default=None, repr=False)
    block_shapes_by_state_id: Mapping[int, Tuple[Box, ...]] = field(default_factory=lambda: _EMPTY, repr=False)
    block_shapes_by_name: Mapping[str, Tuple[Box, ...]] = field(default_factory=lambda: _EMPTY, repr=False)

    tints: Optional[Tints] = field(default=None, repr=False)
    language: Mapping[str, str] = field(default_factory=lambda: _EMPTY, repr=False)
    legacy: Legacy = field(default_factory=Legacy, repr=False)

    # Untyped documents (frozen JSON), None when the version has no such file.
    recipes: Any = field(default=None, repr=False)
    materials: Any = field(default=None, repr=False)
    commands: Any = field(default=None, repr=False)
    protocol: Any = field(default=None, repr=False)
    protocol_comments: Any = field(default=None, repr=False)
    login_packet: Any = field(default=None, repr=False)

    # ------------------------------------------------------------------
    # Identity
    # ------------------------------------------------------------------

    @property
    def edition(self) -> Edition:
        return self.version.edition

    @property
    def cache_key(self) -> str:
        return self.version.key

    # ------------------------------------------------------------------
    # Version comparison
    # ------------------------------------------------------------------

    def _resolve_other(self, other: str) -> VersionRecord:
        parsed = parse_version_string(other, default_edition=self.version.edition)
        if parsed.edition != self.version.edition:
            raise EditionMismatch(self.version.key, other)
        return self.registry.resolve(parsed.version, raw=other)

    def is_newer_or_equal_to(self, other: str) -> bool:
        """
        True if this version is the same as or newer than `other`.

        `other` resolves like a load() argument, so a major name means the
        newest release of that line: for 1.19.2, is_newer_or_equal_to("1.19")
        is False because "1.19" resolves to 1.19.4. Feature ranges read a bare
        "1.19" as the exact version instead.
        """
        return self.version.ordinal >= self._resolve_other(other).ordinal

    def is_older_than(self, other: str) -> bool:
        """True if this version is strictly older than `other` (resolved as above)."""
        return self.version.ordinal < self._resolve_other(other).ordinal

    # ------------------------------------------------------------------
    # Features
    # ------------------------------------------------------------------

    def support_feature(self, name: str) -> Any:
        """
        Value of feature `name` at this version (usually a bool).

        Raises UnknownFeature or FeatureNotSupported.
        """
        return evaluate_feature(self.feature_rules, self.registry, self.version, name)


# ---------------------------------------------------------------------------
# Building
# ---------------------------------------------------------------------------

def build_dataset(
    version: VersionRecord,
    source: DataSource,
    registry: VersionRegistry,
    data_paths: DataPaths,
    feature_rules: Tuple[FeatureRule, ...] = (),
) -> IndexedDataset:
    """
    Run locate -> load -> index for one version and return the dataset.

    blocks and items are required; every other kind is optional. Nothing is
    returned unless every step succeeds.
    """
    started = time.perf_counter()
    loader = KindLoader(source, data_paths, version)

    # Fail fast when the version is missing from dataPaths entirely.
    data_paths.kinds_for(version)

    blocks = loader.records("blocks", required=True)
    items = loader.records("items", required=True)
    foods = loader.records("foods")
    biomes = loader.records("biomes")
    effects = loader.records("effects")
    entities = loader.records("entities")
    sounds = loader.records("sounds")
    particles = loader.records("particles")
    instruments = loader.records("instruments")
    attributes = loader.records("attributes")
    enchantments = loader.records("enchantments")
    map_icons = loader.records("mapIcons")
    windows = loader.records("windows")
    block_loot = loader.records("blockLoot")
    entity_loot = loader.records("entityLoot")

    tints_doc, tints_path = loader.read_optional("tints")
    tints = parse_tints(tints_doc, tints_path) if tints_doc is not None else None

    shapes_doc, shapes_path = loader.read_optional("blockCollisionShapes")
    shapes = parse_collision_shapes(shapes_doc, shapes_path) if shapes_doc is not None else None

    language_doc, language_path = loader.read_optional("language")
    language = parse_language(language_doc, language_path)

    untyped = {kind: loader.untyped(kind) for kind in UNTYPED_KINDS}

    mobs, objects = partition_entities(entities)
    if shapes is not None:
        shapes_by_state, shapes_by_name = index_block_shapes(blocks, shapes)
    else:
        shapes_by_state, shapes_by_name = _EMPTY, _EMPTY

    attribute_index = build_record_index(attributes, name_key=lambda a: a.name)
    window_index = build_record_index(windows, id_key=lambda w: w.id, name_key=lambda w: w.name)
    block_loot_index = build_record_index(block_loot, name_key=lambda loot: loot.block)
    entity_loot_index = build_record_index(entity_loot, name_key=lambda loot: loot.entity)

    dataset = IndexedDataset(
        version=version,
        registry=registry,
        feature_rules=tuple(feature_rules),
        blocks=standard_index(blocks),
        items=standard_index(items),
        foods=standard_index(foods),
        biomes=standard_index(biomes),
        effects=standard_index(effects),
        entities=standard_index(entities),
        sounds=standard_index(sounds),
        particles=standard_index(particles),
        instruments=standard_index(instruments),
        attributes=attribute_index,
        enchantments=standard_index(enchantments),
        map_icons=standard_index(map_icons),
        windows=window_index,
        block_loot=block_loot_index,
        entity_loot=entity_loot_index,
        blocks_by_state_id=index_blocks_by_state_id(blocks),
        mobs_by_id=mobs,
        objects_by_id=objects,
        attributes_by_resource=index_by(attributes, lambda a: a.resource),
        windows_by_id=window_index.by_id,
        block_loot_by_block=block_loot_index.by_name,
        entity_loot_by_entity=entity_loot_index.by_name,
        block_collision_shapes=shapes,
        block_shapes_by_state_id=shapes_by_state,
        block_shapes_by_name=shapes_by_name,
        tints=tints,
        language=language,
        legacy=load_legacy(source, version),
        recipes=untyped["recipes"],
        materials=untyped["materials"],
        commands=untyped["commands"],
        protocol=untyped["protocol"],
        protocol_comments=untyped["protocolComments"],
        login_packet=untyped["loginPacket"],
    )

    logger.info(
        "Built dataset %s: %d blocks, %d items, %d entities, %d biomes in %.1f ms",
        version.key,
        len(blocks),
        len(items),
        len(entities),
        len(biomes),
        (time.perf_counter() - started) * 1000.0,
    )
    return dataset


__all__ = [
    "IndexedDataset",
    "build_dataset",
]
