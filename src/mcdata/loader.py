# src/mcdata/loader.py
"""
Typed loader: turn decoded minecraft-data JSON documents into records.

Responsibility:
  - Convert one data-kind document (blocks.json, items.json, ...) into a
    tuple of frozen records from mcdata.schema.
  - Tolerate version drift: optional fields default, integer/float widths
    are coerced, empty or null documents yield an empty tuple.
  - Synthesize pre-flattening block state ranges (id << 4 .. +15).
  - Freeze untyped documents (recipes, protocol, ...) into read-only
    tuples/mappings so they can be shared safely.

Shape problems (wrong top-level type, an entry missing its id/name) raise
JsonParseError naming the file.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Mapping, Optional, Tuple

from .errors import DataFileNotFound, DataPathNotFound, JsonParseError
from .paths import DataPaths
from .schema import (
    Attribute,
    Biome,
    Block,
    BlockCollisionShapes,
    BlockLoot,
    BlockLootDrop,
    BlockStateDefinition,
    Effect,
    Enchantment,
    EnchantmentCost,
    Entity,
    EntityLoot,
    EntityLootDrop,
    Food,
    Instrument,
    Item,
    Legacy,
    MapIcon,
    Particle,
    Sound,
    TintData,
    TintEntry,
    Tints,
    Variation,
    VersionRecord,
    Window,
    WindowOpener,
    WindowSlot,
)
from .source import DataSource


logger = logging.getLogger(__name__)

# Blocks before the 1.13 flattening own 16 metadata states each.
LEGACY_STATES_PER_BLOCK = 16


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------

def freeze_json(value: Any) -> Any:
    """Recursively convert lists to tuples and dicts to read-only mappings."""
    if isinstance(value, dict):
        return MappingProxyType({k: freeze_json(v) for k, v in value.items()})
    if isinstance(value, list):
        return tuple(freeze_json(v) for v in value)
    return value


def _int(value: Any) -> int:
    # json gives 4.0 for some fields in some versions; int(4.0) == 4.
    return int(value)


def _opt_int(value: Any) -> Optional[int]:
    return None if value is None else int(value)


def _opt_float(value: Any) -> Optional[float]:
    return None if value is None else float(value)


def _opt_str(value: Any) -> Optional[str]:
    return None if value is None else str(value)


def _str_tuple(value: Any) -> Tuple[str, ...]:
    return tuple(str(v) for v in (value or ()))


def _opt_str_tuple(value: Any) -> Optional[Tuple[str, ...]]:
    return None if value is None else _str_tuple(value)


def _variations(value: Any) -> Optional[Tuple[Variation, ...]]:
    if value is None:
        return None
    return tuple(
        Variation(
            metadata=_int(v["metadata"]),
            display_name=str(v.get("displayName", "")),
            description=_opt_str(v.get("description")),
        )
        for v in value
    )


# ---------------------------------------------------------------------------
# Per-kind converters
# ---------------------------------------------------------------------------

def block_from_dict(entry: Dict[str, Any]) -> Block:
    block_id = _int(entry["id"])

    if entry.get("minStateId") is None or entry.get("maxStateId") is None:
        min_state = block_id * LEGACY_STATES_PER_BLOCK
        max_state = min_state + LEGACY_STATES_PER_BLOCK - 1
        default_state = min_state
    else:
        min_state = _int(entry["minStateId"])
        max_state = _int(entry["maxStateId"])
        default_state = _int(entry.get("defaultState", min_state))

    harvest_tools = entry.get("harvestTools") or {}
    states = tuple(
        BlockStateDefinition(
            name=str(s["name"]),
            type=str(s.get("type", "")),
            num_values=_opt_int(s.get("num_values")),
            values=_str_tuple(s.get("values")),
        )
        for s in entry.get("states") or ()
    )

    return Block(
        id=block_id,
        name=str(entry["name"]),
        display_name=str(entry.get("displayName", "")),
        hardness=_opt_float(entry.get("hardness")),
        resistance=float(entry.get("resistance") or 0.0),
        stack_size=_int(entry.get("stackSize", 64)),
        diggable=bool(entry.get("diggable", True)),
        bounding_box=str(entry.get("boundingBox", "block")),
        material=_opt_str(entry.get("material")),
        harvest_tools=tuple(int(tool) for tool, ok in harvest_tools.items() if ok),
        variations=_variations(entry.get("variations")),
        drops=freeze_json(list(entry.get("drops") or ())),
        emit_light=_int(entry.get("emitLight", 0)),
        filter_light=_int(entry.get("filterLight", 0)),
        transparent=bool(entry.get("transparent", False)),
        states=states,
        min_state_id=min_state,
        max_state_id=max_state,
        default_state=default_state,
    )


def item_from_dict(entry: Dict[str, Any]) -> Item:
    return Item(
        id=_int(entry["id"]),
        name=str(entry["name"]),
        display_name=str(entry.get("displayName", "")),
        stack_size=_int(entry.get("stackSize", 64)),
        enchant_categories=_opt_str_tuple(entry.get("enchantCategories")),
        repair_with=_opt_str_tuple(entry.get("repairWith")),
        max_durability=_opt_int(entry.get("maxDurability")),
        variations=_variations(entry.get("variations")),
    )


def food_from_dict(entry: Dict[str, Any]) -> Food:
    return Food(
        id=_int(entry["id"]),
        name=str(entry["name"]),
        display_name=str(entry.get("displayName", "")),
        stack_size=_int(entry.get("stackSize", 64)),
        food_points=float(entry.get("foodPoints", 0.0)),
        saturation=float(entry.get("saturation", 0.0)),
        effective_quality=float(entry.get("effectiveQuality", 0.0)),
        saturation_ratio=float(entry.get("saturationRatio", 0.0)),
        variations=_variations(entry.get("variations")),
    )


def biome_from_dict(entry: Dict[str, Any]) -> Biome:
    has_precipitation = entry.get("has_precipitation", entry.get("hasPrecipitation"))
    return Biome(
        id=_int(entry["id"]),
        name=str(entry["name"]),
        category=str(entry.get("category", "")),
        temperature=float(entry.get("temperature", 0.0)),
        precipitation=_opt_str(entry.get("precipitation")),
        dimension=str(entry.get("dimension", "overworld")),
        display_name=str(entry.get("displayName", "")),
        color=_int(entry.get("color", 0)),
        rainfall=_opt_float(entry.get("rainfall")),
        depth=_opt_float(entry.get("depth")),
        has_precipitation=None if has_precipitation is None else bool(has_precipitation),
    )


def effect_from_dict(entry: Dict[str, Any]) -> Effect:
    return Effect(
        id=_int(entry["id"]),
        name=str(entry["name"]),
        display_name=str(entry.get("displayName", "")),
        type=str(entry.get("type", "good")),
    )


def entity_from_dict(entry: Dict[str, Any]) -> Entity:
    return Entity(
        id=_int(entry["id"]),
        name=str(entry["name"]),
        display_name=str(entry.get("displayName", "")),
        type=str(entry.get("type", "")),
        internal_id=_opt_int(entry.get("internalId")),
        width=_opt_float(entry.get("width")),
        height=_opt_float(entry.get("height")),
        category=_opt_str(entry.get("category")),
        metadata_keys=_str_tuple(entry.get("metadataKeys")),
    )


def sound_from_dict(entry: Dict[str, Any]) -> Sound:
    return Sound(id=_int(entry["id"]), name=str(entry["name"]))


def particle_from_dict(entry: Dict[str, Any]) -> Particle:
    return Particle(id=_int(entry["id"]), name=str(entry["name"]))


def instrument_from_dict(entry: Dict[str, Any]) -> Instrument:
    return Instrument(id=_int(entry["id"]), name=str(entry["name"]))


def attribute_from_dict(entry: Dict[str, Any]) -> Attribute:
    return Attribute(
        name=str(entry["name"]),
        resource=str(entry["resource"]),
        default=float(entry.get("default", 0.0)),
        min=float(entry.get("min", 0.0)),
        max=float(entry.get("max", 0.0)),
    )


def _cost(value: Any) -> EnchantmentCost:
    value = value or {}
    return EnchantmentCost(a=_int(value.get("a", 0)), b=_int(value.get("b", 0)))


def enchantment_from_dict(entry: Dict[str, Any]) -> Enchantment:
    return Enchantment(
        id=_int(entry["id"]),
        name=str(entry["name"]),
        display_name=str(entry.get("displayName", "")),
        max_level=_int(entry.get("maxLevel", 1)),
        min_cost=_cost(entry.get("minCost")),
        max_cost=_cost(entry.get("maxCost")),
        treasure_only=bool(entry.get("treasureOnly", False)),
        curse=bool(entry.get("curse", False)),
        exclude=_str_tuple(entry.get("exclude")),
        category=str(entry.get("category", "")),
        weight=_int(entry.get("weight", 0)),
        tradeable=bool(entry.get("tradeable", False)),
        discoverable=bool(entry.get("discoverable", False)),
    )


def map_icon_from_dict(entry: Dict[str, Any]) -> MapIcon:
    return MapIcon(
        id=_int(entry["id"]),
        name=str(entry["name"]),
        appearance=_opt_str(entry.get("appearance")),
        visible_in_item_frame=bool(entry.get("visibleInItemFrame", False)),
    )


def window_from_dict(entry: Dict[str, Any]) -> Window:
    slots = tuple(
        WindowSlot(name=str(s["name"]), index=_int(s["index"]), size=_opt_int(s.get("size")))
        for s in entry.get("slots") or ()
    )
    openers = tuple(
        WindowOpener(type=str(o.get("type", "")), id=_int(o["id"]))
        for o in entry.get("openedWith") or ()
    )
    return Window(
        id=str(entry["id"]),
        name=str(entry["name"]),
        slots=slots,
        opened_with=openers,
        properties=_str_tuple(entry.get("properties")),
    )


def _stack_range(value: Any) -> Tuple[Optional[int], ...]:
    if value is None:
        return (1,)
    return tuple(None if v is None else _int(v) for v in value)


def block_loot_from_dict(entry: Dict[str, Any]) -> BlockLoot:
    drops = tuple(
        BlockLootDrop(
            item=str(d["item"]),
            drop_chance=float(d.get("dropChance", 1.0)),
            stack_size_range=_stack_range(d.get("stackSizeRange")),
            silk_touch=d.get("silkTouch"),
            no_silk_touch=d.get("noSilkTouch"),
            block_age=_opt_int(d.get("blockAge")),
        )
        for d in entry.get("drops") or ()
    )
    return BlockLoot(block=str(entry["block"]), drops=drops)


def entity_loot_from_dict(entry: Dict[str, Any]) -> EntityLoot:
    drops = tuple(
        EntityLootDrop(
            item=str(d["item"]),
            drop_chance=float(d.get("dropChance", 1.0)),
            stack_size_range=tuple(_int(v) for v in d.get("stackSizeRange") or (1,)),
            player_kill=d.get("playerKill"),
        )
        for d in entry.get("drops") or ()
    )
    return EntityLoot(entity=str(entry["entity"]), drops=drops)


# Array documents: kind -> converter for one entry.
RECORD_PARSERS: Dict[str, Callable[[Dict[str, Any]], Any]] = {
    "blocks": block_from_dict,
    "items": item_from_dict,
    "foods": food_from_dict,
    "biomes": biome_from_dict,
    "effects": effect_from_dict,
    "entities": entity_from_dict,
    "sounds": sound_from_dict,
    "particles": particle_from_dict,
    "instruments": instrument_from_dict,
    "attributes": attribute_from_dict,
    "enchantments": enchantment_from_dict,
    "mapIcons": map_icon_from_dict,
    "windows": window_from_dict,
    "blockLoot": block_loot_from_dict,
    "entityLoot": entity_loot_from_dict,
}

# Documents kept as frozen JSON.
UNTYPED_KINDS: Tuple[str, ...] = (
    "recipes",
    "materials",
    "commands",
    "protocol",
    "protocolComments",
    "loginPacket",
)


def parse_records(kind: str, document: Any, path: Optional[Path] = None) -> Tuple[Any, ...]:
    """
    Convert an array document into a tuple of typed records.

    Raises JsonParseError if the document is not an array or an entry does
    not fit the record shape.
    """
    parser = RECORD_PARSERS[kind]
    if document is None:
        return ()
    if not isinstance(document, list):
        raise JsonParseError(path, f"'{kind}' must be a JSON array, got {type(document).__name__}")

    records = []
    for index, entry in enumerate(document):
        try:
            if not isinstance(entry, dict):
                raise TypeError(f"expected an object, got {type(entry).__name__}")
            records.append(parser(entry))
        except (KeyError, TypeError, ValueError, AttributeError) as exc:
            detail = f"missing key {exc}" if isinstance(exc, KeyError) else str(exc)
            raise JsonParseError(
                path, f"{kind}[{index}] does not fit expected shape: {detail}"
            ) from exc
    return tuple(records)


# ---------------------------------------------------------------------------
# Whole-document kinds
# ---------------------------------------------------------------------------

def _expect_object(kind: str, document: Any, path: Optional[Path]) -> Dict[str, Any]:
    if document is None:
        return {}
    if not isinstance(document, dict):
        raise JsonParseError(path, f"'{kind}' must be a JSON object, got {type(document).__name__}")
    return document


def _tint_data(value: Any) -> TintData:
    value = value or {}
    return TintData(
        default=_opt_int(value.get("default")),
        data=tuple(
            TintEntry(keys=freeze_json(list(d.get("keys") or ())), color=_int(d["color"]))
            for d in value.get("data") or ()
        ),
    )


def parse_tints(document: Any, path: Optional[Path] = None) -> Tints:
    raw = _expect_object("tints", document, path)
    try:
        return Tints(
            grass=_tint_data(raw.get("grass")),
            foliage=_tint_data(raw.get("foliage")),
            water=_tint_data(raw.get("water")),
            redstone=_tint_data(raw.get("redstone")),
            constant=_tint_data(raw.get("constant")),
        )
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        raise JsonParseError(path, f"tints does not fit expected shape: {exc}") from exc


def parse_collision_shapes(document: Any, path: Optional[Path] = None) -> BlockCollisionShapes:
    raw = _expect_object("blockCollisionShapes", document, path)
    try:
        blocks = {
            str(name): (tuple(_int(v) for v in ref) if isinstance(ref, list) else _int(ref))
            for name, ref in (raw.get("blocks") or {}).items()
        }
        shapes = {
            int(shape_id): tuple(tuple(float(c) for c in box) for box in boxes)
            for shape_id, boxes in (raw.get("shapes") or {}).items()
        }
    except (TypeError, ValueError, AttributeError) as exc:
        raise JsonParseError(path, f"blockCollisionShapes does not fit expected shape: {exc}") from exc
    return BlockCollisionShapes(blocks=MappingProxyType(blocks), shapes=MappingProxyType(shapes))


def parse_language(document: Any, path: Optional[Path] = None) -> Mapping[str, str]:
    raw = _expect_object("language", document, path)
    return MappingProxyType({str(k): str(v) for k, v in raw.items()})


def parse_legacy(document: Any, path: Optional[Path] = None) -> Legacy:
    raw = _expect_object("legacy", document, path)
    blocks = raw.get("blocks") or {}
    items = raw.get("items") or {}
    if not isinstance(blocks, dict) or not isinstance(items, dict):
        raise JsonParseError(path, "legacy 'blocks' and 'items' must be objects")
    return Legacy(
        blocks=MappingProxyType({str(k): str(v) for k, v in blocks.items()}),
        items=MappingProxyType({str(k): str(v) for k, v in items.items()}),
    )


# ---------------------------------------------------------------------------
# Reading from a DataSource
# ---------------------------------------------------------------------------

class KindLoader:
    """
    Reads data-kind documents for one version.

    `read(kind)` raises on any failure; `read_optional(kind)` maps a missing
    path entry or missing file to None.
    """

    def __init__(self, source: DataSource, data_paths: DataPaths, version: VersionRecord) -> None:
        self.source = source
        self.data_paths = data_paths
        self.version = version

    def locate(self, kind: str) -> Path:
        directory = self.data_paths.directory_for(self.version, kind)
        return self.source.dataset_file(directory, kind)

    def read(self, kind: str) -> Tuple[Any, Path]:
        path = self.locate(kind)
        return self.source.read_json(path), path

    def read_optional(self, kind: str) -> Tuple[Any, Optional[Path]]:
        try:
            return self.read(kind)
        except (DataPathNotFound, DataFileNotFound) as exc:
            logger.debug("No '%s' data for %s: %s", kind, self.version.key, exc)
            return None, None

    def records(self, kind: str, required: bool = False) -> Tuple[Any, ...]:
        document, path = self.read(kind) if required else self.read_optional(kind)
        return parse_records(kind, document, path)

    def untyped(self, kind: str) -> Any:
        document, _ = self.read_optional(kind)
        return freeze_json(document)


def load_legacy(source: DataSource, version: VersionRecord) -> Legacy:
    """<edition>/common/legacy.json; absent file -> empty Legacy."""
    path = source.common_file(version.edition, "legacy")
    try:
        document = source.read_json(path)
    except DataFileNotFound:
        logger.debug("No legacy.json for %s", version.edition.value)
        return Legacy()
    return parse_legacy(document, path)


__all__ = [
    "LEGACY_STATES_PER_BLOCK",
    "RECORD_PARSERS",
    "UNTYPED_KINDS",
    "freeze_json",
    "parse_records",
    "parse_tints",
    "parse_collision_shapes",
    "parse_language",
    "parse_legacy",
    "KindLoader",
    "load_legacy",
]
