# src/mcdata/schema.py
"""
Typed record shapes for minecraft-data documents.

All records are frozen dataclasses: once a dataset is published to the cache
it is shared by every caller, so nothing in here may be mutated in place.
JSON arrays are stored as tuples and JSON objects as read-only mappings.

Field names are the snake_case form of the upstream camelCase keys
(minStateId -> min_state_id, displayName -> display_name, ...).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Generic, Mapping, Optional, Tuple, TypeVar


_EMPTY: Mapping[Any, Any] = MappingProxyType({})


# ---------------------------------------------------------------------------
# Versions
# ---------------------------------------------------------------------------

class Edition(str, Enum):
    """Game edition; the value doubles as the directory / key prefix."""

    PC = "pc"
    BEDROCK = "bedrock"

    @property
    def path_prefix(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: "Edition | str") -> "Edition":
        """
        Accept an Edition or its string form ("pc", "bedrock").

        Raises ValueError for anything else.
        """
        if isinstance(value, Edition):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(f"Unknown edition '{value}'") from None


@dataclass(frozen=True)
class VersionRecord:
    """
    One entry of <edition>/common/protocolVersions.json.

    - minecraft_version: "1.18.2", "1.19.4", "23w07a", ...
    - version: protocol number
    - major_version: "1.18", "1.19", ...
    - data_version: world data version; synthesized (<= 0) when missing
    - release_type: "release", "snapshot", ...
    - ordinal: position in the registry, 0 = oldest; used for all comparisons
    """
    edition: Edition
    minecraft_version: str
    version: int
    major_version: str
    data_version: int
    release_type: str = "release"
    uses_netty: bool = True
    ordinal: int = 0

    @property
    def is_release(self) -> bool:
        return self.release_type == "release"

    @property
    def key(self) -> str:
        """Canonical version id, e.g. "pc_1.18.2"; used as the cache key."""
        return f"{self.edition.value}_{self.minecraft_version}"


# ---------------------------------------------------------------------------
# Blocks & items
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Variation:
    """Metadata variant of a pre-flattening block or item."""
    metadata: int
    display_name: str
    description: Optional[str] = None


@dataclass(frozen=True)
class BlockStateDefinition:
    """
    One property of a block's state space.

    - type: "bool", "enum" or "int"
    - values: allowed values for enum/int properties
    """
    name: str
    type: str
    num_values: Optional[int] = None
    values: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Block:
    id: int
    name: str
    display_name: str = ""
    hardness: Optional[float] = None
    resistance: float = 0.0
    stack_size: int = 64
    diggable: bool = True
    bounding_box: str = "block"
    material: Optional[str] = None
    harvest_tools: Tuple[int, ...] = ()
    variations: Optional[Tuple[Variation, ...]] = None
    # Raw drop entries: a bare item id or a {drop, minCount, maxCount} object.
    drops: Tuple[Any, ...] = ()
    emit_light: int = 0
    filter_light: int = 0
    transparent: bool = False
    states: Tuple[BlockStateDefinition, ...] = ()
    min_state_id: int = 0
    max_state_id: int = 0
    default_state: int = 0

    @property
    def state_ids(self) -> range:
        """Every state id owned by this block, inclusive of max_state_id."""
        return range(self.min_state_id, self.max_state_id + 1)


@dataclass(frozen=True)
class Item:
    id: int
    name: str
    display_name: str = ""
    stack_size: int = 64
    enchant_categories: Optional[Tuple[str, ...]] = None
    repair_with: Optional[Tuple[str, ...]] = None
    max_durability: Optional[int] = None
    variations: Optional[Tuple[Variation, ...]] = None


@dataclass(frozen=True)
class Food:
    id: int
    name: str
    display_name: str = ""
    stack_size: int = 64
    food_points: float = 0.0
    saturation: float = 0.0
    effective_quality: float = 0.0
    saturation_ratio: float = 0.0
    variations: Optional[Tuple[Variation, ...]] = None


# ---------------------------------------------------------------------------
# World & entities
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Biome:
    id: int
    name: str
    category: str = ""
    temperature: float = 0.0
    precipitation: Optional[str] = None
    dimension: str = "overworld"
    display_name: str = ""
    color: int = 0
    rainfall: Optional[float] = None
    depth: Optional[float] = None
    has_precipitation: Optional[bool] = None


@dataclass(frozen=True)
class Effect:
    """Status effect; type is "good" or "bad"."""
    id: int
    name: str
    display_name: str = ""
    type: str = "good"


@dataclass(frozen=True)
class Entity:
    """
    Entity definition.

    - type: discriminant used to split mobs from objects ("mob", "object",
      "projectile", "living", ...)
    - metadata_keys: only present in recent versions
    """
    id: int
    name: str
    display_name: str = ""
    type: str = ""
    internal_id: Optional[int] = None
    width: Optional[float] = None
    height: Optional[float] = None
    category: Optional[str] = None
    metadata_keys: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Sound:
    id: int
    name: str


@dataclass(frozen=True)
class Particle:
    id: int
    name: str


@dataclass(frozen=True)
class Instrument:
    id: int
    name: str


@dataclass(frozen=True)
class Attribute:
    """Entity attribute; resource is the namespaced key (minecraft:generic.max_health)."""
    name: str
    resource: str
    default: float = 0.0
    min: float = 0.0
    max: float = 0.0


# ---------------------------------------------------------------------------
# Enchantments, map icons, windows
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class EnchantmentCost:
    """Linear cost a * level + b."""
    a: int = 0
    b: int = 0


@dataclass(frozen=True)
class Enchantment:
    id: int
    name: str
    display_name: str = ""
    max_level: int = 1
    min_cost: EnchantmentCost = EnchantmentCost()
    max_cost: EnchantmentCost = EnchantmentCost()
    treasure_only: bool = False
    curse: bool = False
    exclude: Tuple[str, ...] = ()
    category: str = ""
    weight: int = 0
    tradeable: bool = False
    discoverable: bool = False


@dataclass(frozen=True)
class MapIcon:
    id: int
    name: str
    appearance: Optional[str] = None
    visible_in_item_frame: bool = False


@dataclass(frozen=True)
class WindowSlot:
    name: str
    index: int
    size: Optional[int] = None


@dataclass(frozen=True)
class WindowOpener:
    """What opens a window: type is "block" or "entity", id is that record's id."""
    type: str
    id: int


@dataclass(frozen=True)
class Window:
    """Inventory window; id is a string (numeric in old versions, namespaced later)."""
    id: str
    name: str
    slots: Tuple[WindowSlot, ...] = ()
    opened_with: Tuple[WindowOpener, ...] = ()
    properties: Tuple[str, ...] = ()


# ---------------------------------------------------------------------------
# Loot
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class BlockLootDrop:
    item: str
    drop_chance: float = 1.0
    # [min] or [min, max]; entries may be null in the upstream data.
    stack_size_range: Tuple[Optional[int], ...] = (1,)
    silk_touch: Optional[bool] = None
    no_silk_touch: Optional[bool] = None
    block_age: Optional[int] = None


@dataclass(frozen=True)
class BlockLoot:
    block: str
    drops: Tuple[BlockLootDrop, ...] = ()


@dataclass(frozen=True)
class EntityLootDrop:
    item: str
    drop_chance: float = 1.0
    stack_size_range: Tuple[int, ...] = (1,)
    player_kill: Optional[bool] = None


@dataclass(frozen=True)
class EntityLoot:
    entity: str
    drops: Tuple[EntityLootDrop, ...] = ()


# ---------------------------------------------------------------------------
# Whole-document kinds
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class TintEntry:
    """keys are biome names (or redstone power levels); color is 0xRRGGBB."""
    keys: Tuple[Any, ...]
    color: int


@dataclass(frozen=True)
class TintData:
    default: Optional[int] = None
    data: Tuple[TintEntry, ...] = ()


@dataclass(frozen=True)
class Tints:
    grass: TintData = TintData()
    foliage: TintData = TintData()
    water: TintData = TintData()
    redstone: TintData = TintData()
    constant: TintData = TintData()


Box = Tuple[float, float, float, float, float, float]


@dataclass(frozen=True)
class BlockCollisionShapes:
    """
    blockCollisionShapes.json.

    - blocks: block name -> shape id, or one shape id per state offset
    - shapes: shape id -> list of boxes (x1, y1, z1, x2, y2, z2)
    """
    blocks: Mapping[str, Any] = field(default_factory=lambda: _EMPTY)
    shapes: Mapping[int, Tuple[Box, ...]] = field(default_factory=lambda: _EMPTY)


@dataclass(frozen=True)
class Legacy:
    """Pre-flattening id mappings ("1:0" -> "minecraft:stone")."""
    blocks: Mapping[str, str] = field(default_factory=lambda: _EMPTY)
    items: Mapping[str, str] = field(default_factory=lambda: _EMPTY)


# ---------------------------------------------------------------------------
# Features
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VersionRange:
    """Inclusive range; a single-version predicate has low == high."""
    low: str
    high: str


@dataclass(frozen=True)
class FeatureValue:
    value: Any
    range: VersionRange


@dataclass(frozen=True)
class FeatureRule:
    """
    One entry of <edition>/common/features.json.

    Either `values` is non-empty (valued feature) or `range` is set
    (boolean feature).
    """
    name: str
    description: Optional[str] = None
    values: Tuple[FeatureValue, ...] = ()
    range: Optional[VersionRange] = None


# ---------------------------------------------------------------------------
# Indices
# ---------------------------------------------------------------------------

T = TypeVar("T")


@dataclass(frozen=True)
class RecordIndex(Generic[T]):
    """
    One data kind: ordered records plus the id and name lookups.

    Kinds without a numeric id (attributes, loot) leave by_id empty.
    """
    records: Tuple[T, ...] = ()
    by_id: Mapping[Any, T] = field(default_factory=lambda: _EMPTY)
    by_name: Mapping[str, T] = field(default_factory=lambda: _EMPTY)

    def __len__(self) -> int:
        return len(self.records)

    def __iter__(self):
        return iter(self.records)


__all__ = [
    "Edition",
    "VersionRecord",
    "Variation",
    "BlockStateDefinition",
    "Block",
    "Item",
    "Food",
    "Biome",
    "Effect",
    "Entity",
    "Sound",
    "Particle",
    "Instrument",
    "Attribute",
    "EnchantmentCost",
    "Enchantment",
    "MapIcon",
    "WindowSlot",
    "WindowOpener",
    "Window",
    "BlockLootDrop",
    "BlockLoot",
    "EntityLootDrop",
    "EntityLoot",
    "TintEntry",
    "TintData",
    "Tints",
    "Box",
    "BlockCollisionShapes",
    "Legacy",
    "VersionRange",
    "FeatureValue",
    "FeatureRule",
    "RecordIndex",
]
