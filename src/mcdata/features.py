# src/mcdata/features.py
"""
Feature evaluator over <edition>/common/features.json.

Rule shapes (mirroring minecraft-data):

    {"name": "dimensionIsAnInt", "versions": ["1.8", "1.15.2"]}
    {"name": "fooBar", "version": "1.13"}
    {"name": "metadataIxOfItem",
     "values": [{"value": 8, "versions": ["1.17", "latest"]},
                {"value": 7, "version": "1.16.5"}]}

Range bounds are version strings of the same edition, "latest", or
"<major>_major" (oldest version of that major as a lower bound, newest as an
upper bound). Comparison uses registry ordinals.

Rules with the requested name are scanned in document order:
  - a valued rule returns the value of its first entry whose range covers
    the version;
  - a boolean rule returns True when its range covers the version.
If nothing matched, a boolean rule for that name means False; a name with
only valued rules raises FeatureNotSupported; an unknown name raises
UnknownFeature.
A range whose bound is not a known version never matches.

Evaluation is pure: it only reads the rule tuple and the registry.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Optional, Sequence, Tuple

from .errors import FeatureNotSupported, InvalidVersion, JsonParseError, UnknownFeature
from .loader import freeze_json
from .schema import Edition, FeatureRule, FeatureValue, VersionRange, VersionRecord
from .source import DataSource
from .versions import VersionRegistry


logger = logging.getLogger(__name__)

LATEST = "latest"
MAJOR_SUFFIX = "_major"


# ---------------------------------------------------------------------------
# Parsing
# ---------------------------------------------------------------------------

def _range_from(entry: dict) -> Optional[VersionRange]:
    version = entry.get("version")
    if version is not None:
        return VersionRange(low=str(version), high=str(version))
    versions = entry.get("versions")
    if isinstance(versions, list) and len(versions) == 2:
        return VersionRange(low=str(versions[0]), high=str(versions[1]))
    return None


def parse_feature_rules(document: Any, path: Optional[Path] = None) -> Tuple[FeatureRule, ...]:
    """
    Convert the features.json array into FeatureRules.

    Entries with no usable range are kept (so the name stays known) but can
    never match; a warning is logged for each.
    """
    if document is None:
        return ()
    if not isinstance(document, list):
        raise JsonParseError(path, f"features must be a JSON array, got {type(document).__name__}")

    rules = []
    for index, entry in enumerate(document):
        if not isinstance(entry, dict) or "name" not in entry:
            raise JsonParseError(path, f"features[{index}] must be an object with a 'name'")
        name = str(entry["name"])

        values = []
        for raw_value in entry.get("values") or ():
            value_range = _range_from(raw_value) if isinstance(raw_value, dict) else None
            if value_range is None:
                logger.warning("Feature '%s' has a value without a version range: %r", name, raw_value)
                continue
            values.append(FeatureValue(value=freeze_json(raw_value.get("value")), range=value_range))

        rule_range = None if entry.get("values") else _range_from(entry)
        if not values and rule_range is None:
            logger.warning("Feature '%s' has no version/versions/values definition", name)

        rules.append(
            FeatureRule(
                name=name,
                description=entry.get("description"),
                values=tuple(values),
                range=rule_range,
            )
        )
    return tuple(rules)


def load_feature_rules(source: DataSource, edition: Edition | str) -> Tuple[FeatureRule, ...]:
    """Read features.json for an edition; a missing file means no rules."""
    edition = Edition.parse(edition)
    path = source.common_file(edition, "features")
    if not path.exists():
        logger.warning("No features.json for %s at %s", edition.value, path)
        return ()
    rules = parse_feature_rules(source.read_json(path), path)
    logger.info("Loaded %d %s feature rules", len(rules), edition.value)
    return rules


# ---------------------------------------------------------------------------
# Evaluation
# ---------------------------------------------------------------------------

def _resolve_bound(registry: VersionRegistry, bound: str, upper: bool) -> VersionRecord:
    if bound == LATEST:
        return registry.newest()
    if bound.endswith(MAJOR_SUFFIX):
        major = bound[: -len(MAJOR_SUFFIX)]
        record = registry.newest_in_major(major) if upper else registry.oldest_in_major(major)
        if record is None:
            raise InvalidVersion(bound, registry.edition.value)
        return record
    exact = registry.get(bound)
    if exact is not None:
        return exact
    # Bare majors ("1.13") mean the whole line on the upper side.
    if upper:
        return registry.resolve(bound)
    oldest = registry.oldest_in_major(bound)
    return oldest if oldest is not None else registry.resolve(bound)


def version_in_range(registry: VersionRegistry, version: VersionRecord, bounds: VersionRange) -> bool:
    low = _resolve_bound(registry, bounds.low, upper=False)
    high = _resolve_bound(registry, bounds.high, upper=True)
    return low.ordinal <= version.ordinal <= high.ordinal


def _range_matches(registry: VersionRegistry, version: VersionRecord, bounds: VersionRange, name: str) -> bool:
    try:
        return version_in_range(registry, version, bounds)
    except InvalidVersion as exc:
        logger.warning("Feature %s has a range bound not in the registry (%s); skipping it", name, exc)
        return False


def evaluate_feature(
    rules: Sequence[FeatureRule],
    registry: VersionRegistry,
    version: VersionRecord,
    name: str,
) -> Any:
    """Return the value of feature `name` for `version`; see module docstring."""
    matching = [rule for rule in rules if rule.name == name]
    if not matching:
        raise UnknownFeature(name)

    has_boolean_rule = False
    for rule in matching:
        if rule.values:
            for entry in rule.values:
                if _range_matches(registry, version, entry.range, name):
                    logger.debug("Feature %s for %s -> %r", name, version.key, entry.value)
                    return entry.value
        elif rule.range is not None:
            has_boolean_rule = True
            if _range_matches(registry, version, rule.range, name):
                logger.debug("Feature %s for %s -> True", name, version.key)
                return True

    if has_boolean_rule:
        logger.debug("Feature %s for %s -> False", name, version.key)
        return False
    raise FeatureNotSupported(name, version.minecraft_version)


__all__ = [
    "parse_feature_rules",
    "load_feature_rules",
    "version_in_range",
    "evaluate_feature",
]
