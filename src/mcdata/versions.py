# src/mcdata/versions.py
"""
Version registry: the ordered catalogue of known versions for one edition.

Built from <edition>/common/protocolVersions.json, whose entries look like:

    {"minecraftVersion": "1.18.2", "version": 758, "dataVersion": 2975,
     "usesNetty": true, "majorVersion": "1.18", "releaseType": "release"}

Ordering:
  - Upstream lists newest first, but ordering is derived rather than
    positional: entries are ranked by protocol number (descending) and any
    entry without a dataVersion gets -(rank) as a synthetic one.
  - The registry is then sorted oldest -> newest by
    (dataVersion, protocol, document position) and each record receives an
    `ordinal` (0 = oldest) used for every comparison.

Resolution of a user string ("1.18.2", "pc_1.16.5", "1.19", "bedrock_1.19.80",
"758") is handled by `parse_version_string` + `VersionRegistry.resolve`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Tuple

from .errors import InvalidVersion, JsonParseError
from .schema import Edition, VersionRecord
from .source import DataSource


logger = logging.getLogger(__name__)

_EDITION_PREFIXES: Tuple[Tuple[str, Edition], ...] = (
    ("pc_", Edition.PC),
    ("bedrock_", Edition.BEDROCK),
)


@dataclass(frozen=True)
class ParsedVersion:
    """
    A user version string split into edition and version part.

    - explicit_edition: True when the string carried a "pc_"/"bedrock_" prefix
    """
    edition: Edition
    version: str
    explicit_edition: bool
    raw: str


def parse_version_string(raw: str, default_edition: Edition | str = Edition.PC) -> ParsedVersion:
    """
    Strip an optional edition prefix from `raw`.

    Raises InvalidVersion for empty strings and unknown default editions.
    """
    if not isinstance(raw, str):
        raise InvalidVersion(str(raw))
    try:
        default = Edition.parse(default_edition)
    except ValueError:
        raise InvalidVersion(raw, str(default_edition)) from None

    text = raw.strip()
    for prefix, edition in _EDITION_PREFIXES:
        if text.lower().startswith(prefix):
            rest = text[len(prefix):].strip()
            if not rest:
                raise InvalidVersion(raw, edition.value)
            return ParsedVersion(edition=edition, version=rest, explicit_edition=True, raw=raw)

    if not text:
        raise InvalidVersion(raw, default.value)
    return ParsedVersion(edition=default, version=text, explicit_edition=False, raw=raw)


# ---------------------------------------------------------------------------
# Parsing protocolVersions.json
# ---------------------------------------------------------------------------

def _record_from_dict(edition: Edition, entry: Dict[str, Any], path: Optional[Path]) -> Dict[str, Any]:
    if not isinstance(entry, dict):
        raise JsonParseError(path, f"version entry must be an object, got {type(entry).__name__}")
    try:
        minecraft_version = str(entry["minecraftVersion"])
        protocol = int(entry["version"])
    except (KeyError, TypeError, ValueError) as exc:
        raise JsonParseError(path, f"bad version entry {entry!r}: {exc}") from exc

    major = entry.get("majorVersion")
    if not major:
        # Fall back to the first two components ("1.18.2" -> "1.18").
        major = ".".join(minecraft_version.split(".")[:2])

    data_version = entry.get("dataVersion")
    return {
        "edition": edition,
        "minecraft_version": minecraft_version,
        "version": protocol,
        "major_version": str(major),
        "data_version": int(data_version) if data_version is not None else None,
        "release_type": str(entry.get("releaseType") or "release"),
        "uses_netty": bool(entry.get("usesNetty", True)),
    }


def _order_records(edition: Edition, raw_entries: List[Dict[str, Any]]) -> List[VersionRecord]:
    # Last occurrence of a minecraftVersion wins.
    deduped: Dict[str, Tuple[int, Dict[str, Any]]] = {}
    for position, fields in enumerate(raw_entries):
        deduped[fields["minecraft_version"]] = (position, fields)
    entries = list(deduped.values())

    # Synthetic data versions from descending protocol rank.
    ranked = sorted(entries, key=lambda pe: pe[1]["version"], reverse=True)
    for rank, (_, fields) in enumerate(ranked):
        if fields["data_version"] is None:
            fields["data_version"] = -rank

    ordered = sorted(
        entries,
        key=lambda pe: (pe[1]["data_version"], pe[1]["version"], -pe[0]),
    )
    return [
        VersionRecord(ordinal=ordinal, **fields)
        for ordinal, (_, fields) in enumerate(ordered)
    ]


class VersionRegistry:
    """
    Ordered, read-only catalogue of VersionRecords for one edition.

    `records` runs oldest -> newest; `record.ordinal` is its index.
    """

    def __init__(self, edition: Edition, records: Iterable[VersionRecord]) -> None:
        self.edition = Edition.parse(edition)
        ordered = sorted(records, key=lambda r: r.ordinal)
        # Re-number so ordinals are always dense indices into `records`.
        self.records: Tuple[VersionRecord, ...] = tuple(
            r if r.ordinal == i else replace(r, ordinal=i) for i, r in enumerate(ordered)
        )

        self._by_minecraft_version: Dict[str, VersionRecord] = {}
        self._by_major: Dict[str, List[VersionRecord]] = {}
        self._by_protocol: Dict[int, List[VersionRecord]] = {}
        for record in self.records:
            self._by_minecraft_version[record.minecraft_version] = record
            self._by_major.setdefault(record.major_version, []).append(record)
            self._by_protocol.setdefault(record.version, []).append(record)

    @classmethod
    def from_document(
        cls,
        edition: Edition | str,
        document: Any,
        path: Optional[Path] = None,
    ) -> "VersionRegistry":
        """Build a registry from the decoded protocolVersions.json array."""
        edition = Edition.parse(edition)
        if document is None:
            document = []
        if not isinstance(document, list):
            raise JsonParseError(path, f"expected a JSON array of versions, got {type(document).__name__}")
        raw_entries = [_record_from_dict(edition, entry, path) for entry in document]
        return cls(edition, _order_records(edition, raw_entries))

    def __len__(self) -> int:
        return len(self.records)

    def __contains__(self, minecraft_version: object) -> bool:
        return minecraft_version in self._by_minecraft_version

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get(self, minecraft_version: str) -> Optional[VersionRecord]:
        return self._by_minecraft_version.get(minecraft_version)

    def newest(self) -> VersionRecord:
        if not self.records:
            raise InvalidVersion("latest", self.edition.value)
        return self.records[-1]

    def _major_candidates(self, major: str) -> List[VersionRecord]:
        prefix = major + "."
        return [
            r for r in self.records
            if r.major_version == major
            or r.minecraft_version == major
            or r.minecraft_version.startswith(prefix)
        ]

    def oldest_in_major(self, major: str) -> Optional[VersionRecord]:
        candidates = self._major_candidates(major)
        return candidates[0] if candidates else None

    def newest_in_major(self, major: str) -> Optional[VersionRecord]:
        candidates = self._major_candidates(major)
        return candidates[-1] if candidates else None

    @staticmethod
    def _prefer_release(candidates: List[VersionRecord]) -> Optional[VersionRecord]:
        """Newest release among candidates, else newest of any type."""
        if not candidates:
            return None
        releases = [r for r in candidates if r.is_release]
        pool = releases or candidates
        return max(pool, key=lambda r: r.ordinal)

    def resolve(self, version: str, raw: Optional[str] = None) -> VersionRecord:
        """
        Resolve a prefix-free version string to exactly one record.

        Order:
          1. A major version name ("1.19") -> newest release in that major
             line, else its newest entry of any type.
          2. An exact minecraftVersion.
          3. Anything that prefixes versions ("1.16" with no record of that
             major) -> same major-line rule.
          4. An all-digit string -> protocol number, release preferred.

        Raises InvalidVersion (carrying `raw` or `version`) otherwise.
        """
        text = version.strip()

        if text in self._by_major:
            record = self._prefer_release(self._major_candidates(text))
            logger.debug("Resolved '%s' as major version -> %s", text, record.minecraft_version)
            return record

        exact = self._by_minecraft_version.get(text)
        if exact is not None:
            return exact

        record = self._prefer_release(self._major_candidates(text))
        if record is not None:
            logger.debug("Resolved '%s' by version prefix -> %s", text, record.minecraft_version)
            return record

        if text.isdigit():
            record = self._prefer_release(self._by_protocol.get(int(text), []))
            if record is not None:
                logger.debug("Resolved '%s' as protocol number -> %s", text, record.minecraft_version)
                return record

        logger.debug("Could not resolve '%s' for edition %s", text, self.edition.value)
        raise InvalidVersion(raw if raw is not None else version, self.edition.value)

    def supported_versions(self) -> List[str]:
        """Known minecraft versions, oldest to newest."""
        return [r.minecraft_version for r in self.records]


def load_registry(source: DataSource, edition: Edition | str) -> VersionRegistry:
    """Read <edition>/common/protocolVersions.json and build the registry."""
    edition = Edition.parse(edition)
    path = source.common_file(edition, "protocolVersions")
    registry = VersionRegistry.from_document(edition, source.read_json(path), path)
    logger.info("Loaded %d %s versions from %s", len(registry), edition.value, path)
    return registry


__all__ = [
    "ParsedVersion",
    "parse_version_string",
    "VersionRegistry",
    "load_registry",
]
