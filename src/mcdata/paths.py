# src/mcdata/paths.py
"""
Dataset path resolver backed by dataPaths.json.

dataPaths.json maps, per edition, a version key to the directory holding
each data kind:

    {"pc": {"1.18.2": {"blocks": "pc/1.18", "items": "pc/1.18", ...},
            "1.18":   {...}},
     "bedrock": {...}}

Adjacent versions usually point at the same directory, so many versions map
to one set of files. Upstream lists both specific and major version keys;
lookups try the exact minecraftVersion first, then the major version.
"""

from __future__ import annotations

import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from .errors import DataPathNotFound, JsonParseError, VersionNotFound
from .schema import Edition, VersionRecord
from .source import DataSource


logger = logging.getLogger(__name__)


class DataPaths:
    """Read-only view over dataPaths.json."""

    def __init__(self, document: Any, path: Optional[Path] = None) -> None:
        if document is None:
            document = {}
        if not isinstance(document, dict):
            raise JsonParseError(path, f"expected a JSON object, got {type(document).__name__}")

        editions: Dict[str, Mapping[str, Mapping[str, str]]] = {}
        for edition in Edition:
            versions = document.get(edition.value) or {}
            if not isinstance(versions, dict):
                raise JsonParseError(path, f"'{edition.value}' must map versions to kinds")
            per_version: Dict[str, Mapping[str, str]] = {}
            for version_key, kinds in versions.items():
                if not isinstance(kinds, dict):
                    raise JsonParseError(path, f"'{edition.value}.{version_key}' must be an object")
                per_version[str(version_key)] = MappingProxyType(
                    {str(kind): str(directory) for kind, directory in kinds.items()}
                )
            editions[edition.value] = MappingProxyType(per_version)

        self._editions: Mapping[str, Mapping[str, Mapping[str, str]]] = MappingProxyType(editions)
        self.path = path

    def versions(self, edition: Edition | str) -> Mapping[str, Mapping[str, str]]:
        return self._editions[Edition.parse(edition).value]

    def kinds_for(self, record: VersionRecord) -> Mapping[str, str]:
        """
        Return the kind -> directory mapping for a version.

        Raises VersionNotFound when neither the exact version nor its major
        version has an entry.
        """
        versions = self.versions(record.edition)
        kinds = versions.get(record.minecraft_version)
        if kinds is None:
            kinds = versions.get(record.major_version)
            if kinds is not None:
                logger.debug(
                    "dataPaths has no entry for %s; using major version %s",
                    record.minecraft_version,
                    record.major_version,
                )
        if kinds is None:
            raise VersionNotFound(record.minecraft_version, record.edition.value)
        return kinds

    def directory_for(self, record: VersionRecord, kind: str) -> str:
        """
        Relative directory holding `kind` for this version ("pc/1.18").

        Raises VersionNotFound or DataPathNotFound.
        """
        kinds = self.kinds_for(record)
        directory = kinds.get(kind)
        if directory is None:
            raise DataPathNotFound(kind, record.minecraft_version, record.edition.value)
        return directory


def load_data_paths(source: DataSource) -> DataPaths:
    path = source.data_paths_file()
    data_paths = DataPaths(source.read_json(path), path)
    logger.info("Loaded dataPaths from %s", path)
    return data_paths


__all__ = [
    "DataPaths",
    "load_data_paths",
]
