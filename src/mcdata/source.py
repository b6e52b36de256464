# src/mcdata/source.py
"""
Raw document source: maps document names to files under a local
minecraft-data tree and reads them as JSON.

Expected layout (same as PrismarineJS minecraft-data/data):

    <root>/dataPaths.json
    <root>/pc/common/protocolVersions.json
    <root>/pc/common/features.json
    <root>/pc/common/legacy.json
    <root>/pc/1.18/blocks.json
    <root>/bedrock/common/...

Fetching or refreshing the tree is somebody else's job; this module only
assumes the directory is already on disk.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

from .config import Settings, load_settings
from .errors import ConfigError, DataFileNotFound, IoError, JsonParseError
from .schema import Edition


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DataSource:
    """A minecraft-data root directory."""

    root: Path

    # ------------------------------------------------------------------
    # Path helpers
    # ------------------------------------------------------------------

    def data_paths_file(self) -> Path:
        return self.root / "dataPaths.json"

    def common_file(self, edition: Edition, name: str) -> Path:
        """<root>/<edition>/common/<name>.json"""
        return self.root / Edition.parse(edition).path_prefix / "common" / f"{name}.json"

    def dataset_file(self, relative_dir: str, kind: str) -> Path:
        """
        Return the JSON file for `kind` inside a dataPaths directory.

        Raises DataFileNotFound when the directory or the file is missing.
        """
        directory = self.root / relative_dir
        if not directory.is_dir():
            raise DataFileNotFound(directory)
        path = directory / f"{kind}.json"
        if not path.is_file():
            raise DataFileNotFound(path)
        return path

    # ------------------------------------------------------------------
    # Reading
    # ------------------------------------------------------------------

    def read_json(self, path: Path) -> Any:
        """
        Read and decode one JSON document.

        Raises:
            DataFileNotFound: path does not exist
            IoError: path exists but could not be read or decoded as UTF-8
            JsonParseError: content is not valid JSON

        An empty or whitespace-only file decodes to None.
        """
        path = Path(path)
        try:
            text = path.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise DataFileNotFound(path) from exc
        except UnicodeDecodeError as exc:
            raise IoError(path, f"not valid UTF-8 ({exc.reason})") from exc
        except OSError as exc:
            raise IoError(path, exc.strerror or str(exc)) from exc

        if not text.strip():
            logger.debug("Read %s (empty document)", path)
            return None

        try:
            data = json.loads(text)
        except json.JSONDecodeError as exc:
            logger.error("Malformed JSON in %s: %s", path, exc)
            raise JsonParseError(path, f"line {exc.lineno} column {exc.colno}: {exc.msg}") from exc

        logger.debug("Read %s (%d bytes)", path, len(text))
        return data


def data_source_from_settings(settings: Optional[Settings] = None) -> DataSource:
    """
    Build a DataSource from Settings (loaded from config when omitted).

    Raises ConfigError if no data root is configured or it does not exist.
    """
    if settings is None:
        settings = load_settings()
    if settings.data_root is None:
        raise ConfigError(
            "No minecraft-data root configured; set data_root in config/mcdata.yaml "
            "or the MCDATA_DATA_ROOT environment variable."
        )
    root = Path(settings.data_root)
    if not root.is_dir():
        raise ConfigError(f"minecraft-data root does not exist: {root}")
    return DataSource(root=root.resolve())


__all__ = [
    "DataSource",
    "data_source_from_settings",
]
