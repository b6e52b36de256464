# src/mcdata/config.py
"""
Settings for locating the minecraft-data tree.

Resolution order (later wins):
  1. Defaults (no data root, INFO logging, pc edition)
  2. config/mcdata.yaml, or the file named by $MCDATA_CONFIG
  3. Environment overrides: $MCDATA_DATA_ROOT, $MCDATA_LOG_LEVEL

Example config/mcdata.yaml:

    data_root: ../vendor/minecraft-data/data
    log_level: INFO
    default_edition: pc

Only the document source reads these settings; the rest of the library works
on an explicit DataSource.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import ConfigError


# Default config directory; tests monkeypatch this to point at a temp dir.
CONFIG_DIR = Path(__file__).resolve().parents[2] / "config"
CONFIG_FILE_NAME = "mcdata.yaml"

ENV_CONFIG = "MCDATA_CONFIG"
ENV_DATA_ROOT = "MCDATA_DATA_ROOT"
ENV_LOG_LEVEL = "MCDATA_LOG_LEVEL"


@dataclass
class Settings:
    """
    Resolved mcdata settings.

    - data_root: directory laid out like minecraft-data/data (holds dataPaths.json)
    - log_level: level name used by command line tools
    - default_edition: edition assumed for unprefixed version strings
    - source: config file the values came from, if any
    """
    data_root: Optional[Path] = None
    log_level: str = "INFO"
    default_edition: str = "pc"
    source: Optional[Path] = None

    @classmethod
    def from_dict(cls, raw: Dict[str, Any], base_dir: Optional[Path] = None) -> "Settings":
        data_root = raw.get("data_root")
        root_path: Optional[Path] = None
        if data_root:
            root_path = Path(str(data_root)).expanduser()
            if not root_path.is_absolute() and base_dir is not None:
                root_path = (base_dir / root_path).resolve()

        edition = str(raw.get("default_edition", "pc")).lower()
        if edition not in ("pc", "bedrock"):
            raise ConfigError(f"default_edition must be 'pc' or 'bedrock', got '{edition}'")

        return cls(
            data_root=root_path,
            log_level=str(raw.get("log_level", "INFO")).upper(),
            default_edition=edition,
        )


def _config_path() -> Path:
    override = os.getenv(ENV_CONFIG)
    if override:
        return Path(override).expanduser()
    return CONFIG_DIR / CONFIG_FILE_NAME


def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a YAML mapping; a missing or empty file is an empty mapping."""
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected mapping at top of {path}, got {type(data).__name__}")
    return data


def load_settings(path: Optional[Path] = None) -> Settings:
    """
    Main entry point: read the config file and apply env overrides.

    An explicit `path` must exist; the default location may be absent.
    """
    if path is not None:
        path = Path(path)
        if not path.exists():
            raise ConfigError(f"Missing config file: {path}")
    else:
        path = _config_path()

    raw = _load_yaml(path)
    settings = Settings.from_dict(raw, base_dir=path.parent)
    if raw:
        settings.source = path

    env_root = os.getenv(ENV_DATA_ROOT)
    if env_root:
        settings.data_root = Path(env_root).expanduser()

    env_level = os.getenv(ENV_LOG_LEVEL)
    if env_level:
        settings.log_level = env_level.upper()

    return settings


__all__ = [
    "CONFIG_DIR",
    "Settings",
    "load_settings",
]
