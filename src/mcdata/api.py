# src/mcdata/api.py
"""
Public entry points.

    from mcdata import load, list_supported_versions

    data = load("1.18.2")            # pc by default
    data = load("bedrock_1.19.80")
    data = load("1.19")              # newest 1.19.x release
    list_supported_versions("pc")    # oldest -> newest

Control flow for load():
  1. parse the edition prefix and resolve against the (cached) registry;
  2. look up the canonical key ("pc_1.18.2") in the VersionCache;
  3. on a miss, build_dataset() runs exactly once for that key.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from .cache import (
    cached_data_paths,
    cached_feature_rules,
    cached_registry,
    get_cache,
    get_data_source,
)
from .dataset import IndexedDataset, build_dataset
from .errors import InvalidVersion
from .schema import Edition, VersionRecord
from .source import DataSource
from .versions import parse_version_string


logger = logging.getLogger(__name__)


def resolve_version(
    version: str,
    edition_default: Edition | str = Edition.PC,
    source: Optional[DataSource] = None,
) -> VersionRecord:
    """Resolve a user version string to its canonical VersionRecord."""
    source = source or get_data_source()
    parsed = parse_version_string(version, edition_default)
    registry = cached_registry(source, parsed.edition)
    return registry.resolve(parsed.version, raw=version)


def load(
    version: str,
    edition_default: Edition | str = Edition.PC,
    source: Optional[DataSource] = None,
) -> IndexedDataset:
    """
    Return the shared IndexedDataset for `version`.

    Different spellings of one version ("1.18.2", "pc_1.18.2") return the
    same object. Raises InvalidVersion for unknown versions, CachedError if
    an earlier load of the same version failed, and the underlying
    McDataError otherwise.
    """
    source = source or get_data_source()
    record = resolve_version(version, edition_default, source)
    logger.debug("'%s' resolved to %s", version, record.key)

    def _build() -> IndexedDataset:
        return build_dataset(
            record,
            source,
            registry=cached_registry(source, record.edition),
            data_paths=cached_data_paths(source),
            feature_rules=cached_feature_rules(source, record.edition),
        )

    return get_cache(source).get_or_build(record.key, _build)


def list_supported_versions(
    edition: Edition | str = Edition.PC,
    source: Optional[DataSource] = None,
) -> List[str]:
    """All known minecraft versions for an edition, oldest to newest."""
    try:
        parsed = Edition.parse(edition)
    except ValueError:
        raise InvalidVersion(str(edition)) from None
    source = source or get_data_source()
    return cached_registry(source, parsed).supported_versions()


__all__ = [
    "resolve_version",
    "load",
    "list_supported_versions",
]
