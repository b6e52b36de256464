# src/mcdata/cache.py
"""
Process-wide caching for mcdata.

Responsibility:
  - VersionCache: a thread-safe, build-at-most-once memo keyed by string.
    Successes are shared by reference; failures are recorded and reported
    as CachedError on every later request for the same key.
  - Process-local singletons:
      * the default DataSource (from config/mcdata.yaml / env)
      * one VersionCache per data root, holding version registries,
        dataPaths.json, feature rules and built datasets

Usage:

    from mcdata.cache import get_cache, get_data_source

    source = get_data_source()
    cache = get_cache(source)
    registry = cached_registry(source, "pc")

Locking: the map lock is held only to find or create a key's slot; the build
itself runs under that slot's own lock, so different keys build in parallel
and the same key builds once.
"""

from __future__ import annotations

import logging
from pathlib import Path
from threading import Lock
from typing import Callable, Dict, Generic, Optional, Tuple, TypeVar

from .errors import CachedError, InternalError, McDataError
from .features import load_feature_rules
from .paths import DataPaths, load_data_paths
from .schema import Edition, FeatureRule
from .source import DataSource, data_source_from_settings
from .versions import VersionRegistry, load_registry


logger = logging.getLogger(__name__)

T = TypeVar("T")


class _Slot:
    """One cache entry: unset, a value, or a recorded failure."""

    __slots__ = ("lock", "done", "value", "error")

    def __init__(self) -> None:
        self.lock = Lock()
        self.done = False
        self.value: object = None
        self.error: Optional[BaseException] = None


class VersionCache(Generic[T]):
    """
    Memoize build results per key, building each key at most once.

    - get_or_build(key, build_fn): cached value, or run build_fn once.
      The caller whose build fails gets the original exception; everyone
      after that (including threads that were waiting on it) gets
      CachedError chained to it.
    - Exceptions outside the McDataError family are wrapped in
      InternalError before being recorded.
    - No eviction: entries live as long as the cache.
    """

    def __init__(self) -> None:
        self._lock = Lock()
        self._slots: Dict[str, _Slot] = {}
        self._build_count = 0

    def _slot(self, key: str) -> _Slot:
        with self._lock:
            slot = self._slots.get(key)
            if slot is None:
                slot = _Slot()
                self._slots[key] = slot
            return slot

    def get_or_build(self, key: str, build_fn: Callable[[], T]) -> T:
        slot = self._slot(key)

        # Fast path: published entries are never mutated again.
        if slot.done:
            return self._cached(key, slot)

        with slot.lock:
            if slot.done:
                return self._cached(key, slot)

            logger.debug("Cache miss for %s; building", key)
            with self._lock:
                self._build_count += 1
            try:
                value = build_fn()
            except McDataError as exc:
                self._record_failure(key, slot, exc)
                raise
            except Exception as exc:
                wrapped = InternalError(f"Unexpected error while building '{key}': {exc!r}")
                self._record_failure(key, slot, wrapped)
                raise wrapped from exc

            slot.value = value
            slot.done = True
            return value

    def _record_failure(self, key: str, slot: _Slot, exc: BaseException) -> None:
        logger.error("Building %s failed: %s", key, exc)
        slot.error = exc
        slot.done = True

    def _cached(self, key: str, slot: _Slot) -> T:
        if slot.error is not None:
            logger.debug("Cache hit for %s (recorded failure)", key)
            raise CachedError(key, slot.error) from slot.error
        logger.debug("Cache hit for %s", key)
        return slot.value  # type: ignore[return-value]

    def __contains__(self, key: object) -> bool:
        with self._lock:
            slot = self._slots.get(key)  # type: ignore[arg-type]
        return slot is not None and slot.done

    def __len__(self) -> int:
        with self._lock:
            return sum(1 for slot in self._slots.values() if slot.done)

    @property
    def build_count(self) -> int:
        """Number of builds executed so far (successful or not)."""
        return self._build_count

    def keys(self) -> Tuple[str, ...]:
        with self._lock:
            return tuple(k for k, slot in self._slots.items() if slot.done)


# ---------------------------------------------------------------------------
# Process-local singletons
# ---------------------------------------------------------------------------

_singletons_lock = Lock()
_data_source: Optional[DataSource] = None
_caches: Dict[Path, VersionCache] = {}


def get_data_source() -> DataSource:
    """
    Return the process-local default DataSource.

    First call reads settings (config file + env); later calls reuse it.
    Tests can monkeypatch mcdata.cache.data_source_from_settings.
    """
    global _data_source
    with _singletons_lock:
        if _data_source is None:
            _data_source = data_source_from_settings()
            logger.info("Using minecraft-data root %s", _data_source.root)
        return _data_source


def get_cache(source: DataSource) -> VersionCache:
    """Return the VersionCache for a data root, creating it on first use."""
    with _singletons_lock:
        cache = _caches.get(source.root)
        if cache is None:
            cache = VersionCache()
            _caches[source.root] = cache
        return cache


def cached_registry(source: DataSource, edition: Edition | str) -> VersionRegistry:
    edition = Edition.parse(edition)
    return get_cache(source).get_or_build(
        f"registry:{edition.value}", lambda: load_registry(source, edition)
    )


def cached_data_paths(source: DataSource) -> DataPaths:
    return get_cache(source).get_or_build("dataPaths", lambda: load_data_paths(source))


def cached_feature_rules(source: DataSource, edition: Edition | str) -> Tuple[FeatureRule, ...]:
    edition = Edition.parse(edition)
    return get_cache(source).get_or_build(
        f"features:{edition.value}", lambda: load_feature_rules(source, edition)
    )


def _reset_caches_for_tests() -> None:
    """
    Internal helper used by tests to hard-reset the singletons.

    Do not use this in normal code; it's only meant for test isolation.
    """
    global _data_source
    with _singletons_lock:
        _data_source = None
        _caches.clear()


__all__ = [
    "VersionCache",
    "get_data_source",
    "get_cache",
    "cached_registry",
    "cached_data_paths",
    "cached_feature_rules",
]
