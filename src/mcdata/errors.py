# src/mcdata/errors.py
"""
Exception taxonomy for mcdata.

Every error raised by the library derives from McDataError so callers can
catch the whole family at once, while still telling apart:

  - bad input         -> InvalidVersion, EditionMismatch, UnknownFeature
  - bad data on disk  -> VersionNotFound, DataPathNotFound, DataFileNotFound,
                         IoError, JsonParseError
  - earlier failure   -> CachedError
  - bugs              -> InternalError

Kinds that match a builtin category also inherit from it, so code written
against plain ValueError / FileNotFoundError / LookupError keeps working.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class McDataError(Exception):
    """Base class for all mcdata errors."""


class InvalidVersion(McDataError, ValueError):
    """The version string does not resolve to any known version."""

    def __init__(self, version: str, edition: Optional[str] = None) -> None:
        self.version = version
        self.edition = edition
        where = f" for edition '{edition}'" if edition else ""
        super().__init__(f"Invalid or unsupported version '{version}'{where}.")


class VersionNotFound(McDataError, LookupError):
    """A resolved version has no entry in dataPaths.json."""

    def __init__(self, version: str, edition: str) -> None:
        self.version = version
        self.edition = edition
        super().__init__(
            f"Version '{version}' ({edition}) is missing from dataPaths.json; "
            "the vendored data is inconsistent."
        )


class DataPathNotFound(McDataError, LookupError):
    """A data kind has no directory entry for a version."""

    def __init__(self, kind: str, version: str, edition: str) -> None:
        self.kind = kind
        self.version = version
        self.edition = edition
        super().__init__(
            f"No '{kind}' data path for version '{version}' ({edition})."
        )


class DataFileNotFound(McDataError, FileNotFoundError):
    """The expected JSON file (or its directory) does not exist."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        super().__init__(f"Data file not found: {self.path}")


class IoError(McDataError, OSError):
    """A data file exists but could not be read."""

    def __init__(self, path: Path, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Could not read {self.path}: {reason}")


class JsonParseError(McDataError, ValueError):
    """File content is not valid JSON or does not fit the expected shape."""

    def __init__(self, path: Optional[Path], reason: str) -> None:
        self.path = Path(path) if path is not None else None
        self.reason = reason
        where = str(self.path) if self.path is not None else "<document>"
        super().__init__(f"Failed to parse {where}: {reason}")


class CachedError(McDataError):
    """
    A previous build for the same key already failed.

    The original exception is available as `original` and is also chained as
    __cause__ when raised by the cache.
    """

    def __init__(self, key: str, original: BaseException) -> None:
        self.key = key
        self.original = original
        super().__init__(
            f"Loading '{key}' failed earlier in this process: {original}"
        )


class InternalError(McDataError):
    """An unexpected failure that is not one of the documented kinds."""


class UnknownFeature(McDataError, LookupError):
    """No rule with this feature name exists at all."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Unknown feature '{name}'.")


class FeatureNotSupported(McDataError):
    """The feature exists but none of its rules cover the version."""

    def __init__(self, name: str, version: str) -> None:
        self.name = name
        self.version = version
        super().__init__(
            f"Feature '{name}' has no entry matching version '{version}'."
        )


class EditionMismatch(McDataError, ValueError):
    """Attempted to compare versions from two different editions."""

    def __init__(self, left: str, right: str) -> None:
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot compare versions across editions ({left} vs {right})."
        )


class ConfigError(McDataError, ValueError):
    """Invalid or incomplete mcdata configuration."""


__all__ = [
    "McDataError",
    "InvalidVersion",
    "VersionNotFound",
    "DataPathNotFound",
    "DataFileNotFound",
    "IoError",
    "JsonParseError",
    "CachedError",
    "InternalError",
    "UnknownFeature",
    "FeatureNotSupported",
    "EditionMismatch",
    "ConfigError",
]
