"""
mcdata: typed, cached access to minecraft-data JSON.

    import mcdata

    data = mcdata.load("1.18.2")
    data.blocks.by_name["stone"]
    data.support_feature("dimensionIsAnInt")
"""

import logging

from .api import list_supported_versions, load, resolve_version
from .dataset import IndexedDataset
from .errors import (
    CachedError,
    ConfigError,
    DataFileNotFound,
    DataPathNotFound,
    EditionMismatch,
    FeatureNotSupported,
    InternalError,
    InvalidVersion,
    IoError,
    JsonParseError,
    McDataError,
    UnknownFeature,
    VersionNotFound,
)
from .schema import Edition, VersionRecord
from .source import DataSource

logging.getLogger(__name__).addHandler(logging.NullHandler())

__version__ = "0.1.0"

__all__ = [
    "load",
    "list_supported_versions",
    "resolve_version",
    "IndexedDataset",
    "DataSource",
    "Edition",
    "VersionRecord",
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
