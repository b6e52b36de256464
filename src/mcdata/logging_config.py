# src/mcdata/logging_config.py
"""
Logging setup for mcdata entrypoints.

The library itself only creates module loggers (logging.getLogger(__name__))
and never attaches handlers. Command line tools call configure_logging()
once, for example:

    from mcdata.logging_config import configure_logging
    configure_logging("DEBUG")

after which cache hits/misses and dataset builds are visible on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Union


def _coerce_level(level: Union[int, str]) -> int:
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level '{level}'")
    return resolved


def configure_logging(level: Union[int, str] = logging.INFO) -> None:
    """
    Configure root logging if no handlers are attached yet.

    Args:
        level: logging level as an int (logging.DEBUG) or name ("DEBUG")
    """
    numeric = _coerce_level(level)
    root = logging.getLogger()

    # Someone already configured logging; only adjust our own package.
    if root.handlers:
        logging.getLogger("mcdata").setLevel(numeric)
        return

    handler = logging.StreamHandler(stream=sys.stdout)
    formatter = logging.Formatter(
        fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    )
    handler.setFormatter(formatter)
    root.addHandler(handler)
    root.setLevel(numeric)
