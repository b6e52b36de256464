# src/mcdata/cli.py
"""
Command line inspector for a minecraft-data tree.

    mcdata versions --edition pc
    mcdata show 1.18.2
    mcdata feature 1.16.5 dimensionIsAnInt
    mcdata --data-root ./minecraft-data/data show bedrock_1.19.80

Exit codes: 0 on success, 1 on any McDataError, 2 on bad arguments.
"""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from .api import list_supported_versions, load
from .cache import get_data_source
from .config import load_settings
from .dataset import IndexedDataset
from .errors import McDataError
from .logging_config import configure_logging
from .source import DataSource, data_source_from_settings


logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcdata",
        description="Inspect versions, datasets and feature flags in a minecraft-data tree.",
    )
    parser.add_argument(
        "--data-root",
        type=Path,
        default=None,
        help="minecraft-data 'data' directory (overrides config/mcdata.yaml)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Logging level (DEBUG, INFO, WARNING, ...)",
    )

    sub = parser.add_subparsers(dest="command", required=True)

    versions = sub.add_parser("versions", help="List supported versions, oldest first")
    versions.add_argument("--edition", default=None, choices=["pc", "bedrock"])

    show = sub.add_parser("show", help="Resolve a version and summarize its dataset")
    show.add_argument("version", help='Version string, e.g. "1.18.2", "1.19", "bedrock_1.19.80"')

    feature = sub.add_parser("feature", help="Evaluate a feature flag for a version")
    feature.add_argument("version")
    feature.add_argument("name", help='Feature name, e.g. "dimensionIsAnInt"')

    return parser


def _resolve_source(data_root: Optional[Path]) -> DataSource:
    if data_root is not None:
        settings = load_settings()
        settings.data_root = data_root
        return data_source_from_settings(settings)
    return get_data_source()


def _render_versions(console: Console, versions: List[str], edition: str) -> None:
    table = Table(title=f"Supported {edition} versions ({len(versions)})")
    table.add_column("#", justify="right")
    table.add_column("Minecraft version")
    for index, version in enumerate(versions):
        table.add_row(str(index), version)
    console.print(table)


def _render_dataset(console: Console, data: IndexedDataset) -> None:
    v = data.version
    header = (
        f"{v.minecraft_version} ({v.edition.value})\n"
        f"protocol {v.version} | data version {v.data_version} | "
        f"major {v.major_version} | {v.release_type}"
    )
    console.print(Panel(header, title=v.key))

    table = Table(title="Records")
    table.add_column("Kind")
    table.add_column("Count", justify="right")
    counts = [
        ("blocks", len(data.blocks)),
        ("block states", len(data.blocks_by_state_id)),
        ("items", len(data.items)),
        ("foods", len(data.foods)),
        ("biomes", len(data.biomes)),
        ("effects", len(data.effects)),
        ("entities", len(data.entities)),
        ("mobs", len(data.mobs_by_id)),
        ("objects", len(data.objects_by_id)),
        ("sounds", len(data.sounds)),
        ("particles", len(data.particles)),
        ("instruments", len(data.instruments)),
        ("attributes", len(data.attributes)),
        ("enchantments", len(data.enchantments)),
        ("map icons", len(data.map_icons)),
        ("windows", len(data.windows)),
        ("block loot", len(data.block_loot)),
        ("entity loot", len(data.entity_loot)),
        ("language keys", len(data.language)),
    ]
    for kind, count in counts:
        table.add_row(kind, str(count))
    table.add_row("tints", "yes" if data.tints is not None else "no")
    table.add_row("collision shapes", "yes" if data.block_collision_shapes is not None else "no")
    console.print(table)


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = _build_parser().parse_args(argv)
    console = console or Console()

    try:
        settings = load_settings()
        configure_logging(args.log_level or settings.log_level)
        source = _resolve_source(args.data_root)

        if args.command == "versions":
            edition = args.edition or settings.default_edition
            _render_versions(console, list_supported_versions(edition, source=source), edition)
        elif args.command == "show":
            data = load(args.version, settings.default_edition, source=source)
            _render_dataset(console, data)
        elif args.command == "feature":
            data = load(args.version, settings.default_edition, source=source)
            value = data.support_feature(args.name)
            console.print(f"{args.name} @ {data.version.key} = {json.dumps(value, default=dict)}")
    except McDataError as exc:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]error:[/red] {escape(str(exc))}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
