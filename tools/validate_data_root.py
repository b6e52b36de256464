# tools/validate_data_root.py

import sys           # for exit codes
from pathlib import Path

# make src discoverable if running as a script
# __file__ is .../tools/validate_data_root.py; parents[1] is the project root
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.append(str(PROJECT_ROOT / "src"))

from mcdata.config import load_settings  # noqa: E402
from mcdata.errors import McDataError  # noqa: E402
from mcdata.paths import load_data_paths  # noqa: E402
from mcdata.schema import Edition  # noqa: E402
from mcdata.source import data_source_from_settings  # noqa: E402
from mcdata.versions import load_registry  # noqa: E402


def validate(settings=None) -> list:
    """
    Check that the configured data root looks like minecraft-data/data.

    Returns a list of human-readable problems; empty means OK.
    """
    problems = []
    source = data_source_from_settings(settings)

    try:
        data_paths = load_data_paths(source)
    except McDataError as e:
        return [f"dataPaths.json: {e}"]

    for edition in Edition:
        try:
            registry = load_registry(source, edition)
        except McDataError as e:
            problems.append(f"{edition.value} versions: {e}")
            continue

        known = data_paths.versions(edition)
        missing = [
            r.minecraft_version
            for r in registry.records
            if r.minecraft_version not in known and r.major_version not in known
        ]
        if missing:
            # Snapshots are often listed without data; report, don't fail.
            print(f"{edition.value}: {len(missing)} versions without dataPaths entries "
                  f"(e.g. {', '.join(missing[:5])})")
        print(f"{edition.value}: {len(registry)} versions, newest {registry.newest().minecraft_version}")

    return problems


def main() -> None:
    """Load settings, validate the data root, fail fast on errors."""
    try:
        settings = load_settings()
        print("Data root:", settings.data_root)
        problems = validate(settings)
    except McDataError as e:
        print("Data root validation FAILED:", file=sys.stderr)
        print(repr(e), file=sys.stderr)
        sys.exit(1)

    if problems:
        print("Data root validation FAILED:", file=sys.stderr)
        for problem in problems:
            print("  -", problem, file=sys.stderr)
        sys.exit(1)

    print("Data root validation OK.")


if __name__ == "__main__":
    main()  # run main() only when script is executed directly
