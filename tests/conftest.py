# tests/conftest.py

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure src/ is on sys.path for test imports like `import mcdata`, and the
# project root for `tests.fakes`.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_ROOT = PROJECT_ROOT / "src"

for _path in (SRC_ROOT, PROJECT_ROOT):
    if str(_path) not in sys.path:
        sys.path.insert(0, str(_path))

from mcdata import cache as mcdata_cache  # noqa: E402
from mcdata.source import DataSource  # noqa: E402
from tests.fakes.fake_minecraft_data import build_fake_data_root  # noqa: E402


@pytest.fixture(autouse=True)
def _isolated_mcdata(monkeypatch):
    """Fresh process-wide caches and no ambient MCDATA_* settings per test."""
    for name in ("MCDATA_CONFIG", "MCDATA_DATA_ROOT", "MCDATA_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    mcdata_cache._reset_caches_for_tests()
    yield
    mcdata_cache._reset_caches_for_tests()


@pytest.fixture
def data_root(tmp_path: Path) -> Path:
    return build_fake_data_root(tmp_path)


@pytest.fixture
def source(data_root: Path) -> DataSource:
    return DataSource(root=data_root)
