"""
Shared pytest fixtures for all tests.
"""

import pytest
from pathlib import Path

# Add the repo root to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from vehicle_tables.ingest.parse_config import PROFILE_ENV_VAR, ParseConfig
from tests.fixtures import GUN, HULL, TURRET, make_table


@pytest.fixture(autouse=True)
def _no_profile_env(monkeypatch):
    """Keep a developer's profile variable out of the tests."""
    monkeypatch.delenv(PROFILE_ENV_VAR, raising=False)


@pytest.fixture
def parse_config():
    """The shipped base parse profile."""
    return ParseConfig.default()


@pytest.fixture
def mixed_table():
    """A wrapped table with one gun, one turret and one hull."""
    return make_table(GUN, TURRET, HULL)


@pytest.fixture
def table_dir(tmp_path):
    """Directory of table files for file-level tests.

    Contains:
    - guns.lua     (1 gun)
    - turrets.lua  (1 turret)
    - hulls.lua    (1 hull)
    """
    data_dir = tmp_path / "tables"
    data_dir.mkdir()
    (data_dir / "guns.lua").write_text(make_table(GUN), encoding="utf-8")
    (data_dir / "turrets.lua").write_text(make_table(TURRET), encoding="utf-8")
    (data_dir / "hulls.lua").write_text(make_table(HULL), encoding="utf-8")
    return data_dir
