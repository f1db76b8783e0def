import datetime

import pytest

import config
from core.database import init_db
from services.file_manager import init_paths
from services.member_service import MemberRegistry

FIXED_NOW = datetime.datetime(2024, 3, 15, 19, 30, 0)


@pytest.fixture
def fixed_clock():
    return lambda: FIXED_NOW


@pytest.fixture
def registry(fixed_clock):
    return MemberRegistry(clock=fixed_clock)


@pytest.fixture
def data_folder(tmp_path, monkeypatch):
    """Points every global path at a throwaway folder with a fresh database."""
    for name in ("BASE_FOLDER", "DB_FILE", "EXPORT_FOLDER"):
        monkeypatch.setattr(config, name, getattr(config, name))
    monkeypatch.setattr(config, "CONFIG_FILE", tmp_path / ".chapter_roster_config")

    base = tmp_path / "data"
    init_paths(base)
    init_db()
    return base


def attended(year, *months):
    """Attendance record with the given months of one year marked present."""
    return {year: {m: True for m in months}}
