from __future__ import annotations

from datetime import date

import pytest

from attendance_tracker.attendance.csv_record_repository import CsvDailyRecordRepository
from attendance_tracker.attendance.service import AttendanceService
from attendance_tracker.common import datetime_utils
from attendance_tracker.roster.in_memory_repository import RosterStore
from attendance_tracker.roster.service import RosterService
from attendance_tracker.storage.bootstrap import ensure_storage_dir


@pytest.fixture
def fixed_today(monkeypatch):
    today = date(2025, 6, 15)
    monkeypatch.setattr(datetime_utils, "today", lambda: today)
    return today


@pytest.fixture
def storage_dir(tmp_path):
    return ensure_storage_dir(tmp_path / "attendance_data")


@pytest.fixture
def records_repo(storage_dir):
    return CsvDailyRecordRepository(storage_dir)


@pytest.fixture
def roster():
    return RosterStore()


@pytest.fixture
def attendance_service(records_repo, roster):
    return AttendanceService(records_repo, roster)


@pytest.fixture
def roster_service(roster, records_repo):
    return RosterService(roster, records_repo)


@pytest.fixture
def app(monkeypatch, tmp_path):
    from attendance_tracker.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    return create_app({"STORAGE_DIR": str(tmp_path / "api_data")})


@pytest.fixture
def client(app):
    return app.test_client()
