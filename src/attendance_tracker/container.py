from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .attendance.csv_record_repository import CsvDailyRecordRepository
from .attendance.service import AttendanceService
from .roster.in_memory_repository import RosterStore
from .roster.service import RosterService
from .storage.bootstrap import ensure_storage_dir


@dataclass(frozen=True)
class Container:
    students_repo: RosterStore
    records_repo: CsvDailyRecordRepository

    roster_service: RosterService
    attendance_service: AttendanceService


def build_container(*, storage_dir: str | Path) -> Container:
    ensure_storage_dir(storage_dir)

    students_repo = RosterStore()
    records_repo = CsvDailyRecordRepository(storage_dir)

    roster_service = RosterService(students_repo, records_repo)
    attendance_service = AttendanceService(records_repo, students_repo)

    return Container(
        students_repo=students_repo,
        records_repo=records_repo,
        roster_service=roster_service,
        attendance_service=attendance_service,
    )
