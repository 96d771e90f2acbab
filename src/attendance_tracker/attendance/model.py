from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from ..common.datetime_utils import format_iso_date
from ..core.constants import UNSET_STATUS
from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): trạng thái của một học sinh trong một ngày.

    name và creation_date là bản chụp tại thời điểm ghi.
    """

    student_id: int
    name: str
    status: AttendanceStatus
    attendance_date: date
    creation_date: date


@dataclass(frozen=True)
class AttendanceEntry:
    """Read-model: one visible student's status on a queried date."""

    student_id: int
    name: str
    status: Optional[AttendanceStatus]
    attendance_date: date

    @property
    def status_label(self) -> str:
        return self.status.value if self.status else UNSET_STATUS

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "status": self.status_label,
            "date": format_iso_date(self.attendance_date),
        }


@dataclass(frozen=True)
class AttendanceReport:
    report_date: date
    total: int
    present: int
    absent: int
    rate: float
    entries: list[AttendanceEntry] = field(default_factory=list)

    @classmethod
    def from_entries(cls, report_date: date, entries: list[AttendanceEntry]) -> "AttendanceReport":
        total = len(entries)
        present = sum(1 for e in entries if e.status == AttendanceStatus.PRESENT)
        absent = sum(1 for e in entries if e.status == AttendanceStatus.ABSENT)
        rate = present * 100.0 / total if total else 0.0
        return cls(report_date=report_date, total=total, present=present, absent=absent, rate=rate, entries=entries)

    def to_dict(self) -> dict:
        return {
            "date": format_iso_date(self.report_date),
            "totalStudents": self.total,
            "presentCount": self.present,
            "absentCount": self.absent,
            "attendanceRate": self.rate,
            "students": [e.to_dict() for e in self.entries],
        }
