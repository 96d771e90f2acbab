from __future__ import annotations

import logging
from collections.abc import Mapping
from datetime import date
from typing import Iterable, Optional, Union

from ..common import datetime_utils
from ..common.validators import require_int
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..roster.repository import StudentRepository
from .model import AttendanceEntry, AttendanceRecord, AttendanceReport
from .repository import DailyRecordRepository

logger = logging.getLogger(__name__)

# (student_id, status_token) or {"studentId"/"student_id": ..., "status": ...}
EntryInput = Union[tuple, Mapping]


class AttendanceService:
    """Reconciles the roster with the stored day files.

    A student is visible on a date only when their creation date is on or
    before it; the same rule applies to stored records.
    """

    def __init__(self, records: DailyRecordRepository, students: StudentRepository):
        self._records = records
        self._students = students

    def attendance_for_date(self, day: Optional[date] = None) -> list[AttendanceEntry]:
        day = day or datetime_utils.today()

        roster = [s for s in self._students.list_all() if s.creation_date <= day]
        by_id = {r.student_id: r for r in self._records.read_all(day) if (r.creation_date or r.attendance_date) <= day}

        result: list[AttendanceEntry] = []
        for student in roster:
            record = by_id.pop(student.student_id, None)
            result.append(
                AttendanceEntry(
                    student_id=student.student_id,
                    name=student.name,
                    status=record.status if record else None,
                    attendance_date=record.attendance_date if record else day,
                )
            )

        # Records with no roster identity are still reported.
        for record in by_id.values():
            result.append(
                AttendanceEntry(
                    student_id=record.student_id,
                    name=record.name,
                    status=record.status,
                    attendance_date=record.attendance_date,
                )
            )

        result.sort(key=lambda e: e.student_id)
        return result

    def save_daily_attendance(self, day: Optional[date], entries: Iterable[EntryInput]) -> AttendanceReport:
        """Validate the whole batch, then persist it with a single write.

        Nothing is written when any student id is unknown or any status is invalid.
        """
        day = day or datetime_utils.today()

        pairs = [_unpack_entry(e) for e in entries]
        if not pairs:
            raise ValidationError("At least one attendance entry is required")

        to_persist: list[AttendanceRecord] = []
        for student_id, token in pairs:
            student = self._students.get(student_id)
            if not student:
                raise NotFoundError(f"Student not found with ID: {student_id}")

            try:
                status = AttendanceStatus.parse(token)
            except ValidationError:
                raise ValidationError(f"Invalid status {token!r} for student {student_id}") from None

            to_persist.append(
                AttendanceRecord(
                    student_id=student.student_id,
                    name=student.name,
                    status=status,
                    attendance_date=day,
                    creation_date=student.creation_date,
                )
            )

        self._records.write_all(day, to_persist)
        logger.info("Saved attendance for %s (%d entries)", day, len(to_persist))
        return self.build_report(day)

    def mark_attendance(self, student_id: int, status: str, day: Optional[date] = None) -> AttendanceEntry:
        day = day or datetime_utils.today()

        student = self._students.get(student_id)
        if not student:
            raise NotFoundError(f"Student not found with ID: {student_id}")
        if student.creation_date > day:
            raise ValidationError(f"Student {student_id} did not exist on {datetime_utils.format_iso_date(day)}")

        self.save_daily_attendance(day, [(student_id, status)])
        return next(e for e in self.attendance_for_date(day) if e.student_id == student_id)

    def build_report(self, day: Optional[date] = None) -> AttendanceReport:
        day = day or datetime_utils.today()
        return AttendanceReport.from_entries(day, self.attendance_for_date(day))

    def available_dates(self) -> list[date]:
        return list(self._records.list_dates())


def _unpack_entry(entry: EntryInput) -> tuple[int, str]:
    if isinstance(entry, Mapping):
        raw_id = entry.get("studentId", entry.get("student_id"))
        token = entry.get("status")
    else:
        try:
            raw_id, token = entry
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid attendance entry: {entry!r}") from None
    return require_int(raw_id, "studentId"), token
