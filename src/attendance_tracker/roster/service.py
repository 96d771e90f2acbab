from __future__ import annotations

import logging
from datetime import date
from typing import Optional

from ..attendance.repository import DailyRecordRepository
from ..core.exceptions import NotFoundError
from .model import StudentIdentity
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class RosterService:
    """Use case: manage the roster (add / list / search / remove students)."""

    def __init__(self, students: StudentRepository, records: DailyRecordRepository):
        self._students = students
        self._records = records

    def add_student(self, name: str, creation_date: Optional[date] = None) -> StudentIdentity:
        identity = self._students.add_student(name, creation_date)
        logger.info("Student %s added: %s", identity.student_id, identity.name)
        return identity

    def list_students(self) -> list[StudentIdentity]:
        return list(self._students.list_all())

    def search_students(self, name: Optional[str]) -> list[StudentIdentity]:
        return list(self._students.search_by_name(name))

    def get_student(self, student_id: int) -> StudentIdentity:
        identity = self._students.get(student_id)
        if not identity:
            raise NotFoundError(f"Student not found with ID: {student_id}")
        return identity

    def remove_student(self, student_id: int) -> int:
        """Remove a student and purge their records from every day file.

        Returns the number of day files that changed.
        """
        if not self._students.remove(student_id):
            raise NotFoundError(f"Student not found with ID: {student_id}")
        changed = self._records.remove_from_all(student_id)
        logger.info("Student %s removed (%d attendance files updated)", student_id, changed)
        return changed

    def restore_from_records(self) -> int:
        """Rebuild the roster from stored day files.

        Files are scanned newest first; the newest snapshot of each student wins.
        Students already on the roster are left untouched.
        """
        restored = 0
        for day in self._records.list_dates():
            for record in self._records.read_all(day):
                if self._students.get(record.student_id):
                    continue
                self._students.restore(
                    StudentIdentity(
                        student_id=record.student_id,
                        name=record.name,
                        creation_date=record.creation_date,
                    )
                )
                restored += 1

        if restored:
            logger.info("Restored %d students from attendance files", restored)
        return restored
