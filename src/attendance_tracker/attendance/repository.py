from __future__ import annotations

from datetime import date
from typing import Iterable, Protocol, Sequence

from .model import AttendanceRecord


class DailyRecordRepository(Protocol):
    """One set of attendance records per calendar date."""

    def exists(self, day: date) -> bool:
        raise NotImplementedError

    def read_all(self, day: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def write_all(self, day: date, records: Iterable[AttendanceRecord]) -> None:
        """Merge records into the day by student id, then replace the whole day."""

        raise NotImplementedError

    def list_dates(self) -> Sequence[date]:
        raise NotImplementedError

    def remove(self, day: date, student_id: int) -> None:
        raise NotImplementedError

    def delete(self, day: date) -> bool:
        raise NotImplementedError

    def remove_from_all(self, student_id: int) -> int:
        raise NotImplementedError
