from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import StudentIdentity


class StudentRepository(Protocol):
    """Giao diện repository cho danh sách học sinh.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp cách lưu trữ.
    """

    def add_student(self, name: str, creation_date: Optional[date] = None) -> StudentIdentity:
        raise NotImplementedError

    def get(self, student_id: int) -> Optional[StudentIdentity]:
        raise NotImplementedError

    def list_all(self) -> Sequence[StudentIdentity]:
        raise NotImplementedError

    def search_by_name(self, substring: Optional[str]) -> Sequence[StudentIdentity]:
        raise NotImplementedError

    def remove(self, student_id: int) -> bool:
        raise NotImplementedError

    def restore(self, identity: StudentIdentity) -> StudentIdentity:
        """Re-insert an identity with a known id (roster rebuild at startup)."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
