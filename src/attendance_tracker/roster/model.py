from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from ..common.datetime_utils import format_iso_date


@dataclass(frozen=True)
class StudentIdentity:
    """Thực thể miền (domain): học sinh trong danh sách lớp.

    Lưu ý: id, tên và ngày tạo không đổi sau khi tạo.
    """

    student_id: int
    name: str
    creation_date: date

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "creationDate": format_iso_date(self.creation_date),
        }
