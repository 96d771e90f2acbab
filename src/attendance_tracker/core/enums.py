from __future__ import annotations

from enum import Enum

from .exceptions import ValidationError


class AttendanceStatus(str, Enum):
    """Trạng thái điểm danh lưu trong file theo ngày."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"

    @classmethod
    def parse(cls, token: str | None) -> "AttendanceStatus":
        """Parse a status token case-insensitively."""
        if token is None:
            raise ValidationError("Status is required")
        try:
            return cls(str(token).strip().upper())
        except ValueError:
            raise ValidationError(f"Unrecognized attendance status: {token!r}") from None
