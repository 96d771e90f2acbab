from __future__ import annotations

import logging
import threading
from datetime import date
from typing import Optional

from ..common import datetime_utils
from ..common.validators import require_non_empty
from .model import StudentIdentity

logger = logging.getLogger(__name__)


class RosterStore:
    """In-process roster, the source of truth for which students exist.

    Every read and write goes through one lock, so callers never need their own
    locking. The id counter moves under the same lock as the insert.
    """

    def __init__(self):
        self._students: dict[int, StudentIdentity] = {}
        self._next_id = 1
        self._lock = threading.Lock()

    def add_student(self, name: str, creation_date: Optional[date] = None) -> StudentIdentity:
        name = require_non_empty(name, "Student name")
        creation_date = creation_date or datetime_utils.today()

        with self._lock:
            identity = StudentIdentity(student_id=self._next_id, name=name, creation_date=creation_date)
            self._students[identity.student_id] = identity
            self._next_id += 1

        logger.debug("Added student %s (%s)", identity.student_id, identity.name)
        return identity

    def get(self, student_id: int) -> Optional[StudentIdentity]:
        with self._lock:
            return self._students.get(student_id)

    def list_all(self) -> list[StudentIdentity]:
        with self._lock:
            items = list(self._students.values())
        items.sort(key=lambda s: s.student_id)
        return items

    def search_by_name(self, substring: Optional[str]) -> list[StudentIdentity]:
        if not substring or not substring.strip():
            return self.list_all()

        needle = substring.strip().casefold()
        return [s for s in self.list_all() if needle in s.name.casefold()]

    def remove(self, student_id: int) -> bool:
        with self._lock:
            return self._students.pop(student_id, None) is not None

    def restore(self, identity: StudentIdentity) -> StudentIdentity:
        with self._lock:
            self._students[identity.student_id] = identity
            # Ids are never reused, even across a rebuild.
            self._next_id = max(self._next_id, identity.student_id + 1)
        return identity

    def count(self) -> int:
        with self._lock:
            return len(self._students)
