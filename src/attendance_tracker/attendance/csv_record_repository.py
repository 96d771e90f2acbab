from __future__ import annotations

import csv
import logging
import os
import tempfile
import threading
import weakref
from datetime import date
from pathlib import Path
from typing import Iterable, Optional

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.constants import CSV_HEADER, FILE_EXTENSION, FILE_PREFIX
from ..core.exceptions import MalformedRecordError, StorageError
from . import codec
from .model import AttendanceRecord

logger = logging.getLogger(__name__)


class CsvDailyRecordRepository:
    """Date-partitioned CSV files: ``<storage_dir>/attendance_YYYY-MM-DD.csv``.

    Every write is read-merge-rewrite of the whole day, done under a lock for
    that date and finished with an atomic rename. Writers to different dates
    do not contend. The storage directory is created by
    ``storage.bootstrap.ensure_storage_dir`` before this class is used.
    """

    def __init__(self, storage_dir: str | Path):
        self._dir = Path(storage_dir)
        # Entries vanish once no caller holds the lock for that date.
        self._locks: weakref.WeakValueDictionary = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    @property
    def storage_dir(self) -> Path:
        return self._dir

    def path_for(self, day: date) -> Path:
        return self._dir / f"{FILE_PREFIX}{format_iso_date(day)}{FILE_EXTENSION}"

    def _lock_for(self, day: date):
        with self._locks_guard:
            lock = self._locks.get(day)
            if lock is None:
                lock = threading.Lock()
                self._locks[day] = lock
            return lock

    def exists(self, day: date) -> bool:
        return self.path_for(day).is_file()

    def read_all(self, day: date) -> list[AttendanceRecord]:
        with self._lock_for(day):
            return self._read(day)

    def write_all(self, day: date, records: Iterable[AttendanceRecord]) -> None:
        with self._lock_for(day):
            merged = {r.student_id: r for r in self._read(day)}
            for r in records:
                merged[r.student_id] = r
            self._rewrite(day, merged.values())

    def list_dates(self) -> list[date]:
        if not self._dir.is_dir():
            return []

        dates: list[date] = []
        for path in self._dir.glob(f"{FILE_PREFIX}*{FILE_EXTENSION}"):
            stem = path.name[len(FILE_PREFIX) : -len(FILE_EXTENSION)]
            try:
                dates.append(parse_iso_date(stem))
            except ValueError:
                logger.warning("Skipping file with unexpected name: %s", path.name)

        dates.sort(reverse=True)
        return dates

    def remove(self, day: date, student_id: int) -> None:
        with self._lock_for(day):
            if not self.exists(day):
                return
            remaining = [r for r in self._read(day) if r.student_id != student_id]
            self._rewrite(day, remaining)
            logger.info("Removed student %s from %s", student_id, self.path_for(day).name)

    def delete(self, day: date) -> bool:
        with self._lock_for(day):
            path = self.path_for(day)
            if not path.exists():
                return False
            try:
                path.unlink()
            except OSError as e:
                raise StorageError(f"Cannot delete attendance file {path}: {e}") from e
            logger.info("Deleted attendance file: %s", path)
            return True

    def remove_from_all(self, student_id: int) -> int:
        changed = 0
        for day in self.list_dates():
            with self._lock_for(day):
                records = self._read(day)
                remaining = [r for r in records if r.student_id != student_id]
                if len(remaining) != len(records):
                    self._rewrite(day, remaining)
                    changed += 1
        return changed

    def _read(self, day: date) -> list[AttendanceRecord]:
        path = self.path_for(day)
        if not path.exists():
            return []

        try:
            raw_lines = path.read_bytes().split(b"\n")
        except OSError as e:
            raise StorageError(f"Cannot read attendance file {path}: {e}") from e

        # None marks a line that is not valid UTF-8.
        lines: list[Optional[str]] = []
        for number, raw in enumerate(raw_lines, start=1):
            try:
                lines.append(raw.decode("utf-8"))
            except UnicodeDecodeError:
                logger.warning("Skipping undecodable line %d in %s: %r", number, path.name, raw)
                lines.append(None)

        records: list[AttendanceRecord] = []
        seen_content = False
        i = 0
        while i < len(lines):
            text = lines[i]
            if text is None or not text.strip():
                i += 1
                continue
            if not seen_content:
                seen_content = True
                if _is_header(text):
                    i += 1
                    continue

            end = self._record_end(lines, i)
            if end is None:
                logger.warning("Skipping line %d in %s: unterminated quoted field: %r", i + 1, path.name, text)
                i += 1
                continue

            record_text = "\n".join(lines[i : end + 1]).rstrip("\r")
            try:
                records.append(codec.decode_line(record_text, day))
                i = end + 1
            except MalformedRecordError as e:
                logger.warning("Skipping malformed line %d in %s: %s", i + 1, path.name, e)
                i += 1

        logger.debug("Read %d attendance records from %s", len(records), path.name)
        return records

    @staticmethod
    def _record_end(lines: list[Optional[str]], start: int) -> Optional[int]:
        """Index of the last physical line of the record starting at ``start``.

        A record continues onto following lines only while a quoted field is
        open. Returns None when the quote never closes.
        """
        text = lines[start]
        end = start
        while codec.ends_in_open_quote(text):
            end += 1
            if end >= len(lines) or lines[end] is None:
                return None
            text = f"{text}\n{lines[end]}"
        return end

    def _rewrite(self, day: date, records: Iterable[AttendanceRecord]) -> None:
        path = self.path_for(day)
        rows = sorted(records, key=lambda r: r.student_id)
        tmp_name: Optional[str] = None
        try:
            with tempfile.NamedTemporaryFile(
                "w",
                dir=self._dir,
                prefix=f".{path.stem}.",
                suffix=".tmp",
                delete=False,
                newline="",
                encoding="utf-8",
            ) as tmp:
                tmp_name = tmp.name
                writer = csv.writer(tmp, lineterminator="\n")
                writer.writerow(CSV_HEADER)
                for r in rows:
                    if r.attendance_date != day:
                        r = AttendanceRecord(
                            student_id=r.student_id,
                            name=r.name,
                            status=r.status,
                            attendance_date=day,
                            creation_date=r.creation_date,
                        )
                    writer.writerow(codec.encode_fields(r))
                tmp.flush()
                os.fsync(tmp.fileno())
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise StorageError(f"Cannot write attendance file {path}: {e}") from e

        logger.info("Saved %d attendance records to %s", len(rows), path.name)


def _is_header(line: str) -> bool:
    return line.split(",", 1)[0].strip().strip('"').lower() in {CSV_HEADER[0], CSV_HEADER[1]}
