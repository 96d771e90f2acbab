"""CSV line codec for daily attendance records.

Three line layouts are accepted on read, chosen by field count:

* 5 fields (current): date, student_id, student_name, attendance_status, creation_date
* 4 fields: date, student_id, student_name, attendance_status
* 3 fields (oldest): student_id, student_name, attendance_status

Missing dates fall back to the attendance date, and for the oldest layout to
the date of the file the line was read from. Only the current layout is
written.
"""

from __future__ import annotations

import csv
import io
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import format_iso_date, parse_iso_date
from ..core.enums import AttendanceStatus
from ..core.exceptions import MalformedRecordError
from .model import AttendanceRecord

CURRENT_FIELDS = 5
LEGACY_DATED_FIELDS = 4
LEGACY_UNDATED_FIELDS = 3


def encode_fields(record: AttendanceRecord) -> list[str]:
    return [
        format_iso_date(record.attendance_date),
        str(record.student_id),
        record.name,
        record.status.value,
        format_iso_date(record.creation_date),
    ]


def encode_line(record: AttendanceRecord) -> str:
    buf = io.StringIO()
    csv.writer(buf, lineterminator="").writerow(encode_fields(record))
    return buf.getvalue()


def _join(fields: Sequence[str]) -> str:
    return ",".join(fields)


def _parse_date(value: str, line: str) -> date:
    try:
        return parse_iso_date(value)
    except ValueError:
        raise MalformedRecordError(f"Invalid date {value!r}", line) from None


def decode_fields(fields: Sequence[str], file_date: date, line: Optional[str] = None) -> AttendanceRecord:
    line = line if line is not None else _join(fields)
    count = len(fields)

    if count == CURRENT_FIELDS:
        attendance_date = _parse_date(fields[0], line)
        id_cell, name, status_cell = fields[1], fields[2], fields[3]
        creation_cell = fields[4].strip()
        creation_date = _parse_date(creation_cell, line) if creation_cell else attendance_date
    elif count == LEGACY_DATED_FIELDS:
        attendance_date = _parse_date(fields[0], line)
        id_cell, name, status_cell = fields[1], fields[2], fields[3]
        creation_date = attendance_date
    elif count == LEGACY_UNDATED_FIELDS:
        id_cell, name, status_cell = fields[0], fields[1], fields[2]
        attendance_date = creation_date = file_date
    else:
        raise MalformedRecordError(f"Expected 3 to 5 columns, got {count}", line)

    try:
        student_id = int(id_cell.strip())
    except ValueError:
        raise MalformedRecordError(f"Invalid student ID {id_cell!r}", line) from None

    try:
        status = AttendanceStatus(status_cell.strip().upper())
    except ValueError:
        raise MalformedRecordError(f"Invalid attendance status {status_cell!r}", line) from None

    return AttendanceRecord(
        student_id=student_id,
        name=name.strip(),
        status=status,
        attendance_date=attendance_date,
        creation_date=creation_date,
    )


def decode_line(line: str, file_date: date) -> AttendanceRecord:
    if ends_in_open_quote(line):
        raise MalformedRecordError("Unterminated quoted field", line)
    try:
        rows = list(csv.reader(io.StringIO(line), strict=True))
    except csv.Error as e:
        raise MalformedRecordError(str(e), line) from None
    if len(rows) != 1:
        raise MalformedRecordError("Expected exactly one record", line)
    return decode_fields(rows[0], file_date, line)


def ends_in_open_quote(text: str) -> bool:
    """True when ``text`` stops inside a quoted field, i.e. the record continues on the next line."""
    in_quotes = False
    at_field_start = True
    i = 0
    while i < len(text):
        ch = text[i]
        if in_quotes:
            if ch == '"':
                if text[i + 1 : i + 2] == '"':
                    i += 1
                else:
                    in_quotes = False
            at_field_start = False
        elif ch == '"' and at_field_start:
            in_quotes = True
            at_field_start = False
        else:
            at_field_start = ch == ","
        i += 1
    return in_quotes
