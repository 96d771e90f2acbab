from __future__ import annotations

import gc
import logging
import threading
from datetime import date

from attendance_tracker.attendance.csv_record_repository import CsvDailyRecordRepository
from attendance_tracker.attendance.model import AttendanceRecord
from attendance_tracker.core.enums import AttendanceStatus

DAY = date(2025, 1, 5)


def _record(student_id: int, status=AttendanceStatus.PRESENT, name: str | None = None) -> AttendanceRecord:
    return AttendanceRecord(
        student_id=student_id,
        name=name or f"Student {student_id}",
        status=status,
        attendance_date=DAY,
        creation_date=date(2025, 1, 1),
    )


def test_missing_file_reads_empty(records_repo):
    assert records_repo.exists(DAY) is False
    assert records_repo.read_all(DAY) == []


def test_file_layout_has_header_and_sorted_rows(records_repo, storage_dir):
    records_repo.write_all(DAY, [_record(2, AttendanceStatus.ABSENT), _record(1)])

    path = storage_dir / "attendance_2025-01-05.csv"
    assert path.read_text(encoding="utf-8").splitlines() == [
        "date,student_id,student_name,attendance_status,creation_date",
        "2025-01-05,1,Student 1,PRESENT,2025-01-01",
        "2025-01-05,2,Student 2,ABSENT,2025-01-01",
    ]
    assert records_repo.exists(DAY) is True


def test_write_all_is_idempotent(records_repo):
    records = [_record(1), _record(2, AttendanceStatus.ABSENT)]
    records_repo.write_all(DAY, records)
    once = records_repo.read_all(DAY)

    records_repo.write_all(DAY, records)
    assert records_repo.read_all(DAY) == once


def test_write_all_merges_by_student_id(records_repo):
    records_repo.write_all(DAY, [_record(1), _record(2)])
    records_repo.write_all(DAY, [_record(1, AttendanceStatus.ABSENT)])

    by_id = {r.student_id: r for r in records_repo.read_all(DAY)}
    assert by_id[1].status == AttendanceStatus.ABSENT
    assert by_id[2] == _record(2)


def test_write_all_stamps_the_file_date(records_repo):
    other_day = AttendanceRecord(
        student_id=1,
        name="Ann",
        status=AttendanceStatus.PRESENT,
        attendance_date=date(2024, 12, 31),
        creation_date=date(2024, 12, 1),
    )
    records_repo.write_all(DAY, [other_day])
    assert records_repo.read_all(DAY)[0].attendance_date == DAY


def test_malformed_lines_are_skipped(records_repo, storage_dir, caplog):
    (storage_dir / "attendance_2025-01-05.csv").write_text(
        "date,student_id,student_name,attendance_status,creation_date\n"
        "2025-01-05,1,Ann,PRESENT,2025-01-01\n"
        "2025-01-05,x,Broken,PRESENT,2025-01-01\n"
        "\n"
        "2025-01-05,3,Cy,MAYBE,2025-01-01\n"
        "2025-01-05,4,Dee,ABSENT,2025-01-02\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING):
        records = records_repo.read_all(DAY)

    assert [r.student_id for r in records] == [1, 4]
    assert "Broken" in caplog.text


def test_legacy_files_are_readable(records_repo, storage_dir):
    (storage_dir / "attendance_2025-01-05.csv").write_text(
        "student_id,student_name,attendance_status\n1,Ann,PRESENT\n2,Bo,absent\n",
        encoding="utf-8",
    )
    (storage_dir / "attendance_2025-01-06.csv").write_text(
        "date,student_id,student_name,attendance_status\n2025-01-06,1,Ann,ABSENT\n",
        encoding="utf-8",
    )

    oldest = records_repo.read_all(DAY)
    assert [(r.student_id, r.status, r.creation_date) for r in oldest] == [
        (1, AttendanceStatus.PRESENT, DAY),
        (2, AttendanceStatus.ABSENT, DAY),
    ]
    dated = records_repo.read_all(date(2025, 1, 6))
    assert dated[0].creation_date == date(2025, 1, 6)


def test_legacy_file_is_upgraded_on_rewrite(records_repo, storage_dir):
    path = storage_dir / "attendance_2025-01-05.csv"
    path.write_text("student_id,student_name,attendance_status\n1,Ann,PRESENT\n", encoding="utf-8")

    records_repo.write_all(DAY, [_record(2)])

    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "date,student_id,student_name,attendance_status,creation_date"
    assert lines[1] == "2025-01-05,1,Ann,PRESENT,2025-01-05"


def test_list_dates_newest_first(records_repo, storage_dir):
    for day in (date(2025, 1, 3), date(2025, 2, 1), date(2024, 12, 30)):
        records_repo.write_all(day, [_record(1)])
    (storage_dir / "attendance_garbage.csv").write_text("", encoding="utf-8")
    (storage_dir / "notes.txt").write_text("", encoding="utf-8")

    assert records_repo.list_dates() == [date(2025, 2, 1), date(2025, 1, 3), date(2024, 12, 30)]


def test_remove_student_from_day(records_repo):
    records_repo.write_all(DAY, [_record(1), _record(2)])
    records_repo.remove(DAY, 1)
    assert [r.student_id for r in records_repo.read_all(DAY)] == [2]


def test_remove_without_file_is_noop(records_repo):
    records_repo.remove(DAY, 1)
    assert records_repo.exists(DAY) is False


def test_delete_day(records_repo):
    records_repo.write_all(DAY, [_record(1)])
    assert records_repo.delete(DAY) is True
    assert records_repo.delete(DAY) is False
    assert records_repo.read_all(DAY) == []


def test_no_temp_files_left_behind(records_repo, storage_dir):
    records_repo.write_all(DAY, [_record(1)])
    records_repo.write_all(DAY, [_record(2)])
    assert sorted(p.name for p in storage_dir.iterdir()) == ["attendance_2025-01-05.csv"]


def test_concurrent_writers_to_same_day_do_not_lose_updates(storage_dir):
    repo = CsvDailyRecordRepository(storage_dir)

    def worker(student_id: int):
        repo.write_all(DAY, [_record(student_id)])

    threads = [threading.Thread(target=worker, args=(n,)) for n in range(1, 21)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert [r.student_id for r in repo.read_all(DAY)] == list(range(1, 21))


HEADER_LINE = "date,student_id,student_name,attendance_status,creation_date\n"


def test_unterminated_quote_costs_only_its_own_line(records_repo, storage_dir, caplog):
    (storage_dir / "attendance_2025-01-05.csv").write_text(
        HEADER_LINE
        + "2025-01-05,1,Ann,PRESENT,2025-01-01\n"
        + '2025-01-05,2,"Bo,PRESENT,2025-01-01\n'
        + "2025-01-05,3,Cy,ABSENT,2025-01-01\n"
        + "2025-01-05,4,Dee,PRESENT,2025-01-01\n",
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING):
        assert [r.student_id for r in records_repo.read_all(DAY)] == [1, 3, 4]
    assert '"Bo,PRESENT' in caplog.text


def test_records_after_unterminated_quote_survive_a_rewrite(records_repo, storage_dir):
    (storage_dir / "attendance_2025-01-05.csv").write_text(
        HEADER_LINE + '2025-01-05,2,"Bo,PRESENT,2025-01-01\n' + "2025-01-05,3,Cy,ABSENT,2025-01-01\n",
        encoding="utf-8",
    )

    records_repo.write_all(DAY, [_record(9)])

    by_id = {r.student_id: r for r in records_repo.read_all(DAY)}
    assert sorted(by_id) == [3, 9]
    assert by_id[3].status == AttendanceStatus.ABSENT


def test_second_broken_quote_does_not_swallow_lines_between(records_repo, storage_dir):
    (storage_dir / "attendance_2025-01-05.csv").write_text(
        HEADER_LINE
        + '2025-01-05,2,"Bo,PRESENT,2025-01-01\n'
        + "2025-01-05,3,Cy,ABSENT,2025-01-01\n"
        + '2025-01-05,5,"Eve,PRESENT,2025-01-01\n'
        + "2025-01-05,6,Fay,PRESENT,2025-01-01\n",
        encoding="utf-8",
    )

    assert [r.student_id for r in records_repo.read_all(DAY)] == [3, 6]


def test_quoted_name_spanning_lines_is_read_back(records_repo):
    records_repo.write_all(DAY, [_record(1, name="Ann\nLee"), _record(2, name='Lee, "Bo"')])

    by_id = {r.student_id: r for r in records_repo.read_all(DAY)}
    assert by_id[1].name == "Ann\nLee"
    assert by_id[2].name == 'Lee, "Bo"'


def test_undecodable_line_is_skipped(records_repo, storage_dir, caplog):
    (storage_dir / "attendance_2025-01-05.csv").write_bytes(
        HEADER_LINE.encode("utf-8")
        + b"2025-01-05,1,Ann,PRESENT,2025-01-01\n"
        + b"2025-01-05,2,B\xff\xfeo,ABSENT,2025-01-01\n"
        + b"2025-01-05,3,Cy,PRESENT,2025-01-01\n"
    )

    with caplog.at_level(logging.WARNING):
        assert [r.student_id for r in records_repo.read_all(DAY)] == [1, 3]
    assert "undecodable line 3" in caplog.text

    records_repo.write_all(DAY, [_record(4)])
    assert [r.student_id for r in records_repo.read_all(DAY)] == [1, 3, 4]


def test_warning_shows_stored_text(records_repo, storage_dir, caplog):
    (storage_dir / "attendance_2025-01-05.csv").write_text(
        HEADER_LINE + '2025-01-05,x,"Lee, Ann",PRESENT,2025-01-01\n',
        encoding="utf-8",
    )

    with caplog.at_level(logging.WARNING):
        assert records_repo.read_all(DAY) == []
    assert '"Lee, Ann"' in caplog.text


def test_crlf_files_are_readable(records_repo, storage_dir):
    (storage_dir / "attendance_2025-01-05.csv").write_bytes(
        b"date,student_id,student_name,attendance_status,creation_date\r\n"
        b"2025-01-05,1,Ann,PRESENT,2025-01-01\r\n"
    )
    assert records_repo.read_all(DAY) == [
        AttendanceRecord(1, "Ann", AttendanceStatus.PRESENT, DAY, date(2025, 1, 1))
    ]


def test_unused_date_locks_are_released(records_repo):
    for offset in range(1, 6):
        records_repo.write_all(date(2025, 1, offset), [_record(1)])
    gc.collect()
    assert len(records_repo._locks) == 0
