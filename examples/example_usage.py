"""Ví dụ: dùng service layer (không qua Flask).

Adds a few students, saves one day of attendance and prints the report.
"""

import importlib
from datetime import date

from attendance_tracker.config import get_settings_module
from attendance_tracker.container import build_container


def main():
    settings = importlib.import_module(get_settings_module())
    container = build_container(storage_dir=settings.STORAGE_DIR)

    ann = container.roster_service.add_student("Ann", date(2025, 1, 1))
    bo = container.roster_service.add_student("Bo", date(2025, 1, 5))

    report = container.attendance_service.save_daily_attendance(
        date(2025, 1, 5),
        [(ann.student_id, "present"), (bo.student_id, "absent")],
    )
    print(f"{report.report_date}: {report.present}/{report.total} present ({report.rate:.2f}%)")
    for entry in report.entries:
        print(f"  {entry.student_id:<4} {entry.name:<20} {entry.status_label}")


if __name__ == "__main__":
    main()
