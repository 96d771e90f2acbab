"""Backup attendance files.

Zips the whole storage directory (one CSV per day) into ``backups/``.
"""

from __future__ import annotations

import importlib
import shutil
from datetime import datetime
from pathlib import Path

from attendance_tracker.config import get_settings_module


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    storage_dir = Path(settings.STORAGE_DIR)
    if not storage_dir.is_dir():
        raise SystemExit(f"Attendance directory not found: {storage_dir}")

    out_dir = Path(__file__).resolve().parents[1] / "backups"
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    archive = shutil.make_archive(str(out_dir / f"attendance_data_{ts}"), "zip", root_dir=storage_dir)
    print(f"OK: Backup created: {archive}")


if __name__ == "__main__":
    main()
