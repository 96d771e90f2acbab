"""Constants and defaults.

Note: Keep constants here to avoid magic strings spread across code.
"""

DATE_FORMAT = "%Y-%m-%d"

DEFAULT_STORAGE_DIR = "attendance_data"
FILE_PREFIX = "attendance_"
FILE_EXTENSION = ".csv"

# Column names of the current file schema, written as the first line of each file.
CSV_HEADER = ("date", "student_id", "student_name", "attendance_status", "creation_date")

UNSET_STATUS = "unset"
