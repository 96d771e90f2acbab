import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

# One CSV file per day is written into this directory.
STORAGE_DIR = os.getenv("ATTENDANCE_DIR", "attendance_data")

LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

DEBUG = True

# Rebuild the in-memory roster from the stored day files on startup.
RESTORE_ROSTER_ON_STARTUP = bool(int(os.getenv("RESTORE_ROSTER_ON_STARTUP", "1")))
