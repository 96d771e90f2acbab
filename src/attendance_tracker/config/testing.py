import os

SECRET_KEY = "test-secret"

STORAGE_DIR = os.getenv("ATTENDANCE_DIR", "attendance_data_test")

LOG_LEVEL = "WARNING"

DEBUG = False
TESTING = True

RESTORE_ROSTER_ON_STARTUP = False
