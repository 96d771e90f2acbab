import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

STORAGE_DIR = os.getenv("ATTENDANCE_DIR", "attendance_data")

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

DEBUG = False

RESTORE_ROSTER_ON_STARTUP = bool(int(os.getenv("RESTORE_ROSTER_ON_STARTUP", "1")))
