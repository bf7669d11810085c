"""Settings shared by every environment; environment modules override a few."""

import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "timeclock_db"),
}

# Wall-clock digits in device exports are civil time at this UTC offset.
CIVIL_UTC_OFFSET = os.getenv("CIVIL_UTC_OFFSET", "+05:30")

DEFAULT_WORK_START_TIME = os.getenv("WORK_START_TIME", "09:30")
DEFAULT_WORK_END_TIME = os.getenv("WORK_END_TIME", "18:30")
DEFAULT_LATE_THRESHOLD_MINUTES = int(os.getenv("LATE_THRESHOLD_MINUTES", "15"))
DEFAULT_EARLY_OUT_THRESHOLD_MINUTES = int(os.getenv("EARLY_OUT_THRESHOLD_MINUTES", "15"))

MAX_UPLOAD_MB = int(os.getenv("MAX_UPLOAD_MB", "50"))
