import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

ATTENDANCE_STORE = os.getenv("ATTENDANCE_STORE", "mysql")

STANDING_GOOD_THRESHOLD = int(os.getenv("STANDING_GOOD_THRESHOLD", "80"))
STANDING_WARNING_THRESHOLD = int(os.getenv("STANDING_WARNING_THRESHOLD", "60"))

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
