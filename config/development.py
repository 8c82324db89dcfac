import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "school_attendance"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# "mysql" (default) or "memory" for a process-local ledger.
ATTENDANCE_STORE = os.getenv("ATTENDANCE_STORE", "mysql")

# Standing cutoffs: rate >= good -> good, rate >= warning -> warning, else critical.
STANDING_GOOD_THRESHOLD = int(os.getenv("STANDING_GOOD_THRESHOLD", "80"))
STANDING_WARNING_THRESHOLD = int(os.getenv("STANDING_WARNING_THRESHOLD", "60"))

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# If enabled, app will load database/seed.sql (demo grades, classes, students) after the schema
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
