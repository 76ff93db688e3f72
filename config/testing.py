import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "qr_attendance_test"),
    "connect_timeout": 2,
}

QR_VALIDITY_SECONDS = 30
QR_REDRAW_SECONDS = 10

STAFF_USERNAME = "staff"
STAFF_PASSWORD_HASH = os.getenv("STAFF_PASSWORD_HASH", "")

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"
LOG_FILE = os.getenv("LOG_FILE")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
