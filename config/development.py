import os

from werkzeug.security import generate_password_hash

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "qr_attendance"),
    "connect_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "5")),
}

# Rotating QR token: slot width (both display and scanner must agree) and redraw cadence.
QR_VALIDITY_SECONDS = int(os.getenv("QR_VALIDITY_SECONDS", "30"))
QR_REDRAW_SECONDS = int(os.getenv("QR_REDRAW_SECONDS", "10"))

# Demo staff login: staff / admin123 unless overridden.
STAFF_USERNAME = os.getenv("STAFF_USERNAME", "staff")
STAFF_PASSWORD_HASH = os.getenv("STAFF_PASSWORD_HASH") or generate_password_hash("admin123")

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
LOG_FILE = os.getenv("LOG_FILE")

# schema.sql only uses CREATE ... IF NOT EXISTS, so running it on every start is harmless
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# seed.sql uses INSERT IGNORE
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
