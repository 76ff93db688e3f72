"""Create the database (if needed) and apply database/schema.sql.

Usage: APP_ENV=development python scripts/init_db.py
"""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.qr_attendance.qr_attendance.database.bootstrap import apply_schema, list_tables
from src.qr_attendance.qr_attendance.database.connection import DBConfig


def main() -> int:
    settings = importlib.import_module(get_settings_module())
    target = DBConfig.from_dict(settings.DB_CONFIG)

    apply_schema(settings.DB_CONFIG, schema_path=REPO_ROOT / "database" / "schema.sql")
    missing = {"events", "students", "attendance_records"} - set(list_tables(settings.DB_CONFIG))
    if missing:
        print(f"schema incomplete on {target.describe()}: missing {', '.join(sorted(missing))}")
        return 1
    print(f"schema ready on {target.describe()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
