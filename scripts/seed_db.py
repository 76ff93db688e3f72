"""Load the demo students and events from database/seed.sql (safe to re-run)."""
from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.qr_attendance.qr_attendance.database.bootstrap import apply_seed_sql
from src.qr_attendance.qr_attendance.database.connection import DBConfig

if __name__ == "__main__":
    settings = importlib.import_module(get_settings_module())
    apply_seed_sql(settings.DB_CONFIG, seed_path=REPO_ROOT / "database" / "seed.sql")
    print(f"demo data loaded into {DBConfig.from_dict(settings.DB_CONFIG).describe()}")
