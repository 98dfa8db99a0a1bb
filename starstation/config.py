# starstation/config.py
from __future__ import annotations

import os
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent

DATA_DIR = PROJECT_ROOT / "data"
DATA_DIR.mkdir(parents=True, exist_ok=True)

DB_PATH = DATA_DIR / "game.db"
DATABASE_URL: str = os.getenv("DATABASE_URL", f"sqlite:///{DB_PATH.as_posix()}")

LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

# Browser client origins (vite dev server by default)
CORS_ORIGINS: list[str] = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://localhost:3000").split(",")
    if o.strip()
]

SESSION_HOURS: int = int(os.getenv("SESSION_HOURS", "24"))

# Upsert building/event catalogs when the app starts
SEED_CATALOGS_ON_STARTUP: bool = os.getenv("SEED_CATALOGS_ON_STARTUP", "1") == "1"
