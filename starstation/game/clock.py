# starstation/game/clock.py
from __future__ import annotations

from datetime import datetime, timedelta, timezone

_MS = timedelta(milliseconds=1)


def now_utc_naive() -> datetime:
    # Naive UTC datetime (no tzinfo). Works cleanly with SQLite.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def elapsed_ms(earlier: datetime, later: datetime) -> int:
    # floor division on timedelta stays exact (no float seconds)
    return (later - earlier) // _MS
