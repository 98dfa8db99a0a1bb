# starstation/routes/deps.py
from __future__ import annotations

import random
from datetime import datetime

from starstation.game.clock import now_utc_naive

_RNG = random.Random()


def get_now() -> datetime:
    """
    Request time (naive UTC). Every game operation in a request uses this
    one value so preview and commit agree.
    """
    return now_utc_naive()


def get_rng() -> random.Random:
    return _RNG
