# starstation/game/events.py
from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Dict, List, Mapping, Optional, Sequence, Union

from starstation.game.catalog import EventDef
from starstation.game.clock import elapsed_ms
from starstation.game.errors import EventAlreadyActive
from starstation.models.active_event import ActiveEvent
from starstation.models.event_occurrence import EventOccurrence

logger = logging.getLogger(__name__)

RARITY_WEIGHTS: dict[str, float] = {
    "common": 0.5,
    "uncommon": 0.3,
    "rare": 0.2,
}
UNKNOWN_RARITY_WEIGHT = 0.1


@dataclass(frozen=True)
class NoneEligible:
    # 0 when nothing is cooling down (e.g. empty catalog)
    next_eligible_in_ms: int


def rarity_weight(rarity: str | None) -> float:
    return RARITY_WEIGHTS.get((rarity or "").lower(), UNKNOWN_RARITY_WEIGHT)


# ----------------------------
# Cooldowns
# ----------------------------

def _cooldown_remaining_ms(ev: EventDef, last: Optional[datetime], now: datetime) -> int:
    # Never triggered: no cooldown floor
    if last is None:
        return 0
    return ev.cooldown_ms - elapsed_ms(last, now)


def eligible_events(
    catalog: Sequence[EventDef],
    last_occurrence: Mapping[str, datetime],
    now: datetime,
) -> List[EventDef]:
    return [
        ev for ev in catalog
        if _cooldown_remaining_ms(ev, last_occurrence.get(ev.type), now) <= 0
    ]


def next_eligible_in_ms(
    catalog: Sequence[EventDef],
    last_occurrence: Mapping[str, datetime],
    now: datetime,
) -> int:
    remaining = [
        _cooldown_remaining_ms(ev, last_occurrence.get(ev.type), now)
        for ev in catalog
    ]
    positive = [r for r in remaining if r > 0]
    return min(positive) if positive else 0


# ----------------------------
# Selection
# ----------------------------

def pick_weighted(events: Sequence[EventDef], rng: random.Random | None = None) -> EventDef:
    """
    Linear-scan weighted draw in catalog order.

    r is uniform in [0, total); each event's weight is subtracted in turn
    and the first event that brings r to <= 0 wins, so a draw landing
    exactly on a boundary goes to the earlier event.
    """
    if not events:
        raise ValueError("no events to pick from")

    rng = rng or random
    total = sum(rarity_weight(ev.rarity) for ev in events)
    r = rng.random() * total

    for ev in events:
        r -= rarity_weight(ev.rarity)
        if r <= 0:
            return ev

    # float residue: r can stay a hair above 0 after the last subtraction
    return events[-1]


def _activate(state, ev: EventDef, now: datetime) -> ActiveEvent:
    ends_at = now + timedelta(milliseconds=ev.duration_ms)
    fields = dict(
        event_type=ev.type,
        name=ev.name,
        description=ev.description,
        icon=ev.icon,
        production_modifiers=dict(ev.production_modifiers),
        message=ev.message,
        duration_ms=ev.duration_ms,
        started_at=now,
        ends_at=ends_at,
    )

    # Overwrite the stale row in place (one row per state)
    active = state.active_event
    if active is None:
        active = ActiveEvent(**fields)
        state.active_event = active
    else:
        for k, v in fields.items():
            setattr(active, k, v)

    row = next((o for o in state.event_occurrences if o.event_type == ev.type), None)
    if row is None:
        state.event_occurrences.append(EventOccurrence(event_type=ev.type, last_triggered_at=now))
    else:
        row.last_triggered_at = now

    return active


def trigger_event(
    state,
    catalog: Sequence[EventDef],
    now: datetime,
    rng: random.Random | None = None,
) -> Union[ActiveEvent, NoneEligible]:
    """
    Pick a cooldown-eligible event and embed it on the state.

    Raises EventAlreadyActive while the current event has not ended.
    Records the trigger time for cooldowns regardless of harvest state.
    """
    current = state.active_event
    if current is not None and current.ends_at > now:
        raise EventAlreadyActive(current.event_type, current.ends_at.isoformat())

    last: Dict[str, datetime] = state.last_occurrences()

    candidates = eligible_events(catalog, last, now)
    if not candidates:
        wait_ms = next_eligible_in_ms(catalog, last, now)
        logger.debug("No eligible events; next in %d ms", wait_ms)
        return NoneEligible(next_eligible_in_ms=wait_ms)

    chosen = pick_weighted(candidates, rng)
    logger.debug(
        "Picked %s from %d eligible (%s)",
        chosen.type,
        len(candidates),
        ", ".join(ev.type for ev in candidates),
    )
    return _activate(state, chosen, now)


def event_remaining_ms(ev: Optional[ActiveEvent], now: datetime) -> int:
    if ev is None or ev.ends_at <= now:
        return 0
    return elapsed_ms(now, ev.ends_at)
