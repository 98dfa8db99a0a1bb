# starstation/game/accrual.py
from __future__ import annotations

import logging
import math
from datetime import datetime
from typing import Dict, Mapping

from starstation.game.catalog import BuildingDef

logger = logging.getLogger(__name__)

HALF_MINUTE_RATE = 30


# ----------------------------
# Helpers
# ----------------------------

def minutes_since(last: datetime | None, now: datetime) -> int:
    # Whole minutes only: partial cycles contribute nothing
    if last is None:
        return 0
    minutes = int((now - last).total_seconds() // 60)
    return max(0, minutes)


def active_modifiers(state, now: datetime) -> Dict[str, float]:
    """Production multipliers of the state's event, or {} once it has ended."""
    ev = getattr(state, "active_event", None)
    if ev is None or ev.ends_at <= now:
        return {}
    return dict(ev.production_modifiers or {})


def building_yield(
    building,
    defn: BuildingDef,
    minutes: int,
    modifiers: Mapping[str, float],
) -> Dict[str, int]:
    """
    Resources one building produced over `minutes` whole minutes.

    Two truncations: `minutes` is already floored, and the modifier-scaled
    amount is floored again per building before anything is summed.
    """
    level = max(1, int(building.level or 1))
    out: Dict[str, int] = {}

    for resource, base in defn.production.items():
        base = int(base or 0)
        if base <= 0:
            continue

        if defn.production_rate == HALF_MINUTE_RATE:
            cycles = math.floor(minutes * 2)
            amount = cycles * base * level
        else:
            amount = minutes * base * level

        modifier = float(modifiers.get(resource, 1.0))
        out[resource] = math.floor(amount * modifier)

    return out


def _per_building(state, catalog: Mapping[str, BuildingDef], now: datetime):
    modifiers = active_modifiers(state, now)
    for b in state.buildings:
        defn = catalog.get(b.type)
        if defn is None:
            logger.debug("No definition for building type %r; skipping", b.type)
            continue
        yield b, building_yield(b, defn, minutes_since(b.last_harvest_at, now), modifiers)


# ----------------------------
# Preview + commit
# ----------------------------

def compute_accrual(state, catalog: Mapping[str, BuildingDef], now: datetime) -> Dict[str, int]:
    """
    Stocked resources: everything produced since each building's last
    harvest. Read-only; calling it again with the same `now` gives the same
    answer.
    """
    totals: Dict[str, int] = {}
    for _, produced in _per_building(state, catalog, now):
        for resource, amount in produced.items():
            totals[resource] = totals.get(resource, 0) + amount
    return totals


def harvest(state, catalog: Mapping[str, BuildingDef], now: datetime) -> Dict[str, int]:
    """
    Bank stocked resources into `state.resources` and restart the clocks of
    the buildings that produced something.

    Amounts for resources that have no balance key are dropped. A building
    that produced nothing keeps its clock, so partial minutes carry over.
    Returns the harvested amounts (including dropped ones).
    """
    harvested: Dict[str, int] = {}
    balances = dict(state.resources or {})

    for b, produced in _per_building(state, catalog, now):
        contributed = False
        for resource, amount in produced.items():
            harvested[resource] = harvested.get(resource, 0) + amount
            if amount > 0:
                contributed = True
        if contributed:
            b.last_harvest_at = now

    for resource, amount in harvested.items():
        if resource in balances:
            balances[resource] = int(balances[resource]) + amount

    state.resources = balances
    return harvested
