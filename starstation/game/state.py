# starstation/game/state.py
from __future__ import annotations

import logging
from datetime import datetime
from typing import Mapping, Optional

from sqlalchemy.orm import Session

from starstation.game.accrual import compute_accrual
from starstation.game.catalog import STARTER_BUILDING, STARTING_RESOURCES, BuildingDef
from starstation.game.events import event_remaining_ms
from starstation.models.active_event import ActiveEvent
from starstation.models.building import Building
from starstation.models.event_occurrence import EventOccurrence  # noqa: F401
from starstation.models.game_state import GameState
from starstation.models.user import User  # noqa: F401

logger = logging.getLogger(__name__)

STARTER_POSITION = (50, 50)


def new_game_state(user_id: int, now: datetime) -> GameState:
    """Seed balances plus one free habitat whose clock starts now."""
    state = GameState(
        user_id=int(user_id),
        resources=dict(STARTING_RESOURCES),
        created_at=now,
        updated_at=now,
    )
    state.buildings.append(
        Building(
            type=STARTER_BUILDING,
            level=1,
            last_harvest_at=now,
            position_x=STARTER_POSITION[0],
            position_y=STARTER_POSITION[1],
        )
    )
    return state


def get_game_state(db: Session, user_id: int) -> Optional[GameState]:
    return db.query(GameState).filter(GameState.user_id == int(user_id)).first()


def get_or_create_game_state(db: Session, user_id: int, now: datetime) -> GameState:
    state = get_game_state(db, user_id)
    if state is None:
        state = new_game_state(user_id, now)
        db.add(state)
        db.flush()
        logger.info("Created missing game state for user %s", user_id)
    return state


def touch(state: GameState, now: datetime) -> None:
    # Forces the versioned UPDATE even when only child rows changed
    state.updated_at = now


# ----------------------------
# Serialization
# ----------------------------

def building_out(b: Building) -> dict:
    return {
        "id": b.id,
        "type": b.type,
        "level": int(b.level),
        "last_harvest_at": b.last_harvest_at.isoformat(),
        "position": {"x": int(b.position_x or 0), "y": int(b.position_y or 0)},
    }


def active_event_out(ev: Optional[ActiveEvent], now: datetime) -> Optional[dict]:
    # Expired snapshots stay in storage but are not reported as active
    if ev is None or not ev.is_active(now):
        return None
    return {
        "type": ev.event_type,
        "name": ev.name,
        "description": ev.description,
        "icon": ev.icon,
        "effects": {
            "production_modifiers": dict(ev.production_modifiers or {}),
            "message": ev.message,
        },
        "duration_ms": int(ev.duration_ms),
        "started_at": ev.started_at.isoformat(),
        "ends_at": ev.ends_at.isoformat(),
        "remaining_ms": event_remaining_ms(ev, now),
    }


def state_out(state: GameState, now: datetime) -> dict:
    return {
        "user_id": state.user_id,
        "resources": dict(state.resources or {}),
        "buildings": [building_out(b) for b in state.buildings],
        "active_event": active_event_out(state.active_event, now),
    }


def state_with_stock_out(state: GameState, catalog: Mapping[str, BuildingDef], now: datetime) -> dict:
    out = state_out(state, now)
    out["stocked_resources"] = {
        **{k: 0 for k in out["resources"].keys()},
        **compute_accrual(state, catalog, now),
    }
    out["at"] = now.isoformat()
    return out
