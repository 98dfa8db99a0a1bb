# starstation/routes/game.py
from __future__ import annotations

import logging
import random
from datetime import datetime

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from starstation.database import commit_or_raise, get_db
from starstation.game.accrual import harvest
from starstation.game.catalog import load_building_catalog, load_event_catalog
from starstation.game.construction import build
from starstation.game.events import NoneEligible, trigger_event
from starstation.game.state import (
    active_event_out,
    building_out,
    get_or_create_game_state,
    state_out,
    state_with_stock_out,
    touch,
)
from starstation.models.user import User
from starstation.routes.auth import get_current_user
from starstation.routes.deps import get_now, get_rng

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/game", tags=["game"])


class BuildRequest(BaseModel):
    building_type: str = Field(min_length=1, max_length=32)


@router.get("/state")
def get_state(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now),
) -> dict:
    """
    Balances, buildings, the active event and a fresh stocked-resources
    preview. Nothing about production is written here.
    """
    state = get_or_create_game_state(db, current_user.id, now)
    commit_or_raise(db)  # persists a lazily created state

    catalog = load_building_catalog(db)
    return state_with_stock_out(state, catalog, now)


@router.post("/harvest")
def harvest_resources(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now),
) -> dict:
    state = get_or_create_game_state(db, current_user.id, now)
    catalog = load_building_catalog(db)

    harvested = harvest(state, catalog, now)
    touch(state, now)
    commit_or_raise(db)

    logger.info("User %s harvested %s", current_user.id, harvested)
    return {
        "resources": dict(state.resources),
        "harvested": harvested,
        "game_state": state_out(state, now),
    }


@router.post("/build", status_code=status.HTTP_201_CREATED)
def build_building(
    payload: BuildRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now),
    rng: random.Random = Depends(get_rng),
) -> dict:
    state = get_or_create_game_state(db, current_user.id, now)
    catalog = load_building_catalog(db)

    new_building = build(state, payload.building_type, catalog, now, rng)
    touch(state, now)
    commit_or_raise(db)

    name = catalog[new_building.type].name
    logger.info("User %s built %s", current_user.id, new_building.type)
    return {
        "message": f"Successfully built {name}!",
        "new_building": building_out(new_building),
        "game_state": state_out(state, now),
    }


@router.post("/trigger-event")
def trigger_random_event(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now),
    rng: random.Random = Depends(get_rng),
) -> dict:
    state = get_or_create_game_state(db, current_user.id, now)
    catalog = load_event_catalog(db)

    result = trigger_event(state, catalog, now, rng)
    if isinstance(result, NoneEligible):
        commit_or_raise(db)
        return {
            "none_eligible": True,
            "next_eligible_in_ms": result.next_eligible_in_ms,
            "message": "No events available at this time",
        }

    touch(state, now)
    commit_or_raise(db)

    logger.info("User %s triggered event %s until %s", current_user.id, result.event_type, result.ends_at.isoformat())
    return {"active_event": active_event_out(result, now)}
