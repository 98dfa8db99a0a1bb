# starstation/routes/catalog.py
from __future__ import annotations

from dataclasses import asdict
from datetime import datetime

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from starstation.database import get_db
from starstation.game.catalog import load_building_catalog, load_event_catalog
from starstation.game.construction import affordability
from starstation.game.events import rarity_weight
from starstation.game.state import get_game_state
from starstation.models.user import User
from starstation.routes.auth import get_current_user
from starstation.routes.deps import get_now

router = APIRouter(prefix="/catalog", tags=["catalog"])


@router.get("/buildings")
def list_building_types(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
) -> dict:
    catalog = load_building_catalog(db)
    state = get_game_state(db, current_user.id)
    resources = dict(state.resources or {}) if state else {}
    owned: dict[str, int] = {}
    for b in (state.buildings if state else []):
        owned[b.type] = owned.get(b.type, 0) + 1

    items = []
    for d in catalog.values():
        check = affordability(resources, d.cost)
        items.append(
            {
                **asdict(d),
                "owned": owned.get(d.type, 0),
                "affordable": bool(check["ok"]),
                "missing": check["missing"],
            }
        )

    return {"buildings": items}


@router.get("/events")
def list_event_types(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
    now: datetime = Depends(get_now),
) -> dict:
    state = get_game_state(db, current_user.id)
    last = state.last_occurrences() if state else {}

    items = []
    for e in load_event_catalog(db):
        d = asdict(e)
        d["weight"] = rarity_weight(e.rarity)
        d["last_triggered_at"] = last[e.type].isoformat() if e.type in last else None
        items.append(d)

    return {"events": items, "at": now.isoformat()}
