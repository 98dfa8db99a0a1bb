# starstation/game/construction.py
from __future__ import annotations

import logging
import random
from datetime import datetime
from typing import Dict, Mapping

from starstation.game.catalog import BuildingDef
from starstation.game.errors import InsufficientResources, UnknownBuildingType, ValidationError
from starstation.models.building import Building

logger = logging.getLogger(__name__)

# Cosmetic placement bounds (percent of the station view)
POSITION_MIN = 10
POSITION_MAX = 90


def affordability(resources: Mapping[str, int], cost: Mapping[str, int]) -> dict:
    """
    Every cost key must be covered; a missing balance counts as 0.
    An all-zero cost is always affordable.
    """
    missing: Dict[str, int] = {}
    for k, v in cost.items():
        have = int(resources.get(k, 0) or 0)
        need = int(v or 0)
        if have < need:
            missing[k] = need - have
    return {"ok": len(missing) == 0, "missing": missing}


def build(
    state,
    building_type: str,
    catalog: Mapping[str, BuildingDef],
    now: datetime,
    rng: random.Random | None = None,
) -> Building:
    """
    Pay for and place one new building of `building_type`.

    Nothing is deducted unless every cost entry is affordable. Clocks of
    the buildings already owned are not touched.
    """
    # Catalog keys match exactly; only surrounding whitespace is ignored
    canonical = (building_type or "").strip()
    if not canonical:
        raise ValidationError({"error": "building_type is required"})

    defn = catalog.get(canonical)
    if defn is None:
        raise UnknownBuildingType(canonical)

    resources = dict(state.resources or {})
    check = affordability(resources, defn.cost)
    if not check["ok"]:
        raise InsufficientResources(dict(defn.cost), check["missing"])

    for k, v in defn.cost.items():
        if k in resources:
            resources[k] = int(resources[k] or 0) - int(v or 0)
    state.resources = resources

    rng = rng or random
    b = Building(
        type=defn.type,
        level=1,
        last_harvest_at=now,
        position_x=rng.randint(POSITION_MIN, POSITION_MAX),
        position_y=rng.randint(POSITION_MIN, POSITION_MAX),
    )
    state.buildings.append(b)

    logger.debug("Built %s for cost %s", defn.type, defn.cost)
    return b
