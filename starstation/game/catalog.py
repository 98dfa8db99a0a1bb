# starstation/game/catalog.py
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, List

from sqlalchemy.orm import Session

from starstation.models.building_definition import BuildingDefinition
from starstation.models.event_definition import EventDefinition

logger = logging.getLogger(__name__)


# ----------------------------
# Resources
# ----------------------------

RESOURCE_KINDS: tuple[str, ...] = ("oxygen", "food", "water", "energy", "metal")

STARTING_RESOURCES: dict[str, int] = {
    "oxygen": 100,
    "food": 50,
    "water": 80,
    "energy": 30,
    "metal": 20,
}

STARTER_BUILDING = "habitat"


# ----------------------------
# Definitions (immutable snapshots of the catalog tables)
# ----------------------------

@dataclass(frozen=True)
class BuildingDef:
    type: str
    name: str
    # resource -> amount to build one
    cost: Dict[str, int]
    # resource -> base yield per cycle
    production: Dict[str, int]
    # cycle length in seconds
    production_rate: int = 60
    description: str = ""
    icon: str = ""
    max_level: int = 1
    upgrade_cost_multiplier: float = 1.5


@dataclass(frozen=True)
class EventDef:
    type: str
    name: str
    duration_ms: int
    production_modifiers: Dict[str, float] = field(default_factory=dict)
    message: str = ""
    rarity: str = "common"
    cooldown_ms: int = 0
    description: str = ""
    icon: str = ""


BUILDINGS: dict[str, BuildingDef] = {
    "habitat": BuildingDef(
        "habitat", "Habitat Module",
        cost={"oxygen": 0, "food": 0, "water": 0, "energy": 0, "metal": 0},
        production={"oxygen": 5},
        production_rate=30,
        description="Basic living quarters that recycle air for the crew.",
        icon="🏠",
        max_level=5,
    ),
    "oxygen_generator": BuildingDef(
        "oxygen_generator", "Oxygen Generator",
        cost={"energy": 10, "metal": 20},
        production={"oxygen": 3},
        production_rate=30,
        description="Splits water vapour into breathable oxygen.",
        icon="🫧",
        max_level=5,
    ),
    "hydroponic_farm": BuildingDef(
        "hydroponic_farm", "Hydroponic Farm",
        cost={"oxygen": 20, "water": 30},
        production={"food": 4},
        production_rate=60,
        description="Soil-free crops grown under artificial light.",
        icon="🌱",
        max_level=5,
    ),
    "water_extractor": BuildingDef(
        "water_extractor", "Water Extractor",
        cost={"energy": 15, "metal": 15},
        production={"water": 5},
        production_rate=60,
        description="Harvests ice from passing debris and melts it down.",
        icon="💧",
        max_level=5,
    ),
    "solar_panel": BuildingDef(
        "solar_panel", "Solar Array",
        cost={"metal": 25},
        production={"energy": 3},
        production_rate=30,
        description="Photovoltaic panels angled toward the nearest star.",
        icon="⚡",
        max_level=5,
    ),
    "mining_drill": BuildingDef(
        "mining_drill", "Asteroid Drill",
        cost={"food": 10, "energy": 25},
        production={"metal": 2},
        production_rate=60,
        description="Extracts ore from tethered asteroids.",
        icon="⛏️",
        max_level=5,
    ),
}

EVENTS: list[EventDef] = [
    EventDef(
        "solar_eclipse", "Solar Eclipse",
        duration_ms=300_000,  # 5 minutes
        production_modifiers={"energy": 0.5},
        message="Solar eclipse detected! Energy production reduced by 50% for 5 minutes.",
        rarity="common",
        cooldown_ms=600_000,
        description="A solar eclipse blocks sunlight, reducing energy production",
        icon="🌑",
    ),
    EventDef(
        "meteor_shower", "Meteor Shower",
        duration_ms=180_000,
        production_modifiers={"metal": 2.0},
        message="Meteor shower detected! Metal production doubled for 3 minutes.",
        rarity="uncommon",
        cooldown_ms=900_000,
        description="Meteor shower provides extra metal resources",
        icon="☄️",
    ),
    EventDef(
        "cosmic_radiation", "Cosmic Radiation",
        duration_ms=240_000,
        production_modifiers={k: 1.5 for k in RESOURCE_KINDS},
        message="Cosmic radiation surge! All production increased by 50% for 4 minutes.",
        rarity="rare",
        cooldown_ms=1_200_000,
        description="High cosmic radiation boosts all production temporarily",
        icon="☢️",
    ),
    EventDef(
        "solar_flare", "Solar Flare",
        duration_ms=120_000,
        production_modifiers={k: 0.3 for k in RESOURCE_KINDS},
        message="Solar flare detected! All production reduced by 70% for 2 minutes.",
        rarity="rare",
        cooldown_ms=1_800_000,
        description="Solar flare disrupts all production temporarily",
        icon="🔥",
    ),
    EventDef(
        "nebula_passage", "Nebula Passage",
        duration_ms=360_000,
        production_modifiers={"oxygen": 3.0},
        message="Nebula passage detected! Oxygen production tripled for 6 minutes.",
        rarity="uncommon",
        cooldown_ms=900_000,
        description="Passing through a nebula enhances oxygen production",
        icon="🌌",
    ),
]


# ----------------------------
# Row <-> definition
# ----------------------------

def building_def_from_row(row: BuildingDefinition) -> BuildingDef:
    return BuildingDef(
        type=row.type,
        name=row.name,
        cost={k: int(v or 0) for k, v in (row.cost or {}).items()},
        production={k: int(v or 0) for k, v in (row.production or {}).items()},
        production_rate=int(row.production_rate or 60),
        description=row.description or "",
        icon=row.icon or "",
        max_level=int(row.max_level or 1),
        upgrade_cost_multiplier=float(row.upgrade_cost_multiplier or 1.0),
    )


def event_def_from_row(row: EventDefinition) -> EventDef:
    return EventDef(
        type=row.type,
        name=row.name,
        duration_ms=int(row.duration_ms),
        production_modifiers={k: float(v) for k, v in (row.production_modifiers or {}).items()},
        message=row.message or "",
        rarity=row.rarity or "",
        cooldown_ms=int(row.cooldown_ms or 0),
        description=row.description or "",
        icon=row.icon or "",
    )


def load_building_catalog(db: Session) -> Dict[str, BuildingDef]:
    rows = db.query(BuildingDefinition).order_by(BuildingDefinition.id.asc()).all()
    return {r.type: building_def_from_row(r) for r in rows}


def load_event_catalog(db: Session) -> List[EventDef]:
    # Catalog order matters: the weighted draw scans it front to back
    rows = db.query(EventDefinition).order_by(EventDefinition.id.asc()).all()
    return [event_def_from_row(r) for r in rows]


# ----------------------------
# Seeding
# ----------------------------

def seed_catalogs(db: Session) -> Dict[str, int]:
    """
    Idempotent upsert of the reference data.

    Inserts definitions whose `type` is missing; existing rows are left
    alone so hand-tuned values survive a restart.
    """
    have_buildings = {t for (t,) in db.query(BuildingDefinition.type).all()}
    have_events = {t for (t,) in db.query(EventDefinition.type).all()}

    added_buildings = 0
    for d in BUILDINGS.values():
        if d.type in have_buildings:
            continue
        db.add(
            BuildingDefinition(
                type=d.type,
                name=d.name,
                description=d.description,
                icon=d.icon,
                cost=dict(d.cost),
                production=dict(d.production),
                production_rate=d.production_rate,
                max_level=d.max_level,
                upgrade_cost_multiplier=d.upgrade_cost_multiplier,
            )
        )
        added_buildings += 1

    added_events = 0
    for e in EVENTS:
        if e.type in have_events:
            continue
        db.add(
            EventDefinition(
                type=e.type,
                name=e.name,
                description=e.description,
                icon=e.icon,
                duration_ms=e.duration_ms,
                cooldown_ms=e.cooldown_ms,
                production_modifiers=dict(e.production_modifiers),
                message=e.message,
                rarity=e.rarity,
            )
        )
        added_events += 1

    db.commit()

    if added_buildings or added_events:
        logger.info("Seeded catalogs: %d building types, %d event types", added_buildings, added_events)
    else:
        logger.debug("Catalogs already seeded")

    return {"buildings_added": added_buildings, "events_added": added_events}
