# starstation/models/building_definition.py
from __future__ import annotations

from sqlalchemy import JSON, Float, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from starstation.database import Base


class BuildingDefinition(Base):
    __tablename__ = "building_definitions"

    id: Mapped[int] = mapped_column(primary_key=True)

    # stable identifier used by the API, e.g. "habitat"
    type: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    icon: Mapped[str] = mapped_column(String(16), default="", nullable=False)

    # resource -> amount
    cost: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    production: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)

    # cycle length in seconds (30 or 60)
    production_rate: Mapped[int] = mapped_column(Integer, default=60, nullable=False)

    # not used by any operation yet
    max_level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)
    upgrade_cost_multiplier: Mapped[float] = mapped_column(Float, default=1.5, nullable=False)
