# starstation/models/building.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from starstation.database import Base


class Building(Base):
    __tablename__ = "buildings"

    id: Mapped[int] = mapped_column(primary_key=True)

    game_state_id: Mapped[int] = mapped_column(ForeignKey("game_states.id"), index=True, nullable=False)
    game_state: Mapped["GameState"] = relationship(back_populates="buildings")

    # Key into building_definitions.type, e.g. "habitat", "solar_panel"
    type: Mapped[str] = mapped_column(String(32), nullable=False)

    level: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    # Accrual clock (naive UTC)
    last_harvest_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    # Cosmetic placement on the station map, percent of width/height
    position_x: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
    position_y: Mapped[int] = mapped_column(Integer, default=0, server_default="0", nullable=False)
