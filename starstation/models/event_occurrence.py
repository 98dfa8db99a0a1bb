# starstation/models/event_occurrence.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from starstation.database import Base


class EventOccurrence(Base):
    __tablename__ = "event_occurrences"
    __table_args__ = (
        UniqueConstraint("game_state_id", "event_type", name="uq_event_occurrence_type"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    game_state_id: Mapped[int] = mapped_column(ForeignKey("game_states.id"), index=True, nullable=False)
    game_state: Mapped["GameState"] = relationship(back_populates="event_occurrences")

    event_type: Mapped[str] = mapped_column(String(32), nullable=False)
    last_triggered_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
