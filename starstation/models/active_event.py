# starstation/models/active_event.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import JSON, DateTime, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from starstation.database import Base


class ActiveEvent(Base):
    """Snapshot of an event definition taken when it was triggered."""

    __tablename__ = "active_events"
    __table_args__ = (
        # At most one embedded event per game state
        UniqueConstraint("game_state_id", name="uq_active_events_one_per_state"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)

    game_state_id: Mapped[int] = mapped_column(ForeignKey("game_states.id"), index=True, nullable=False)
    game_state: Mapped["GameState"] = relationship(back_populates="active_event")

    event_type: Mapped[str] = mapped_column(String(32), nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    icon: Mapped[str] = mapped_column(String(16), default="", nullable=False)

    production_modifiers: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    message: Mapped[str] = mapped_column(Text, default="", nullable=False)
    duration_ms: Mapped[int] = mapped_column(Integer, nullable=False)

    started_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)
    ends_at: Mapped[datetime] = mapped_column(DateTime, nullable=False)

    def is_active(self, now: datetime) -> bool:
        return self.ends_at > now
