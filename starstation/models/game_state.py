# starstation/models/game_state.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import JSON, DateTime, ForeignKey, Integer
from sqlalchemy.orm import Mapped, mapped_column, relationship

from starstation.database import Base
from starstation.game.clock import now_utc_naive


class GameState(Base):
    __tablename__ = "game_states"

    id: Mapped[int] = mapped_column(primary_key=True)

    # One state per user; the integer user id is the only lookup key
    user_id: Mapped[int] = mapped_column(ForeignKey("users.id"), unique=True, index=True, nullable=False)
    user: Mapped["User"] = relationship(back_populates="game_state")

    # resource kind -> balance. Always reassign a new dict so the change is flushed.
    resources: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)

    buildings: Mapped[list["Building"]] = relationship(
        back_populates="game_state",
        cascade="all, delete-orphan",
        order_by="Building.id",
    )

    # Stays after expiry until the next trigger overwrites it
    active_event: Mapped[Optional["ActiveEvent"]] = relationship(
        back_populates="game_state",
        cascade="all, delete-orphan",
        uselist=False,
    )

    event_occurrences: Mapped[list["EventOccurrence"]] = relationship(
        back_populates="game_state",
        cascade="all, delete-orphan",
    )

    # Optimistic concurrency: a stale writer gets StaleDataError on flush
    version: Mapped[int] = mapped_column(Integer, default=1, nullable=False)

    created_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc_naive, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=now_utc_naive, nullable=False)

    __mapper_args__ = {"version_id_col": version}

    def last_occurrences(self) -> dict[str, datetime]:
        return {o.event_type: o.last_triggered_at for o in self.event_occurrences}
