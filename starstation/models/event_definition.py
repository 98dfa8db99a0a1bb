# starstation/models/event_definition.py
from __future__ import annotations

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from starstation.database import Base


class EventDefinition(Base):
    __tablename__ = "event_definitions"

    id: Mapped[int] = mapped_column(primary_key=True)

    type: Mapped[str] = mapped_column(String(32), unique=True, index=True, nullable=False)
    name: Mapped[str] = mapped_column(String(64), nullable=False)
    description: Mapped[str] = mapped_column(Text, default="", nullable=False)
    icon: Mapped[str] = mapped_column(String(16), default="", nullable=False)

    duration_ms: Mapped[int] = mapped_column(Integer, nullable=False)
    cooldown_ms: Mapped[int] = mapped_column(Integer, default=0, nullable=False)

    # resource -> multiplier; unlisted resources stay at 1.0
    production_modifiers: Mapped[dict] = mapped_column(JSON, default=dict, nullable=False)
    message: Mapped[str] = mapped_column(Text, default="", nullable=False)

    # common / uncommon / rare
    rarity: Mapped[str] = mapped_column(String(16), default="common", nullable=False)
