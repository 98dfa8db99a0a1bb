"""create game tables

Revision ID: 3f9c1a7d2b64
Revises:
Create Date: 2026-10-12 18:04:11.209381

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3f9c1a7d2b64"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("username", sa.String(length=32), nullable=False),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_users_username", "users", ["username"], unique=True)

    op.create_table(
        "sessions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("token", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_sessions_user_id", "sessions", ["user_id"])
    op.create_index("ix_sessions_token", "sessions", ["token"], unique=True)

    op.create_table(
        "building_definitions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(length=16), nullable=False),
        sa.Column("cost", sa.JSON(), nullable=False),
        sa.Column("production", sa.JSON(), nullable=False),
        sa.Column("production_rate", sa.Integer(), nullable=False, server_default=sa.text("60")),
        sa.Column("max_level", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("upgrade_cost_multiplier", sa.Float(), nullable=False, server_default=sa.text("1.5")),
    )
    op.create_index("ix_building_definitions_type", "building_definitions", ["type"], unique=True)

    op.create_table(
        "event_definitions",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(length=16), nullable=False),
        sa.Column("duration_ms", sa.Integer(), nullable=False),
        sa.Column("cooldown_ms", sa.Integer(), nullable=False, server_default=sa.text("0")),
        sa.Column("production_modifiers", sa.JSON(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("rarity", sa.String(length=16), nullable=False, server_default="common"),
    )
    op.create_index("ix_event_definitions_type", "event_definitions", ["type"], unique=True)

    op.create_table(
        "game_states",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id"), nullable=False),
        sa.Column("resources", sa.JSON(), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    )
    op.create_index("ix_game_states_user_id", "game_states", ["user_id"], unique=True)

    op.create_table(
        "buildings",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("game_state_id", sa.Integer(), sa.ForeignKey("game_states.id"), nullable=False),
        sa.Column("type", sa.String(length=32), nullable=False),
        sa.Column("level", sa.Integer(), nullable=False, server_default=sa.text("1")),
        sa.Column("last_harvest_at", sa.DateTime(), nullable=False),
        sa.Column("position_x", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("position_y", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_buildings_game_state_id", "buildings", ["game_state_id"])

    op.create_table(
        "active_events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("game_state_id", sa.Integer(), sa.ForeignKey("game_states.id"), nullable=False),
        sa.Column("event_type", sa.String(length=32), nullable=False),
        sa.Column("name", sa.String(length=64), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("icon", sa.String(length=16), nullable=False),
        sa.Column("production_modifiers", sa.JSON(), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("duration_ms", sa.Integer(), nullable=False),
        sa.Column("started_at", sa.DateTime(), nullable=False),
        sa.Column("ends_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("game_state_id", name="uq_active_events_one_per_state"),
    )
    op.create_index("ix_active_events_game_state_id", "active_events", ["game_state_id"])

    op.create_table(
        "event_occurrences",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("game_state_id", sa.Integer(), sa.ForeignKey("game_states.id"), nullable=False),
        sa.Column("event_type", sa.String(length=32), nullable=False),
        sa.Column("last_triggered_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("game_state_id", "event_type", name="uq_event_occurrence_type"),
    )
    op.create_index("ix_event_occurrences_game_state_id", "event_occurrences", ["game_state_id"])


def downgrade() -> None:
    op.drop_table("event_occurrences")
    op.drop_table("active_events")
    op.drop_table("buildings")
    op.drop_table("game_states")
    op.drop_table("event_definitions")
    op.drop_table("building_definitions")
    op.drop_table("sessions")
    op.drop_table("users")
