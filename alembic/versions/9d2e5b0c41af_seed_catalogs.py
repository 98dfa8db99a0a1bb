"""seed building and event catalogs

Revision ID: 9d2e5b0c41af
Revises: 3f9c1a7d2b64
Create Date: 2026-10-12 18:31:52.774120

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "9d2e5b0c41af"
down_revision: Union[str, Sequence[str], None] = "3f9c1a7d2b64"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Idempotent seed for SQLite: rows whose type already exists are left alone.
    op.execute(
        """
        INSERT OR IGNORE INTO building_definitions
          (type, name, description, icon, cost, production, production_rate, max_level, upgrade_cost_multiplier)
        VALUES
          ('habitat',          'Habitat Module',   'Basic living quarters that recycle air for the crew.', '🏠',
           '{"oxygen": 0, "food": 0, "water": 0, "energy": 0, "metal": 0}', '{"oxygen": 5}', 30, 5, 1.5),
          ('oxygen_generator', 'Oxygen Generator', 'Splits water vapour into breathable oxygen.',         '🫧',
           '{"energy": 10, "metal": 20}', '{"oxygen": 3}', 30, 5, 1.5),
          ('hydroponic_farm',  'Hydroponic Farm',  'Soil-free crops grown under artificial light.',       '🌱',
           '{"oxygen": 20, "water": 30}', '{"food": 4}',   60, 5, 1.5),
          ('water_extractor',  'Water Extractor',  'Harvests ice from passing debris and melts it down.', '💧',
           '{"energy": 15, "metal": 15}', '{"water": 5}',  60, 5, 1.5),
          ('solar_panel',      'Solar Array',      'Photovoltaic panels angled toward the nearest star.', '⚡',
           '{"metal": 25}',               '{"energy": 3}', 30, 5, 1.5),
          ('mining_drill',     'Asteroid Drill',   'Extracts ore from tethered asteroids.',               '⛏️',
           '{"food": 10, "energy": 25}',  '{"metal": 2}',  60, 5, 1.5);
        """
    )

    op.execute(
        """
        INSERT OR IGNORE INTO event_definitions
          (type, name, description, icon, duration_ms, cooldown_ms, production_modifiers, message, rarity)
        VALUES
          ('solar_eclipse', 'Solar Eclipse', 'A solar eclipse blocks sunlight, reducing energy production', '🌑',
           300000, 600000, '{"energy": 0.5}',
           'Solar eclipse detected! Energy production reduced by 50% for 5 minutes.', 'common'),
          ('meteor_shower', 'Meteor Shower', 'Meteor shower provides extra metal resources', '☄️',
           180000, 900000, '{"metal": 2.0}',
           'Meteor shower detected! Metal production doubled for 3 minutes.', 'uncommon'),
          ('cosmic_radiation', 'Cosmic Radiation', 'High cosmic radiation boosts all production temporarily', '☢️',
           240000, 1200000, '{"oxygen": 1.5, "food": 1.5, "water": 1.5, "energy": 1.5, "metal": 1.5}',
           'Cosmic radiation surge! All production increased by 50% for 4 minutes.', 'rare'),
          ('solar_flare', 'Solar Flare', 'Solar flare disrupts all production temporarily', '🔥',
           120000, 1800000, '{"oxygen": 0.3, "food": 0.3, "water": 0.3, "energy": 0.3, "metal": 0.3}',
           'Solar flare detected! All production reduced by 70% for 2 minutes.', 'rare'),
          ('nebula_passage', 'Nebula Passage', 'Passing through a nebula enhances oxygen production', '🌌',
           360000, 900000, '{"oxygen": 3.0}',
           'Nebula passage detected! Oxygen production tripled for 6 minutes.', 'uncommon');
        """
    )


def downgrade() -> None:
    op.execute(
        "DELETE FROM building_definitions WHERE type IN "
        "('habitat','oxygen_generator','hydroponic_farm','water_extractor','solar_panel','mining_drill')"
    )
    op.execute(
        "DELETE FROM event_definitions WHERE type IN "
        "('solar_eclipse','meteor_shower','cosmic_radiation','solar_flare','nebula_passage')"
    )
