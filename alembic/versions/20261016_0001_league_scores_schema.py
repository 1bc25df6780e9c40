"""league, player, membership and score tables

Revision ID: 20261016_0001
Revises:
Create Date: 2026-10-16 00:00:00.000000
"""
from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision = "20261016_0001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "league",
        sa.Column("id", sa.String(length=8), primary_key=True),
        sa.Column("name", sa.String(length=120), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "player",
        sa.Column("uuid", sa.String(length=64), primary_key=True),
        sa.Column("display_name", sa.String(length=64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_table(
        "membership",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("player_uuid", sa.String(length=64), sa.ForeignKey("player.uuid"), nullable=False),
        sa.Column("league_id", sa.String(length=8), sa.ForeignKey("league.id"), nullable=False),
        sa.Column("joined_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint("player_uuid", "league_id", name="uq_membership_player_league"),
    )
    op.create_index("ix_membership_player_uuid", "membership", ["player_uuid"])
    op.create_index("ix_membership_league_id", "membership", ["league_id"])
    op.create_table(
        "score",
        sa.Column("id", sa.Uuid(), primary_key=True),
        sa.Column("player_uuid", sa.String(length=64), sa.ForeignKey("player.uuid"), nullable=False),
        sa.Column("league_id", sa.String(length=8), sa.ForeignKey("league.id"), nullable=False),
        sa.Column("date", sa.String(length=10), nullable=False),
        sa.Column("mistakes", sa.Integer(), nullable=False),
        sa.Column("recorded_at", sa.DateTime(timezone=True), nullable=False),
        sa.UniqueConstraint(
            "player_uuid", "league_id", "date", name="uq_score_player_league_date"
        ),
    )
    op.create_index("ix_score_player_uuid", "score", ["player_uuid"])
    op.create_index("ix_score_league_id", "score", ["league_id"])
    op.create_index("ix_score_date", "score", ["date"])


def downgrade() -> None:
    op.drop_table("score")
    op.drop_table("membership")
    op.drop_table("player")
    op.drop_table("league")
