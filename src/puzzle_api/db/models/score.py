from __future__ import annotations

from datetime import datetime, timezone
from uuid import UUID, uuid4

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Score(SQLModel, table=True):
    __table_args__ = (
        UniqueConstraint("player_uuid", "league_id", "date", name="uq_score_player_league_date"),
    )

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    player_uuid: str = Field(foreign_key="player.uuid", index=True, max_length=64)
    league_id: str = Field(foreign_key="league.id", index=True, max_length=8)
    # YYYY-MM-DD; kept as text so range checks compare lexicographically.
    date: str = Field(index=True, min_length=10, max_length=10)
    mistakes: int = Field(ge=0)
    recorded_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False)
