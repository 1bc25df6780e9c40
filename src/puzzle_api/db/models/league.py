from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

LEAGUE_ID_LENGTH = 8


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class League(SQLModel, table=True):
    id: str = Field(primary_key=True, min_length=LEAGUE_ID_LENGTH, max_length=LEAGUE_ID_LENGTH)
    name: str = Field(min_length=1, max_length=120)
    created_at: datetime = Field(default_factory=utcnow, sa_type=DateTime(timezone=True), nullable=False)
