from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from puzzle_api.db.guard import store_guard
from puzzle_api.db.models import Score
from puzzle_api.stores import ScoreRow, UpsertResult, check_mistakes


class ScoreRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def get_score(self, player_uuid: str, league_id: str, date: str) -> Score | None:
        stmt = select(Score).where(
            Score.player_uuid == player_uuid,
            Score.league_id == league_id,
            Score.date == date,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def upsert_score(
        self,
        player_uuid: str,
        league_id: str,
        date: str,
        mistakes: int,
    ) -> UpsertResult:
        checked = check_mistakes(mistakes)
        async with store_guard(self.session, "upsert_score"):
            existing = await self.get_score(player_uuid, league_id, date)
            if existing is None:
                self.session.add(
                    Score(
                        player_uuid=player_uuid,
                        league_id=league_id,
                        date=date,
                        mistakes=checked,
                        recorded_at=self.now_utc(),
                    )
                )
                try:
                    await self.session.commit()
                    return UpsertResult(created=True)
                except IntegrityError:
                    # Lost an insert race for the same key; last write wins.
                    await self.session.rollback()
                    existing = await self.get_score(player_uuid, league_id, date)
                    if existing is None:
                        raise
            existing.mistakes = checked
            existing.recorded_at = self.now_utc()
            self.session.add(existing)
            await self.session.commit()
            return UpsertResult(created=False)

    async def get_scores_for_league_on_date(self, league_id: str, date: str) -> list[ScoreRow]:
        stmt = select(Score.player_uuid, Score.mistakes).where(
            Score.league_id == league_id,
            Score.date == date,
        )
        async with store_guard(self.session, "get_scores_for_league_on_date"):
            result = await self.session.execute(stmt)
        return [ScoreRow(player_uuid=row[0], mistakes=row[1]) for row in result.all()]

    async def count_played_on_date(self, league_id: str, date: str) -> int:
        stmt = (
            select(func.count())
            .select_from(Score)
            .where(Score.league_id == league_id, Score.date == date)
        )
        async with store_guard(self.session, "count_played_on_date"):
            result = await self.session.execute(stmt)
        return int(result.scalar_one())

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(timezone.utc)
