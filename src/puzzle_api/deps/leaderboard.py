from __future__ import annotations

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from puzzle_api.db.session import get_session
from puzzle_api.deps.settings import resolve_settings
from puzzle_api.modules.leaderboard.service import LeaderboardService
from puzzle_api.modules.leagues.repository import MembershipRepository
from puzzle_api.modules.scores.repository import ScoreRepository

SESSION_DEP = Depends(get_session)


def get_leaderboard_service_dep(
    request: Request,
    session: AsyncSession = SESSION_DEP,
) -> LeaderboardService:
    return LeaderboardService(
        membership_store=MembershipRepository(session=session),
        score_store=ScoreRepository(session=session),
        timezone_name=resolve_settings(request).app_timezone,
    )
