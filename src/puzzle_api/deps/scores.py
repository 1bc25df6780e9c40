from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from puzzle_api.db.session import get_session
from puzzle_api.modules.leagues.repository import MembershipRepository
from puzzle_api.modules.scores.repository import ScoreRepository
from puzzle_api.modules.scores.service import ScoreService

SESSION_DEP = Depends(get_session)


def get_score_service_dep(session: AsyncSession = SESSION_DEP) -> ScoreService:
    return ScoreService(
        membership_store=MembershipRepository(session=session),
        score_store=ScoreRepository(session=session),
    )
