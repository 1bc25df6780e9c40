from __future__ import annotations

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from puzzle_api.db.session import get_session
from puzzle_api.modules.leagues.repository import MembershipRepository
from puzzle_api.modules.leagues.service import LeagueService

SESSION_DEP = Depends(get_session)


def get_league_service_dep(session: AsyncSession = SESSION_DEP) -> LeagueService:
    return LeagueService(membership_store=MembershipRepository(session=session))
