from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from puzzle_api.common.dates import DATE_PATTERN
from puzzle_api.deps.leaderboard import get_leaderboard_service_dep
from puzzle_api.modules.leaderboard.schemas import LeaderboardEntryResponse, LeaderboardResponse
from puzzle_api.modules.leaderboard.service import LeaderboardService
from puzzle_api.modules.leagues.schemas import LeagueResponse

router = APIRouter(prefix="/leagues", tags=["leaderboard"])
LEADERBOARD_SERVICE_DEP = Depends(get_leaderboard_service_dep)


@router.get(
    "/{league_id}/leaderboard",
    response_model=LeaderboardResponse,
    summary="Get League Leaderboard",
    description=(
        "Ranks every league member for a date (default: today). Players who played "
        "come first by fewest mistakes and share ranks on ties; the rest follow by name "
        "with rank null."
    ),
    responses={
        200: {"description": "Leaderboard returned."},
        404: {"description": "League not found."},
    },
)
async def get_leaderboard(
    league_id: str,
    date: str | None = Query(default=None, pattern=DATE_PATTERN),
    leaderboard_service: LeaderboardService = LEADERBOARD_SERVICE_DEP,
) -> LeaderboardResponse:
    leaderboard = await leaderboard_service.compute_leaderboard(league_id, date)
    return LeaderboardResponse(
        league=LeagueResponse.model_validate(leaderboard.league),
        date=leaderboard.date,
        entries=[
            LeaderboardEntryResponse.model_validate(entry._asdict())
            for entry in leaderboard.entries
        ],
    )
