from __future__ import annotations

from fastapi import APIRouter, Depends

from puzzle_api.deps.leaderboard import get_leaderboard_service_dep
from puzzle_api.deps.leagues import get_league_service_dep
from puzzle_api.modules.leaderboard.service import LeaderboardService
from puzzle_api.modules.leagues.service import LeagueService
from puzzle_api.modules.players.schemas import (
    PlayerLeagueListResponse,
    PlayerLeagueSummaryResponse,
    PlayerResponse,
    PlayerUpdateRequest,
)

router = APIRouter(prefix="/players", tags=["players"])
LEAGUE_SERVICE_DEP = Depends(get_league_service_dep)
LEADERBOARD_SERVICE_DEP = Depends(get_leaderboard_service_dep)


@router.put(
    "/{player_uuid}",
    response_model=PlayerResponse,
    summary="Set Display Name",
    description="Creates the player or overwrites their display name.",
    responses={
        200: {"description": "Player stored."},
        422: {"description": "Display name is empty after trimming."},
    },
)
async def put_player(
    player_uuid: str,
    request: PlayerUpdateRequest,
    league_service: LeagueService = LEAGUE_SERVICE_DEP,
) -> PlayerResponse:
    player = await league_service.update_display_name(player_uuid, request.display_name)
    return PlayerResponse.model_validate(player)


@router.get(
    "/{player_uuid}/leagues",
    response_model=PlayerLeagueListResponse,
    summary="List Player Leagues",
    description="Returns each league of the player with member count and how many played today.",
    responses={200: {"description": "League summaries returned."}},
)
async def list_player_leagues(
    player_uuid: str,
    leaderboard_service: LeaderboardService = LEADERBOARD_SERVICE_DEP,
) -> PlayerLeagueListResponse:
    summaries = await leaderboard_service.get_player_league_summary(player_uuid)
    return PlayerLeagueListResponse(
        items=[PlayerLeagueSummaryResponse.model_validate(row._asdict()) for row in summaries]
    )
