from __future__ import annotations

from fastapi import APIRouter, Depends, status

from puzzle_api.deps.leagues import get_league_service_dep
from puzzle_api.modules.leagues.schemas import (
    JoinLeagueRequest,
    JoinLeagueResponse,
    LeagueCreateRequest,
    LeagueResponse,
)
from puzzle_api.modules.leagues.service import LeagueService
from puzzle_api.modules.players.schemas import PlayerResponse

router = APIRouter(prefix="/leagues", tags=["leagues"])
LEAGUE_SERVICE_DEP = Depends(get_league_service_dep)


@router.post(
    "",
    response_model=LeagueResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create League",
    description="Creates a league with a generated 8-character id. The name is trimmed.",
    responses={
        201: {"description": "League created."},
        422: {"description": "League name is empty after trimming."},
    },
)
async def post_league(
    request: LeagueCreateRequest,
    league_service: LeagueService = LEAGUE_SERVICE_DEP,
) -> LeagueResponse:
    league = await league_service.create_league(request.name)
    return LeagueResponse.model_validate(league)


@router.get(
    "/{league_id}",
    response_model=LeagueResponse,
    summary="Get League",
    description="Returns a league by id.",
    responses={
        200: {"description": "League found."},
        404: {
            "description": "League not found.",
            "content": {"application/json": {"example": {"detail": "League not found: k3v9x0qa"}}},
        },
    },
)
async def get_league(
    league_id: str,
    league_service: LeagueService = LEAGUE_SERVICE_DEP,
) -> LeagueResponse:
    league = await league_service.get_league(league_id)
    return LeagueResponse.model_validate(league)


@router.post(
    "/{league_id}/join",
    response_model=JoinLeagueResponse,
    summary="Join League",
    description=(
        "Creates or renames the player and adds them to the league. "
        "Joining a league twice is a no-op reported with joined=false."
    ),
    responses={
        200: {"description": "Player is a member of the league."},
        404: {"description": "League not found."},
        422: {"description": "Display name is empty after trimming."},
    },
)
async def join_league(
    league_id: str,
    request: JoinLeagueRequest,
    league_service: LeagueService = LEAGUE_SERVICE_DEP,
) -> JoinLeagueResponse:
    result = await league_service.join_league(
        league_id=league_id,
        player_uuid=request.player_uuid,
        display_name=request.display_name,
    )
    return JoinLeagueResponse(
        league=LeagueResponse.model_validate(result.league),
        player=PlayerResponse.model_validate(result.player),
        joined=result.joined,
    )
