from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

from puzzle_api.common import UtcDatetime
from puzzle_api.modules.players.schemas import DisplayName, PlayerResponse

LeagueName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)]
PlayerUuid = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]


class LeagueCreateRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={"example": {"name": "Office Puzzlers"}})

    name: LeagueName


class LeagueResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "k3v9x0qa",
                "name": "Office Puzzlers",
                "created_at": "2026-02-22T20:20:10.000000Z",
            }
        },
    )

    id: str
    name: str
    created_at: UtcDatetime


class JoinLeagueRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "player_uuid": "0b7c2f0e-5a43-4d35-9d1f-0f0a4f1d5c11",
                "display_name": "Alice",
            }
        }
    )

    player_uuid: PlayerUuid
    display_name: DisplayName


class JoinLeagueResponse(BaseModel):
    league: LeagueResponse
    player: PlayerResponse
    joined: bool
