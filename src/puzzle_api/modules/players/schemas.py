from __future__ import annotations

from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

from puzzle_api.common import UtcDatetime

DisplayName = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]


class PlayerUpdateRequest(BaseModel):
    model_config = ConfigDict(json_schema_extra={"example": {"display_name": "Alice"}})

    display_name: DisplayName


class PlayerResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "uuid": "0b7c2f0e-5a43-4d35-9d1f-0f0a4f1d5c11",
                "display_name": "Alice",
                "created_at": "2026-02-22T20:20:10.000000Z",
                "updated_at": "2026-02-23T08:00:00.000000Z",
            }
        },
    )

    uuid: str
    display_name: str
    created_at: UtcDatetime
    updated_at: UtcDatetime


class PlayerLeagueSummaryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    league_id: str
    league_name: str
    total_members: int
    played_today: int


class PlayerLeagueListResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "items": [
                    {
                        "league_id": "k3v9x0qa",
                        "league_name": "Office Puzzlers",
                        "total_members": 6,
                        "played_today": 4,
                    }
                ]
            }
        }
    )

    items: list[PlayerLeagueSummaryResponse]
