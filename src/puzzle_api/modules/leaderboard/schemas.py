from __future__ import annotations

from pydantic import BaseModel, ConfigDict

from puzzle_api.modules.leagues.schemas import LeagueResponse


class LeaderboardEntryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    uuid: str
    display_name: str
    mistakes: int | None
    date: str | None
    rank: int | None


class LeaderboardResponse(BaseModel):
    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "league": {
                    "id": "k3v9x0qa",
                    "name": "Office Puzzlers",
                    "created_at": "2026-02-22T20:20:10.000000",
                },
                "date": "2026-02-22",
                "entries": [
                    {"uuid": "p-dave", "display_name": "Dave", "mistakes": 0, "date": "2026-02-22", "rank": 1},
                    {"uuid": "p-bob", "display_name": "Bob", "mistakes": 2, "date": "2026-02-22", "rank": 2},
                    {"uuid": "p-carol", "display_name": "Carol", "mistakes": 2, "date": "2026-02-22", "rank": 2},
                    {"uuid": "p-alice", "display_name": "Alice", "mistakes": None, "date": None, "rank": None},
                ],
            }
        },
    )

    league: LeagueResponse
    date: str
    entries: list[LeaderboardEntryResponse]
