from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from puzzle_api.common.dates import DATE_PATTERN


class ScoreSubmitRequest(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "player_uuid": "0b7c2f0e-5a43-4d35-9d1f-0f0a4f1d5c11",
                "date": "2026-02-22",
                "mistakes": 2,
            }
        }
    )

    player_uuid: str = Field(min_length=1, max_length=64)
    # Defaults to today in the configured timezone.
    date: str | None = Field(default=None, pattern=DATE_PATTERN)
    mistakes: int = Field(ge=0)


class ScoreSubmissionResponse(BaseModel):
    model_config = ConfigDict(
        json_schema_extra={"example": {"date": "2026-02-22", "recorded": 3}}
    )

    date: str
    recorded: int
