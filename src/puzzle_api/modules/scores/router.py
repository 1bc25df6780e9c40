from __future__ import annotations

from fastapi import APIRouter, Depends, Request

from puzzle_api.common.dates import today_string
from puzzle_api.deps.scores import get_score_service_dep
from puzzle_api.deps.settings import resolve_settings
from puzzle_api.modules.scores.schemas import ScoreSubmissionResponse, ScoreSubmitRequest
from puzzle_api.modules.scores.service import ScoreService

router = APIRouter(prefix="/scores", tags=["scores"])
SCORE_SERVICE_DEP = Depends(get_score_service_dep)


@router.post(
    "",
    response_model=ScoreSubmissionResponse,
    summary="Submit Score",
    description=(
        "Records the day's mistake count in every league the player belongs to. "
        "A player in no leagues gets recorded=0."
    ),
    responses={
        200: {"description": "Score recorded in `recorded` leagues."},
        422: {"description": "Missing player uuid or invalid mistakes/date."},
    },
)
async def post_score(
    payload: ScoreSubmitRequest,
    request: Request,
    score_service: ScoreService = SCORE_SERVICE_DEP,
) -> ScoreSubmissionResponse:
    date = payload.date or today_string(resolve_settings(request).app_timezone)
    submission = await score_service.submit_score(payload.player_uuid, date, payload.mistakes)
    return ScoreSubmissionResponse(date=date, recorded=submission.recorded)
