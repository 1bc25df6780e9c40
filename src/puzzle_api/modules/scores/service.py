from __future__ import annotations

import logging
from typing import NamedTuple

from puzzle_api.errors import StoreUnavailableError, ValidationError
from puzzle_api.modules.leagues.service import require_player_uuid
from puzzle_api.stores import MembershipStore, ScoreStore, check_mistakes

logger = logging.getLogger(__name__)


class ScoreSubmission(NamedTuple):
    recorded: int


class ScoreService:
    def __init__(self, membership_store: MembershipStore, score_store: ScoreStore) -> None:
        self.membership_store = membership_store
        self.score_store = score_store

    async def submit_score(self, player_uuid: str, date: str, mistakes: int | None) -> ScoreSubmission:
        """Record one day's result in every league the player belongs to.

        Leagues are written independently. A league whose store write fails is
        logged and skipped; ``recorded`` counts only successful writes.
        """
        uuid = require_player_uuid(player_uuid)
        day = (date or "").strip()
        if not day:
            raise ValidationError("date is required.")
        if mistakes is None:
            raise ValidationError("mistakes is required.")
        checked = check_mistakes(mistakes)

        leagues = await self.membership_store.list_leagues_of_player(uuid)
        recorded = 0
        for league in leagues:
            try:
                await self.score_store.upsert_score(uuid, league.league_id, day, checked)
            except StoreUnavailableError:
                logger.warning(
                    "Skipping league after failed score write.",
                    extra={"league_id": league.league_id, "date": day},
                )
                continue
            recorded += 1
        return ScoreSubmission(recorded=recorded)
