from __future__ import annotations

import logging
from typing import NamedTuple

from puzzle_api.db.models import League, Player
from puzzle_api.errors import NotFoundError, ValidationError
from puzzle_api.stores import MembershipStore, clean_name

logger = logging.getLogger(__name__)


class JoinResult(NamedTuple):
    league: League
    player: Player
    # False when the player was already a member.
    joined: bool


def require_player_uuid(player_uuid: str | None) -> str:
    cleaned = (player_uuid or "").strip()
    if not cleaned:
        raise ValidationError("Player uuid is required.")
    return cleaned


class LeagueService:
    def __init__(self, membership_store: MembershipStore) -> None:
        self.membership_store = membership_store

    async def create_league(self, name: str) -> League:
        cleaned = clean_name(name, field="League name")
        league = await self.membership_store.create_league(cleaned)
        logger.info("league_created", extra={"league_id": league.id})
        return league

    async def get_league(self, league_id: str) -> League:
        league = await self.membership_store.get_league(league_id)
        if league is None:
            raise NotFoundError(f"League not found: {league_id}")
        return league

    async def join_league(self, league_id: str, player_uuid: str, display_name: str) -> JoinResult:
        uuid = require_player_uuid(player_uuid)
        name = clean_name(display_name, field="Display name")
        league = await self.get_league(league_id)
        player = await self.membership_store.upsert_player(uuid, name)
        already_member = await self.membership_store.has_membership(uuid, league.id)
        if not already_member:
            await self.membership_store.add_membership(uuid, league.id)
        return JoinResult(league=league, player=player, joined=not already_member)

    async def update_display_name(self, player_uuid: str, display_name: str) -> Player:
        uuid = require_player_uuid(player_uuid)
        name = clean_name(display_name, field="Display name")
        return await self.membership_store.upsert_player(uuid, name)
