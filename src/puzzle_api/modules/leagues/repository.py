from __future__ import annotations

import secrets
import string
from datetime import datetime, timezone

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import col, select

from puzzle_api.db.guard import store_guard
from puzzle_api.db.models import League, Membership, Player
from puzzle_api.db.models.league import LEAGUE_ID_LENGTH
from puzzle_api.errors import StoreUnavailableError
from puzzle_api.stores import LeagueRef, MemberRow, clean_name

LEAGUE_ID_ALPHABET = string.ascii_lowercase + string.digits
LEAGUE_ID_ATTEMPTS = 5


def generate_league_id() -> str:
    return "".join(secrets.choice(LEAGUE_ID_ALPHABET) for _ in range(LEAGUE_ID_LENGTH))


class MembershipRepository:
    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def create_league(self, name: str) -> League:
        cleaned = clean_name(name, field="League name")
        for _ in range(LEAGUE_ID_ATTEMPTS):
            league_id = generate_league_id()
            async with store_guard(self.session, "create_league"):
                if await self.session.get(League, league_id) is not None:
                    continue
                league = League(id=league_id, name=cleaned, created_at=self.now_utc())
                self.session.add(league)
                try:
                    await self.session.commit()
                except IntegrityError:
                    await self.session.rollback()
                    continue
                await self.session.refresh(league)
                return league
        raise StoreUnavailableError("create_league failed: could not allocate a unique league id")

    async def get_league(self, league_id: str) -> League | None:
        async with store_guard(self.session, "get_league"):
            return await self.session.get(League, league_id)

    async def upsert_player(self, player_uuid: str, display_name: str) -> Player:
        cleaned = clean_name(display_name, field="Display name")
        async with store_guard(self.session, "upsert_player"):
            player = await self.session.get(Player, player_uuid)
            now = self.now_utc()
            if player is None:
                player = Player(uuid=player_uuid, display_name=cleaned, created_at=now, updated_at=now)
                self.session.add(player)
                try:
                    await self.session.commit()
                except IntegrityError:
                    # Created concurrently; fall through to the overwrite path.
                    await self.session.rollback()
                    player = await self.session.get(Player, player_uuid)
                    if player is None:
                        raise
                else:
                    await self.session.refresh(player)
                    return player
            player.display_name = cleaned
            player.updated_at = now
            self.session.add(player)
            await self.session.commit()
            await self.session.refresh(player)
            return player

    async def add_membership(self, player_uuid: str, league_id: str) -> None:
        if await self.has_membership(player_uuid, league_id):
            return
        async with store_guard(self.session, "add_membership"):
            self.session.add(
                Membership(player_uuid=player_uuid, league_id=league_id, joined_at=self.now_utc())
            )
            try:
                await self.session.commit()
            except IntegrityError:
                await self.session.rollback()

    async def has_membership(self, player_uuid: str, league_id: str) -> bool:
        stmt = (
            select(func.count())
            .select_from(Membership)
            .where(Membership.player_uuid == player_uuid, Membership.league_id == league_id)
        )
        async with store_guard(self.session, "has_membership"):
            result = await self.session.execute(stmt)
        return int(result.scalar_one()) > 0

    async def list_members_of_league(self, league_id: str) -> list[MemberRow]:
        stmt = (
            select(Player.uuid, Player.display_name)
            .join(Membership, col(Membership.player_uuid) == col(Player.uuid))
            .where(Membership.league_id == league_id)
            .order_by(col(Membership.joined_at), col(Player.uuid))
        )
        async with store_guard(self.session, "list_members_of_league"):
            result = await self.session.execute(stmt)
        return [MemberRow(player_uuid=row[0], display_name=row[1]) for row in result.all()]

    async def list_leagues_of_player(self, player_uuid: str) -> list[LeagueRef]:
        stmt = (
            select(Membership.league_id, League.name)
            .outerjoin(League, col(League.id) == col(Membership.league_id))
            .where(Membership.player_uuid == player_uuid)
            .order_by(col(Membership.joined_at))
        )
        async with store_guard(self.session, "list_leagues_of_player"):
            result = await self.session.execute(stmt)
        return [LeagueRef(league_id=row[0], league_name=row[1]) for row in result.all()]

    async def count_members(self, league_id: str) -> int:
        stmt = select(func.count()).select_from(Membership).where(Membership.league_id == league_id)
        async with store_guard(self.session, "count_members"):
            result = await self.session.execute(stmt)
        return int(result.scalar_one())

    @staticmethod
    def now_utc() -> datetime:
        return datetime.now(timezone.utc)
