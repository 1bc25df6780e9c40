from __future__ import annotations

import asyncio
import sys
import tempfile
import unittest
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

from sqlalchemy import func
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlmodel import SQLModel, select

sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

from puzzle_api.common import as_utc
from puzzle_api.db import models as _models
from puzzle_api.db.models import League, Membership, Player, Score
from puzzle_api.errors import StoreUnavailableError, ValidationError
from puzzle_api.modules.leagues import repository as league_repository
from puzzle_api.modules.leagues.repository import MembershipRepository
from puzzle_api.modules.scores.repository import ScoreRepository

del _models

DATE = "2024-01-05"


class TestStoreRepositories(unittest.TestCase):
    def setUp(self) -> None:
        self.tmpdir = tempfile.TemporaryDirectory()
        db_path = Path(self.tmpdir.name) / "stores.db"
        self.engine = create_async_engine(f"sqlite+aiosqlite:///{db_path}", echo=False)
        self.sessionmaker = async_sessionmaker(
            bind=self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

        async def _init_db() -> None:
            async with self.engine.begin() as conn:
                await conn.run_sync(SQLModel.metadata.create_all)

        asyncio.run(_init_db())

    def tearDown(self) -> None:
        async def _dispose() -> None:
            await self.engine.dispose()

        asyncio.run(_dispose())
        self.tmpdir.cleanup()

    async def _count(self, session: AsyncSession, model: type[SQLModel]) -> int:
        result = await session.execute(select(func.count()).select_from(model))
        return int(result.scalar_one())

    def test_create_league_trims_and_generates_id(self) -> None:
        async def _run():
            async with self.sessionmaker() as session:
                repo = MembershipRepository(session)
                league = await repo.create_league("My League ")
                fetched = await repo.get_league(league.id)
                return league, fetched

        league, fetched = asyncio.run(_run())
        self.assertEqual(len(league.id), 8)
        self.assertTrue(league.id.isalnum())
        self.assertIsNotNone(fetched)
        assert fetched is not None
        self.assertEqual(fetched.name, "My League")

    def test_written_timestamps_read_back_as_utc(self) -> None:
        before = datetime.now(timezone.utc)

        async def _run():
            async with self.sessionmaker() as session:
                members = MembershipRepository(session)
                league = await members.create_league("Clock")
                player = await members.upsert_player("u-1", "Alice")
                await members.upsert_player("u-1", "Alicia")
                await members.add_membership("u-1", league.id)
                await ScoreRepository(session).upsert_score("u-1", league.id, DATE, 0)
            async with self.sessionmaker() as session:
                league = await session.get(League, league.id)
                player = await session.get(Player, player.uuid)
                score = (await session.execute(select(Score))).scalars().one()
                return league, player, score

        league, player, score = asyncio.run(_run())
        for value in (league.created_at, player.created_at, player.updated_at, score.recorded_at):
            with self.subTest(value=value):
                self.assertGreaterEqual(as_utc(value), before.replace(microsecond=0))
        self.assertGreaterEqual(as_utc(player.updated_at), as_utc(player.created_at))

    def test_create_league_retries_on_id_collision(self) -> None:
        async def _run():
            async with self.sessionmaker() as session:
                repo = MembershipRepository(session)
                with patch.object(league_repository, "generate_league_id", return_value="dup00000"):
                    first = await repo.create_league("First")
                ids = iter(["dup00000", "fresh000"])
                with patch.object(league_repository, "generate_league_id", side_effect=lambda: next(ids)):
                    second = await repo.create_league("Second")
                return first.id, second.id

        self.assertEqual(asyncio.run(_run()), ("dup00000", "fresh000"))

    def test_blank_league_name_rejected(self) -> None:
        async def _run() -> None:
            async with self.sessionmaker() as session:
                await MembershipRepository(session).create_league("  ")

        with self.assertRaises(ValidationError):
            asyncio.run(_run())

    def test_upsert_player_overwrites_name_only(self) -> None:
        async def _run():
            async with self.sessionmaker() as session:
                repo = MembershipRepository(session)
                first = await repo.upsert_player("u-1", "Alice")
                created_at = first.created_at
                second = await repo.upsert_player("u-1", " Alicia ")
                return created_at, second

        created_at, player = asyncio.run(_run())
        self.assertEqual(player.display_name, "Alicia")
        self.assertEqual(player.created_at, created_at)

    def test_add_membership_twice_keeps_one_row(self) -> None:
        async def _run():
            async with self.sessionmaker() as session:
                repo = MembershipRepository(session)
                league = await repo.create_league("League")
                await repo.upsert_player("u-1", "Alice")
                await repo.add_membership("u-1", league.id)
                await repo.add_membership("u-1", league.id)
                return (
                    await self._count(session, Membership),
                    await repo.has_membership("u-1", league.id),
                    await repo.has_membership("u-2", league.id),
                    await repo.count_members(league.id),
                )

        self.assertEqual(asyncio.run(_run()), (1, True, False, 1))

    def test_member_and_league_listings(self) -> None:
        async def _run():
            async with self.sessionmaker() as session:
                repo = MembershipRepository(session)
                first = await repo.create_league("First")
                second = await repo.create_league("Second")
                for uuid, name in (("u-1", "Alice"), ("u-2", "Bob")):
                    await repo.upsert_player(uuid, name)
                    await repo.add_membership(uuid, first.id)
                await repo.add_membership("u-1", second.id)
                members = await repo.list_members_of_league(first.id)
                leagues = await repo.list_leagues_of_player("u-1")
                return first, second, members, leagues

        first, second, members, leagues = asyncio.run(_run())
        self.assertEqual(
            sorted((row.player_uuid, row.display_name) for row in members),
            [("u-1", "Alice"), ("u-2", "Bob")],
        )
        self.assertEqual(
            sorted((ref.league_id, ref.league_name) for ref in leagues),
            sorted([(first.id, "First"), (second.id, "Second")]),
        )

    def test_upsert_score_twice_keeps_latest(self) -> None:
        async def _run():
            async with self.sessionmaker() as session:
                members = MembershipRepository(session)
                scores = ScoreRepository(session)
                league = await members.create_league("League")
                await members.upsert_player("u-1", "Alice")
                await members.add_membership("u-1", league.id)
                first = await scores.upsert_score("u-1", league.id, DATE, 5)
                second = await scores.upsert_score("u-1", league.id, DATE, 1)
                rows = await scores.get_scores_for_league_on_date(league.id, DATE)
                return (
                    first.created,
                    second.created,
                    await self._count(session, Score),
                    rows,
                    await scores.count_played_on_date(league.id, DATE),
                    await scores.count_played_on_date(league.id, "2024-01-06"),
                )

        first_created, second_created, total, rows, played, played_other = asyncio.run(_run())
        self.assertTrue(first_created)
        self.assertFalse(second_created)
        self.assertEqual(total, 1)
        self.assertEqual([(row.player_uuid, row.mistakes) for row in rows], [("u-1", 1)])
        self.assertEqual(played, 1)
        self.assertEqual(played_other, 0)

    def test_upsert_score_rejects_negative_mistakes(self) -> None:
        async def _run() -> None:
            async with self.sessionmaker() as session:
                await ScoreRepository(session).upsert_score("u-1", "abcd1234", DATE, -1)

        with self.assertRaises(ValidationError):
            asyncio.run(_run())

    def test_driver_failure_surfaces_as_store_unavailable(self) -> None:
        async def _run() -> None:
            async with self.sessionmaker() as session:
                repo = ScoreRepository(session)
                with patch.object(
                    session,
                    "execute",
                    side_effect=OperationalError("SELECT 1", {}, OSError("connection refused")),
                ):
                    await repo.count_played_on_date("abcd1234", DATE)

        with self.assertRaises(StoreUnavailableError):
            asyncio.run(_run())


if __name__ == "__main__":
    unittest.main()
