from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

# Allow running the script from the repo root.
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))


async def create_league(name: str, *, init_schema: bool) -> tuple[str, str, str]:
    from puzzle_api.db.session import get_sessionmaker, init_db
    from puzzle_api.modules.leagues.repository import MembershipRepository
    from puzzle_api.modules.leagues.service import LeagueService

    if init_schema:
        await init_db()
    sessionmaker = get_sessionmaker()
    async with sessionmaker() as session:
        service = LeagueService(membership_store=MembershipRepository(session=session))
        league = await service.create_league(name)
        return league.id, league.name, league.created_at.isoformat()


async def main_async() -> None:
    parser = argparse.ArgumentParser(description="Create a league and print its id.")
    parser.add_argument("name", help="League name (trimmed, must not be blank).")
    parser.add_argument(
        "--init-schema",
        action="store_true",
        help="Create missing tables before inserting (local/dev databases).",
    )
    args = parser.parse_args()

    league_id, name, created_at = await create_league(args.name, init_schema=args.init_schema)
    print("League created:")
    print(f"  id={league_id}")
    print(f"  name={name}")
    print(f"  created_at={created_at}")

    from puzzle_api.db.session import get_engine

    await get_engine().dispose()


if __name__ == "__main__":
    asyncio.run(main_async())
