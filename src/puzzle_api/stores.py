"""Store contracts consumed by the league, score and leaderboard services.

Services receive store instances explicitly; ``MembershipRepository`` and
``ScoreRepository`` are the SQL implementations, tests use in-memory ones.
"""

from __future__ import annotations

from typing import NamedTuple, Protocol

from puzzle_api.db.models import League, Player
from puzzle_api.errors import ValidationError


class MemberRow(NamedTuple):
    player_uuid: str
    display_name: str


class LeagueRef(NamedTuple):
    league_id: str
    # None when the membership points at a league that no longer resolves.
    league_name: str | None


class ScoreRow(NamedTuple):
    player_uuid: str
    mistakes: int


class UpsertResult(NamedTuple):
    created: bool


class MembershipStore(Protocol):
    async def create_league(self, name: str) -> League: ...

    async def get_league(self, league_id: str) -> League | None: ...

    async def upsert_player(self, player_uuid: str, display_name: str) -> Player: ...

    async def add_membership(self, player_uuid: str, league_id: str) -> None: ...

    async def has_membership(self, player_uuid: str, league_id: str) -> bool: ...

    async def list_members_of_league(self, league_id: str) -> list[MemberRow]: ...

    async def list_leagues_of_player(self, player_uuid: str) -> list[LeagueRef]: ...

    async def count_members(self, league_id: str) -> int: ...


class ScoreStore(Protocol):
    async def upsert_score(
        self,
        player_uuid: str,
        league_id: str,
        date: str,
        mistakes: int,
    ) -> UpsertResult: ...

    async def get_scores_for_league_on_date(self, league_id: str, date: str) -> list[ScoreRow]: ...

    async def count_played_on_date(self, league_id: str, date: str) -> int: ...


def clean_name(value: str | None, *, field: str) -> str:
    """Trim a league or display name, rejecting blank input."""
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} must not be empty.")
    return cleaned


def check_mistakes(mistakes: object) -> int:
    if isinstance(mistakes, bool) or not isinstance(mistakes, int) or mistakes < 0:
        raise ValidationError("mistakes must be a non-negative integer.")
    return mistakes
