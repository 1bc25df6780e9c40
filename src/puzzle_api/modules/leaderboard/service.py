from __future__ import annotations

import unicodedata
from typing import NamedTuple

from puzzle_api.common.dates import today_string
from puzzle_api.db.models import League
from puzzle_api.errors import NotFoundError
from puzzle_api.stores import MembershipStore, ScoreStore


class Standing(NamedTuple):
    uuid: str
    display_name: str
    mistakes: int | None
    date: str | None
    rank: int | None = None


class Leaderboard(NamedTuple):
    league: League
    date: str
    entries: list[Standing]


class LeagueSummary(NamedTuple):
    league_id: str
    league_name: str
    total_members: int
    played_today: int


def _name_key(display_name: str) -> tuple[str, str]:
    decomposed = unicodedata.normalize("NFKD", display_name)
    folded = "".join(ch for ch in decomposed if not unicodedata.combining(ch)).casefold()
    # Names equal once folded put lowercase first: swapcase() inverts the
    # code point order of cased letters.
    return folded, display_name.swapcase()


def _sort_key(standing: Standing) -> tuple[int, int, tuple[str, str]]:
    if standing.mistakes is not None:
        # Played ties keep their incoming order (sorted() is stable).
        return 0, standing.mistakes, ("", "")
    return 1, 0, _name_key(standing.display_name)


def rank_entries(standings: list[Standing]) -> list[Standing]:
    """Sort standings and assign competition ranks ("1224").

    Players with a score come first, fewest mistakes first; players without
    a score follow in name order and get no rank. A tied group shares the
    rank of its first member's position among players who played.
    """
    ordered = sorted(standings, key=_sort_key)
    ranked: list[Standing] = []
    played_count = 0
    current_rank: int | None = None
    last_mistakes: int | None = None
    for standing in ordered:
        if standing.mistakes is None:
            ranked.append(standing._replace(rank=None))
            continue
        played_count += 1
        if current_rank is None or standing.mistakes != last_mistakes:
            current_rank = played_count
        last_mistakes = standing.mistakes
        ranked.append(standing._replace(rank=current_rank))
    return ranked


class LeaderboardService:
    def __init__(
        self,
        membership_store: MembershipStore,
        score_store: ScoreStore,
        timezone_name: str = "UTC",
    ) -> None:
        self.membership_store = membership_store
        self.score_store = score_store
        self.timezone_name = timezone_name

    def today(self) -> str:
        return today_string(self.timezone_name)

    async def compute_leaderboard(self, league_id: str, date: str | None = None) -> Leaderboard:
        league = await self.membership_store.get_league(league_id)
        if league is None:
            raise NotFoundError(f"League not found: {league_id}")
        resolved_date = date or self.today()

        members = await self.membership_store.list_members_of_league(league.id)
        scores = await self.score_store.get_scores_for_league_on_date(league.id, resolved_date)
        mistakes_by_player = {row.player_uuid: row.mistakes for row in scores}

        standings = []
        for member in members:
            mistakes = mistakes_by_player.get(member.player_uuid)
            standings.append(
                Standing(
                    uuid=member.player_uuid,
                    display_name=member.display_name,
                    mistakes=mistakes,
                    date=resolved_date if mistakes is not None else None,
                )
            )
        return Leaderboard(league=league, date=resolved_date, entries=rank_entries(standings))

    async def get_player_league_summary(self, player_uuid: str) -> list[LeagueSummary]:
        today = self.today()
        leagues = await self.membership_store.list_leagues_of_player(player_uuid)
        summaries: list[LeagueSummary] = []
        for ref in leagues:
            if ref.league_name is None:
                continue
            summaries.append(
                LeagueSummary(
                    league_id=ref.league_id,
                    league_name=ref.league_name,
                    total_members=await self.membership_store.count_members(ref.league_id),
                    played_today=await self.score_store.count_played_on_date(ref.league_id, today),
                )
            )
        return summaries
