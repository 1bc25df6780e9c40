from .leaderboard import get_leaderboard_service_dep
from .leagues import get_league_service_dep
from .scores import get_score_service_dep
from .settings import resolve_settings

__all__ = [
    "get_leaderboard_service_dep",
    "get_league_service_dep",
    "get_score_service_dep",
    "resolve_settings",
]
