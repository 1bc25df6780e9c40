from .league import League
from .membership import Membership
from .player import Player
from .score import Score

__all__ = [
    "League",
    "Membership",
    "Player",
    "Score",
]
