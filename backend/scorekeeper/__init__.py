"""Point-by-point tennis scoring for the tournament match service."""

from .scoring.tennis import award_point, initialize, validate
from .schemas import GameFormat, MatchFormat, MatchScore, SetRecord, Side

__all__ = [
    "award_point",
    "initialize",
    "validate",
    "GameFormat",
    "MatchFormat",
    "MatchScore",
    "SetRecord",
    "Side",
]
