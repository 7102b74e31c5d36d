"""League rating domain modules."""

from domain.common import (
    LeaguePlayer,
    LeagueState,
    MatchApplication,
    MatchRecord,
    MatchResult,
    MatchReversal,
    Outcome,
    PlayerStatus,
)
from domain.errors import (
    InvalidResult,
    LeagueError,
    RetractionNotAllowed,
    RoundingInvariantViolation,
    UnknownLeague,
    UnknownMatch,
    UnknownPlayer,
)

__all__ = [
    "InvalidResult",
    "LeagueError",
    "LeaguePlayer",
    "LeagueState",
    "MatchApplication",
    "MatchRecord",
    "MatchResult",
    "MatchReversal",
    "Outcome",
    "PlayerStatus",
    "RetractionNotAllowed",
    "RoundingInvariantViolation",
    "UnknownLeague",
    "UnknownMatch",
    "UnknownPlayer",
]
