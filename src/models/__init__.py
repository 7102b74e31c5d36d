"""ORM models."""

from models.base import Base
from models.league import League
from models.match import LeagueMatchRow
from models.player import LeaguePlayerRow

__all__ = [
    "Base",
    "League",
    "LeagueMatchRow",
    "LeaguePlayerRow",
]
