"""Error types raised by league rating operations."""

from __future__ import annotations


class LeagueError(Exception):
    """Base class for user-facing league errors."""


class InvalidResult(LeagueError, ValueError):
    """Malformed or self-inconsistent match input."""


class UnknownPlayer(LeagueError, LookupError):
    """A referenced participant is not in the league's player set."""


class UnknownMatch(LeagueError, LookupError):
    """A retraction target is not in the league's match list."""


class UnknownLeague(LeagueError, LookupError):
    """The league does not exist in the store."""


class RetractionNotAllowed(LeagueError, PermissionError):
    """The requester may not retract this match (not a participant, or too late)."""


class RoundingInvariantViolation(AssertionError):
    """A decisive outcome produced a zero or wrongly signed rating delta."""


__all__ = [
    "InvalidResult",
    "LeagueError",
    "RetractionNotAllowed",
    "RoundingInvariantViolation",
    "UnknownLeague",
    "UnknownMatch",
    "UnknownPlayer",
]
