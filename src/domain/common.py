"""Shared types for league rating state."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime
from enum import Enum

from domain.errors import UnknownMatch, UnknownPlayer


class PlayerStatus(str, Enum):
    """Membership status of a player inside one league."""

    ACTIVE = "active"
    INACTIVE = "inactive"


class Outcome(str, Enum):
    """Decisive result of a match from one participant's point of view."""

    WIN = "win"
    LOSS = "loss"


@dataclass(frozen=True)
class LeaguePlayer:
    """One player's standing inside a single league."""

    player_id: str
    name: str
    rating: int = 1000
    wins: int = 0
    losses: int = 0
    status: PlayerStatus = PlayerStatus.ACTIVE
    joined_at: datetime | None = None

    @property
    def matches_played(self) -> int:
        return self.wins + self.losses

    @property
    def is_active(self) -> bool:
        return self.status == PlayerStatus.ACTIVE


@dataclass(frozen=True)
class MatchResult:
    """Canonical reported result, validated at the recorder boundary."""

    player_a_id: str
    player_b_id: str
    player_a_score: int
    player_b_score: int
    winner_id: str

    @property
    def loser_id(self) -> str:
        return self.player_b_id if self.winner_id == self.player_a_id else self.player_a_id

    def outcome_for(self, player_id: str) -> Outcome:
        return Outcome.WIN if player_id == self.winner_id else Outcome.LOSS


@dataclass(frozen=True)
class MatchRecord:
    """Immutable persisted match with the rating changes frozen at record time."""

    match_id: str
    league_id: str
    player_a_id: str
    player_b_id: str
    player_a_name: str
    player_b_name: str
    player_a_score: int
    player_b_score: int
    winner_id: str
    elo_change_a: int
    elo_change_b: int
    created_at: datetime

    @property
    def loser_id(self) -> str:
        return self.player_b_id if self.winner_id == self.player_a_id else self.player_a_id

    def involves(self, player_id: str) -> bool:
        return player_id in (self.player_a_id, self.player_b_id)

    def opponent_of(self, player_id: str) -> str:
        return self.player_b_id if player_id == self.player_a_id else self.player_a_id

    def elo_change_for(self, player_id: str) -> int:
        if player_id == self.player_a_id:
            return self.elo_change_a
        if player_id == self.player_b_id:
            return self.elo_change_b
        raise UnknownPlayer(
            f"player_id={player_id} did not take part in match_id={self.match_id}"
        )


@dataclass(frozen=True)
class LeagueState:
    """Snapshot of one league's player pool and match list."""

    league_id: str
    players: tuple[LeaguePlayer, ...] = ()
    matches: tuple[MatchRecord, ...] = ()

    def find_player(self, player_id: str) -> LeaguePlayer | None:
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def get_player(self, player_id: str) -> LeaguePlayer:
        player = self.find_player(player_id)
        if player is None:
            raise UnknownPlayer(f"player_id={player_id} is not a member of league_id={self.league_id}")
        return player

    def get_active_player(self, player_id: str) -> LeaguePlayer:
        player = self.get_player(player_id)
        if not player.is_active:
            raise UnknownPlayer(f"player_id={player_id} is inactive in league_id={self.league_id}")
        return player

    def get_match(self, match_id: str) -> MatchRecord:
        for match in self.matches:
            if match.match_id == match_id:
                return match
        raise UnknownMatch(f"match_id={match_id} not found in league_id={self.league_id}")

    def has_match(self, match_id: str) -> bool:
        return any(match.match_id == match_id for match in self.matches)

    def active_players(self) -> list[LeaguePlayer]:
        return [player for player in self.players if player.is_active]

    def replace_players(self, *updated: LeaguePlayer) -> LeagueState:
        """Return a copy with the given players swapped in, keeping pool order."""
        by_id = {player.player_id: player for player in updated}
        missing = set(by_id) - {player.player_id for player in self.players}
        if missing:
            raise UnknownPlayer(
                f"player_ids={sorted(missing)} are not members of league_id={self.league_id}"
            )
        players = tuple(by_id.get(player.player_id, player) for player in self.players)
        return replace(self, players=players)


@dataclass(frozen=True)
class MatchApplication:
    """Outcome of applying one result to a league snapshot."""

    state: LeagueState
    player_a: LeaguePlayer
    player_b: LeaguePlayer
    match_record: MatchRecord


@dataclass(frozen=True)
class MatchReversal:
    """Outcome of retracting one recorded match from a league snapshot."""

    state: LeagueState
    player_a: LeaguePlayer
    player_b: LeaguePlayer
    match_record: MatchRecord


__all__ = [
    "LeaguePlayer",
    "LeagueState",
    "MatchApplication",
    "MatchRecord",
    "MatchResult",
    "MatchReversal",
    "Outcome",
    "PlayerStatus",
]
