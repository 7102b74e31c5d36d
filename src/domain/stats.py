"""Leaderboard and per-player statistics derived from a league snapshot."""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass
from datetime import datetime

from domain.common import LeaguePlayer, LeagueState, MatchRecord


@dataclass(frozen=True)
class LeaderboardEntry:
    rank: int
    player: LeaguePlayer


@dataclass(frozen=True)
class RatingHistoryPoint:
    """Rating after `match_index` matches; index 0 is the starting rating."""

    match_index: int
    rating: int
    event_time: datetime | None = None
    match_id: str | None = None


@dataclass(frozen=True)
class HeadToHead:
    opponent_id: str
    opponent_name: str
    wins: int
    losses: int

    @property
    def matches(self) -> int:
        return self.wins + self.losses


@dataclass(frozen=True)
class PlayerStats:
    player: LeaguePlayer
    league_id: str
    rank: int
    rating_history: tuple[RatingHistoryPoint, ...]
    match_history: tuple[MatchRecord, ...]
    head_to_head: tuple[HeadToHead, ...]


def leaderboard(state: LeagueState) -> list[LeaderboardEntry]:
    """Rank active players by rating (ties: more wins first, then name)."""
    ordered = sorted(
        state.active_players(),
        key=lambda player: (-player.rating, -player.wins, player.name.casefold(), player.player_id),
    )
    return [LeaderboardEntry(rank=index, player=player) for index, player in enumerate(ordered, start=1)]


def player_stats(state: LeagueState, player_id: str, *, initial_rating: int = 1000) -> PlayerStats:
    """Build rank, rating history, match history and head-to-head records for one active player."""
    player = state.get_active_player(player_id)

    rank = next(entry.rank for entry in leaderboard(state) if entry.player.player_id == player_id)
    chronological = sorted(
        (match for match in state.matches if match.involves(player_id)),
        key=lambda match: match.created_at,
    )

    history = [RatingHistoryPoint(match_index=0, rating=initial_rating)]
    rating = initial_rating
    for index, match in enumerate(chronological, start=1):
        rating += match.elo_change_for(player_id)
        history.append(
            RatingHistoryPoint(
                match_index=index,
                rating=rating,
                event_time=match.created_at,
                match_id=match.match_id,
            )
        )

    return PlayerStats(
        player=player,
        league_id=state.league_id,
        rank=rank,
        rating_history=tuple(history),
        match_history=tuple(reversed(chronological)),
        head_to_head=_head_to_head(player_id, chronological),
    )


def _head_to_head(player_id: str, matches: list[MatchRecord]) -> tuple[HeadToHead, ...]:
    names: dict[str, str] = {}
    wins: Counter[str] = Counter()
    losses: Counter[str] = Counter()
    for match in matches:
        opponent_id = match.opponent_of(player_id)
        names[opponent_id] = match.player_b_name if opponent_id == match.player_b_id else match.player_a_name
        if match.winner_id == player_id:
            wins[opponent_id] += 1
        else:
            losses[opponent_id] += 1

    return tuple(
        HeadToHead(
            opponent_id=opponent_id,
            opponent_name=opponent_name,
            wins=wins[opponent_id],
            losses=losses[opponent_id],
        )
        for opponent_id, opponent_name in names.items()
    )


def find_record_inconsistencies(state: LeagueState) -> dict[str, tuple[int, int]]:
    """Map player_id -> (recorded wins+losses, matches on file) where they disagree."""
    on_file: Counter[str] = Counter()
    for match in state.matches:
        on_file[match.player_a_id] += 1
        on_file[match.player_b_id] += 1

    mismatches: dict[str, tuple[int, int]] = {}
    for player in state.players:
        if player.matches_played != on_file[player.player_id]:
            mismatches[player.player_id] = (player.matches_played, on_file[player.player_id])
    for player_id in on_file:
        if state.find_player(player_id) is None:
            mismatches[player_id] = (0, on_file[player_id])
    return mismatches


def last_activity(state: LeagueState, created_at: datetime) -> datetime:
    """Latest of league creation and the most recent match."""
    if not state.matches:
        return created_at
    return max(created_at, max(match.created_at for match in state.matches))


__all__ = [
    "HeadToHead",
    "LeaderboardEntry",
    "PlayerStats",
    "RatingHistoryPoint",
    "find_record_inconsistencies",
    "last_activity",
    "leaderboard",
    "player_stats",
]
