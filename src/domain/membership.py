"""Player membership changes on a league snapshot."""

from __future__ import annotations

from dataclasses import replace
from datetime import UTC, datetime

from domain.common import LeaguePlayer, LeagueState, PlayerStatus
from domain.elo.calculator import DEFAULT_PARAMETERS, EloParameters


def join_league(
    state: LeagueState,
    player_id: str,
    name: str,
    *,
    params: EloParameters = DEFAULT_PARAMETERS,
    joined_at: datetime | None = None,
) -> LeagueState:
    """Add a new player at the initial rating, or reactivate a returning one.

    Returning players keep their rating and record from before they left.
    """
    if not player_id:
        raise ValueError("player_id is required")

    existing = state.find_player(player_id)
    if existing is not None:
        if existing.is_active:
            return state
        return state.replace_players(replace(existing, status=PlayerStatus.ACTIVE))

    player = LeaguePlayer(
        player_id=player_id,
        name=name,
        rating=params.initial_rating,
        joined_at=joined_at or datetime.now(UTC).replace(tzinfo=None),
    )
    return replace(state, players=state.players + (player,))


def leave_league(state: LeagueState, player_id: str) -> LeagueState:
    """Mark a player inactive; their matches stay on record."""
    player = state.get_player(player_id)
    if not player.is_active:
        return state
    return state.replace_players(replace(player, status=PlayerStatus.INACTIVE))


def rename_player(state: LeagueState, player_id: str, name: str) -> LeagueState:
    """Rename a player, including the names denormalized onto their matches."""
    player = state.get_player(player_id)
    matches = []
    for match in state.matches:
        if match.player_a_id == player_id:
            match = replace(match, player_a_name=name)
        if match.player_b_id == player_id:
            match = replace(match, player_b_name=name)
        matches.append(match)
    return replace(
        state.replace_players(replace(player, name=name)),
        matches=tuple(matches),
    )


__all__ = ["join_league", "leave_league", "rename_player"]
