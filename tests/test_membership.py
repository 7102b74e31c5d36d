"""Tests for joining, leaving and renaming league players."""

from __future__ import annotations

from datetime import datetime

import pytest

from domain.common import LeaguePlayer, LeagueState, MatchResult, PlayerStatus
from domain.elo.calculator import EloParameters, LeagueEloCalculator
from domain.errors import UnknownPlayer
from domain.membership import join_league, leave_league, rename_player

JOINED_AT = datetime(2026, 1, 1, 9, 0, 0)


def test_join_adds_player_at_initial_rating() -> None:
    state = join_league(LeagueState(league_id="club"), "alice", "Alice", joined_at=JOINED_AT)
    assert state.players == (
        LeaguePlayer(player_id="alice", name="Alice", rating=1000, joined_at=JOINED_AT),
    )


def test_join_uses_configured_initial_rating() -> None:
    state = join_league(
        LeagueState(league_id="club"),
        "alice",
        "Alice",
        params=EloParameters(initial_rating=1200),
    )
    assert state.get_player("alice").rating == 1200


def test_join_is_a_no_op_for_active_member() -> None:
    state = join_league(LeagueState(league_id="club"), "alice", "Alice")
    assert join_league(state, "alice", "Someone Else") is state


def test_rejoin_keeps_rating_and_record() -> None:
    state = LeagueState(
        league_id="club",
        players=(
            LeaguePlayer(
                player_id="alice",
                name="Alice",
                rating=1042,
                wins=4,
                losses=2,
                status=PlayerStatus.INACTIVE,
            ),
        ),
    )
    rejoined = join_league(state, "alice", "Alice").get_player("alice")
    assert rejoined.status == PlayerStatus.ACTIVE
    assert (rejoined.rating, rejoined.wins, rejoined.losses) == (1042, 4, 2)


def test_join_requires_player_id() -> None:
    with pytest.raises(ValueError, match="player_id"):
        join_league(LeagueState(league_id="club"), "", "Nobody")


def test_leave_marks_inactive_and_keeps_matches() -> None:
    state = join_league(LeagueState(league_id="club"), "alice", "Alice")
    state = join_league(state, "bob", "Bob")
    state = LeagueEloCalculator().apply_match_result(
        state,
        MatchResult("alice", "bob", 3, 0, "alice"),
    ).state

    left = leave_league(state, "bob")
    assert left.get_player("bob").status == PlayerStatus.INACTIVE
    assert left.matches == state.matches
    assert leave_league(left, "bob") is left


def test_leave_unknown_player_raises() -> None:
    with pytest.raises(UnknownPlayer):
        leave_league(LeagueState(league_id="club"), "ghost")


def test_rename_updates_player_and_match_names() -> None:
    state = join_league(LeagueState(league_id="club"), "alice", "Alice")
    state = join_league(state, "bob", "Bob")
    calculator = LeagueEloCalculator()
    state = calculator.apply_match_result(state, MatchResult("alice", "bob", 3, 0, "alice")).state
    state = calculator.apply_match_result(state, MatchResult("bob", "alice", 3, 1, "bob")).state

    renamed = rename_player(state, "alice", "Alicia")
    assert renamed.get_player("alice").name == "Alicia"
    assert renamed.matches[0].player_a_name == "Alicia"
    assert renamed.matches[0].player_b_name == "Bob"
    assert renamed.matches[1].player_b_name == "Alicia"
    assert renamed.matches[1].player_a_name == "Bob"
