"""Tests for applying and retracting match results on league snapshots."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timedelta

import pytest

from domain.common import LeaguePlayer, LeagueState, MatchResult, PlayerStatus
from domain.elo.calculator import LeagueEloCalculator
from domain.errors import InvalidResult, UnknownMatch, UnknownPlayer

T0 = datetime(2026, 1, 1, 12, 0, 0)


def _league(*players: LeaguePlayer) -> LeagueState:
    return LeagueState(league_id="club", players=players)


def _fresh_league() -> LeagueState:
    return _league(
        LeaguePlayer(player_id="alice", name="Alice"),
        LeaguePlayer(player_id="bob", name="Bob"),
        LeaguePlayer(player_id="carol", name="Carol"),
        LeaguePlayer(player_id="dave", name="Dave"),
    )


def _result(a: str, b: str, score_a: int, score_b: int) -> MatchResult:
    return MatchResult(
        player_a_id=a,
        player_b_id=b,
        player_a_score=score_a,
        player_b_score=score_b,
        winner_id=a if score_a > score_b else b,
    )


def test_first_match_between_new_players() -> None:
    calculator = LeagueEloCalculator()
    application = calculator.apply_match_result(
        _fresh_league(),
        _result("alice", "bob", 3, 1),
        match_id="m1",
        created_at=T0,
    )

    record = application.match_record
    assert record.elo_change_a == 16
    assert record.elo_change_b == -16
    assert record.winner_id == "alice"
    assert record.player_a_name == "Alice"
    assert record.player_b_name == "Bob"
    assert record.created_at == T0
    assert application.player_a == LeaguePlayer(player_id="alice", name="Alice", rating=1016, wins=1)
    assert application.player_b == LeaguePlayer(player_id="bob", name="Bob", rating=984, losses=1)
    assert application.state.get_player("alice") == application.player_a
    assert application.state.matches == (record,)


def test_rematch_then_retract_restores_previous_standing() -> None:
    calculator = LeagueEloCalculator()
    first = calculator.apply_match_result(_fresh_league(), _result("alice", "bob", 3, 1), match_id="m1")
    second = calculator.apply_match_result(first.state, _result("alice", "bob", 3, 0), match_id="m2")

    assert second.match_record.elo_change_a == 15
    assert second.match_record.elo_change_b == -15
    assert second.player_a.rating == 1031
    assert second.player_b.rating == 969

    reversal = calculator.revert_match_result(second.state, second.match_record)
    alice = reversal.state.get_player("alice")
    bob = reversal.state.get_player("bob")
    assert (alice.rating, alice.wins, alice.losses) == (1016, 1, 0)
    assert (bob.rating, bob.wins, bob.losses) == (984, 0, 1)
    assert reversal.state == first.state


def test_player_b_can_be_the_winner() -> None:
    calculator = LeagueEloCalculator()
    application = calculator.apply_match_result(
        _fresh_league(),
        _result("alice", "bob", 1, 3),
        match_id="m1",
    )
    assert application.match_record.winner_id == "bob"
    assert application.player_a.losses == 1
    assert application.player_a.rating == 984
    assert application.player_b.wins == 1
    assert application.player_b.rating == 1016


def test_apply_leaves_input_snapshot_untouched() -> None:
    state = _fresh_league()
    before = replace(state)
    LeagueEloCalculator().apply_match_result(state, _result("alice", "bob", 3, 1))
    assert state == before
    assert state.matches == ()


def test_apply_keeps_player_order_and_other_players() -> None:
    state = _fresh_league()
    application = LeagueEloCalculator().apply_match_result(state, _result("carol", "alice", 3, 2))
    assert [player.player_id for player in application.state.players] == ["alice", "bob", "carol", "dave"]
    assert application.state.get_player("bob") == state.get_player("bob")
    assert application.state.get_player("dave") == state.get_player("dave")


def test_mixed_k_bands_produce_asymmetric_deltas() -> None:
    state = _league(
        LeaguePlayer(player_id="veteran", name="Veteran", wins=20, losses=10),
        LeaguePlayer(player_id="rookie", name="Rookie"),
    )
    application = LeagueEloCalculator().apply_match_result(state, _result("veteran", "rookie", 3, 0))
    assert application.match_record.elo_change_a == 8
    assert application.match_record.elo_change_b == -16

    reversal = LeagueEloCalculator().revert_match_result(application.state, application.match_record.match_id)
    assert reversal.state == state


def test_generated_match_ids_are_unique() -> None:
    calculator = LeagueEloCalculator()
    first = calculator.apply_match_result(_fresh_league(), _result("alice", "bob", 3, 1))
    second = calculator.apply_match_result(first.state, _result("alice", "bob", 3, 1))
    assert first.match_record.match_id != second.match_record.match_id


def test_duplicate_match_id_is_rejected() -> None:
    calculator = LeagueEloCalculator()
    first = calculator.apply_match_result(_fresh_league(), _result("alice", "bob", 3, 1), match_id="m1")
    with pytest.raises(InvalidResult, match="already recorded"):
        calculator.apply_match_result(first.state, _result("carol", "dave", 3, 1), match_id="m1")


def test_unknown_participant_is_rejected() -> None:
    with pytest.raises(UnknownPlayer, match="zed"):
        LeagueEloCalculator().apply_match_result(_fresh_league(), _result("alice", "zed", 3, 1))


def test_inactive_participant_is_rejected() -> None:
    state = _fresh_league().replace_players(
        LeaguePlayer(player_id="bob", name="Bob", status=PlayerStatus.INACTIVE)
    )
    with pytest.raises(UnknownPlayer, match="inactive"):
        LeagueEloCalculator().apply_match_result(state, _result("alice", "bob", 3, 1))


def test_inconsistent_result_is_rejected_before_lookup() -> None:
    tied = MatchResult(
        player_a_id="alice",
        player_b_id="zed",
        player_a_score=2,
        player_b_score=2,
        winner_id="alice",
    )
    with pytest.raises(InvalidResult, match="tied"):
        LeagueEloCalculator().apply_match_result(_fresh_league(), tied)


def test_round_trip_survives_intervening_matches() -> None:
    calculator = LeagueEloCalculator()
    start = _fresh_league()

    target = calculator.apply_match_result(start, _result("alice", "bob", 3, 1), match_id="target")
    state = target.state
    intervening = [
        _result("carol", "dave", 3, 2),
        _result("alice", "carol", 0, 3),
        _result("bob", "dave", 3, 0),
        _result("alice", "bob", 3, 2),
        _result("dave", "alice", 3, 1),
    ]
    for index, result in enumerate(intervening):
        state = calculator.apply_match_result(
            state,
            result,
            match_id=f"m{index}",
            created_at=T0 + timedelta(minutes=index),
        ).state

    alice_before = state.get_player("alice")
    bob_before = state.get_player("bob")
    state = calculator.revert_match_result(state, "target").state

    alice_after = state.get_player("alice")
    bob_after = state.get_player("bob")
    assert alice_after.rating == alice_before.rating - target.match_record.elo_change_a
    assert alice_after.wins == alice_before.wins - 1
    assert alice_after.losses == alice_before.losses
    assert bob_after.rating == bob_before.rating - target.match_record.elo_change_b
    assert bob_after.losses == bob_before.losses - 1
    assert not state.has_match("target")

    for index in (2, 0, 4, 1, 3):
        state = calculator.revert_match_result(state, f"m{index}").state

    assert state == start


def test_revert_unknown_match_raises() -> None:
    with pytest.raises(UnknownMatch, match="missing"):
        LeagueEloCalculator().revert_match_result(_fresh_league(), "missing")


def test_revert_with_departed_player_raises() -> None:
    calculator = LeagueEloCalculator()
    application = calculator.apply_match_result(_fresh_league(), _result("alice", "bob", 3, 1), match_id="m1")
    without_bob = replace(
        application.state,
        players=tuple(player for player in application.state.players if player.player_id != "bob"),
    )
    with pytest.raises(UnknownPlayer, match="bob"):
        calculator.revert_match_result(without_bob, "m1")


def test_revert_works_for_inactive_participant() -> None:
    calculator = LeagueEloCalculator()
    application = calculator.apply_match_result(_fresh_league(), _result("alice", "bob", 3, 1), match_id="m1")
    bob = application.state.get_player("bob")
    state = application.state.replace_players(replace(bob, status=PlayerStatus.INACTIVE))

    reversal = calculator.revert_match_result(state, "m1")
    assert reversal.player_b.rating == 1000
    assert reversal.player_b.losses == 0
    assert reversal.player_b.status == PlayerStatus.INACTIVE


def test_revert_refuses_to_drive_counters_negative() -> None:
    calculator = LeagueEloCalculator()
    application = calculator.apply_match_result(_fresh_league(), _result("alice", "bob", 3, 1), match_id="m1")
    corrupted = application.state.replace_players(replace(application.player_a, wins=0))
    with pytest.raises(InvalidResult, match="no wins"):
        calculator.revert_match_result(corrupted, "m1")
