"""Transactional record/retract/membership flows over the league store."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime, timedelta

from sqlalchemy.orm import Session, sessionmaker

from db import transaction
from domain.common import LeagueState, MatchApplication, MatchResult, MatchReversal
from domain.elo.calculator import DEFAULT_PARAMETERS, EloParameters, LeagueEloCalculator
from domain.membership import join_league, leave_league, rename_player
from domain.retraction import RETRACTION_WINDOW, check_retraction_eligibility
from domain.validation import validate_match_result
from repositories.league_repository import load_league_state, sync_league_state


def record_match(
    *,
    session_factory: sessionmaker[Session],
    league_id: str,
    result: MatchResult,
    calculator: LeagueEloCalculator | None = None,
    match_id: str | None = None,
    created_at: datetime | None = None,
    echo: Callable[[str], None] | None = None,
) -> MatchApplication:
    """Validate, rate and persist one match under the league's row lock."""
    validate_match_result(result)
    calculator = calculator or LeagueEloCalculator()

    with transaction(session_factory) as session:
        state = load_league_state(session, league_id, for_update=True)
        application = calculator.apply_match_result(
            state,
            result,
            match_id=match_id,
            created_at=created_at,
        )
        sync_league_state(session, application.state)

    record = application.match_record
    if echo is not None:
        echo(
            "recorded "
            f"league={league_id} "
            f"match_id={record.match_id} "
            f"winner={record.winner_id} "
            f"score={record.player_a_score}-{record.player_b_score} "
            f"{record.player_a_id}={application.player_a.rating}({record.elo_change_a:+d}) "
            f"{record.player_b_id}={application.player_b.rating}({record.elo_change_b:+d})"
        )
    return application


def retract_match(
    *,
    session_factory: sessionmaker[Session],
    league_id: str,
    match_id: str,
    requester_id: str,
    calculator: LeagueEloCalculator | None = None,
    now: datetime | None = None,
    window: timedelta = RETRACTION_WINDOW,
    echo: Callable[[str], None] | None = None,
) -> MatchReversal:
    """Check eligibility, then revert and delete one match under the league's row lock."""
    calculator = calculator or LeagueEloCalculator()

    with transaction(session_factory) as session:
        state = load_league_state(session, league_id, for_update=True)
        check_retraction_eligibility(
            state.get_match(match_id),
            requester_id,
            now=now,
            window=window,
        )
        reversal = calculator.revert_match_result(state, match_id)
        sync_league_state(session, reversal.state)

    if echo is not None:
        echo(
            "retracted "
            f"league={league_id} "
            f"match_id={match_id} "
            f"requester={requester_id} "
            f"{reversal.player_a.player_id}={reversal.player_a.rating} "
            f"{reversal.player_b.player_id}={reversal.player_b.rating}"
        )
    return reversal


def add_member(
    *,
    session_factory: sessionmaker[Session],
    league_id: str,
    player_id: str,
    name: str,
    params: EloParameters = DEFAULT_PARAMETERS,
    echo: Callable[[str], None] | None = None,
) -> LeagueState:
    """Join (or rejoin) a league."""
    with transaction(session_factory) as session:
        state = load_league_state(session, league_id, for_update=True)
        state = join_league(state, player_id, name, params=params)
        sync_league_state(session, state)

    if echo is not None:
        player = state.get_player(player_id)
        echo(f"joined league={league_id} player={player_id} rating={player.rating}")
    return state


def remove_member(
    *,
    session_factory: sessionmaker[Session],
    league_id: str,
    player_id: str,
    echo: Callable[[str], None] | None = None,
) -> LeagueState:
    """Mark a player inactive in a league."""
    with transaction(session_factory) as session:
        state = load_league_state(session, league_id, for_update=True)
        state = leave_league(state, player_id)
        sync_league_state(session, state)

    if echo is not None:
        echo(f"left league={league_id} player={player_id}")
    return state


def rename_member(
    *,
    session_factory: sessionmaker[Session],
    league_id: str,
    player_id: str,
    name: str,
    echo: Callable[[str], None] | None = None,
) -> LeagueState:
    """Rename a player, rewriting the names stored on their past matches."""
    with transaction(session_factory) as session:
        state = load_league_state(session, league_id, for_update=True)
        state = rename_player(state, player_id, name)
        sync_league_state(session, state)

    if echo is not None:
        echo(f"renamed league={league_id} player={player_id} name={name}")
    return state


__all__ = ["add_member", "record_match", "remove_member", "rename_member", "retract_match"]
