"""League Elo logic."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import UTC, datetime
from math import floor
from uuid import uuid4

from domain.common import (
    LeaguePlayer,
    LeagueState,
    MatchApplication,
    MatchRecord,
    MatchResult,
    MatchReversal,
    Outcome,
)
from domain.errors import InvalidResult, RoundingInvariantViolation
from domain.validation import validate_match_result


@dataclass(frozen=True)
class EloParameters:
    initial_rating: int = 1000
    provisional_k_factor: int = 32
    established_k_factor: int = 16
    provisional_match_threshold: int = 30
    scale_factor: float = 400.0


DEFAULT_PARAMETERS = EloParameters()


def calculate_expected_score(rating: float, opponent_rating: float, scale_factor: float) -> float:
    """Compute the Elo expected score for one side."""
    return 1.0 / (1.0 + 10.0 ** ((opponent_rating - rating) / scale_factor))


def k_factor_for(matches_played: int, params: EloParameters = DEFAULT_PARAMETERS) -> int:
    """Provisional players (fewer than the threshold of prior matches) move faster."""
    if matches_played < params.provisional_match_threshold:
        return params.provisional_k_factor
    return params.established_k_factor


def round_half_away_from_zero(value: float) -> int:
    magnitude = floor(abs(value))
    # Compare the fraction directly; abs(value) + 0.5 can round up in floating point.
    if abs(value) - magnitude >= 0.5:
        magnitude += 1
    return magnitude if value >= 0.0 else -magnitude


def compute_rating_delta(
    self_rating: int,
    opponent_rating: int,
    self_matches_played: int,
    outcome: Outcome,
    params: EloParameters = DEFAULT_PARAMETERS,
) -> int:
    """Return the signed integer rating change for one side of a decisive match.

    Winners always gain at least one point and losers always drop at least one,
    even when the rounded Elo swing would be zero.
    """
    if self_matches_played < 0:
        raise InvalidResult(f"self_matches_played must be >= 0, got {self_matches_played}")

    outcome = Outcome(outcome)
    if outcome is Outcome.WIN:
        # 1 - expected, evaluated from the opponent's side so both
        # perspectives of an equal-K match round to exact negatives.
        swing = calculate_expected_score(opponent_rating, self_rating, params.scale_factor)
    else:
        swing = -calculate_expected_score(self_rating, opponent_rating, params.scale_factor)

    delta = round_half_away_from_zero(k_factor_for(self_matches_played, params) * swing)
    if delta == 0:
        delta = 1 if outcome is Outcome.WIN else -1

    if (outcome is Outcome.WIN and delta < 1) or (outcome is Outcome.LOSS and delta > -1):
        raise RoundingInvariantViolation(
            f"outcome={outcome.value} produced delta={delta} "
            f"(rating={self_rating}, opponent_rating={opponent_rating})"
        )
    return delta


class LeagueEloCalculator:
    """Stateless per-match Elo engine over explicit league snapshots."""

    def __init__(self, params: EloParameters | None = None) -> None:
        self.params = params or DEFAULT_PARAMETERS

    def rating_delta(
        self,
        self_rating: int,
        opponent_rating: int,
        self_matches_played: int,
        outcome: Outcome,
    ) -> int:
        return compute_rating_delta(
            self_rating,
            opponent_rating,
            self_matches_played,
            outcome,
            self.params,
        )

    def apply_match_result(
        self,
        state: LeagueState,
        result: MatchResult,
        *,
        match_id: str | None = None,
        created_at: datetime | None = None,
    ) -> MatchApplication:
        """Apply one validated result and return the new snapshot plus the frozen match record.

        Both sides are computed independently with their own prior match counts,
        so the two deltas are only exact negatives when both players share a K band.
        The input snapshot is left untouched.
        """
        validate_match_result(result)

        player_a = state.get_active_player(result.player_a_id)
        player_b = state.get_active_player(result.player_b_id)

        match_id = match_id or uuid4().hex
        if state.has_match(match_id):
            raise InvalidResult(
                f"match_id={match_id} is already recorded in league_id={state.league_id}"
            )

        outcome_a = result.outcome_for(player_a.player_id)
        outcome_b = result.outcome_for(player_b.player_id)
        delta_a = self.rating_delta(player_a.rating, player_b.rating, player_a.matches_played, outcome_a)
        delta_b = self.rating_delta(player_b.rating, player_a.rating, player_b.matches_played, outcome_b)

        updated_a = _apply_outcome(player_a, delta_a, outcome_a)
        updated_b = _apply_outcome(player_b, delta_b, outcome_b)

        record = MatchRecord(
            match_id=match_id,
            league_id=state.league_id,
            player_a_id=player_a.player_id,
            player_b_id=player_b.player_id,
            player_a_name=player_a.name,
            player_b_name=player_b.name,
            player_a_score=result.player_a_score,
            player_b_score=result.player_b_score,
            winner_id=result.winner_id,
            elo_change_a=delta_a,
            elo_change_b=delta_b,
            created_at=created_at or datetime.now(UTC).replace(tzinfo=None),
        )

        next_state = replace(
            state.replace_players(updated_a, updated_b),
            matches=state.matches + (record,),
        )
        return MatchApplication(
            state=next_state,
            player_a=updated_a,
            player_b=updated_b,
            match_record=record,
        )

    def revert_match_result(self, state: LeagueState, match: MatchRecord | str) -> MatchReversal:
        """Undo a recorded match using the deltas frozen on its record.

        Ratings are never recomputed here: intervening matches have moved both
        players since, and only the stored deltas invert the original update.
        """
        match_id = match.match_id if isinstance(match, MatchRecord) else match
        record = state.get_match(match_id)

        player_a = state.get_player(record.player_a_id)
        player_b = state.get_player(record.player_b_id)

        reverted_a = _revert_outcome(player_a, record, record.elo_change_a)
        reverted_b = _revert_outcome(player_b, record, record.elo_change_b)

        next_state = replace(
            state.replace_players(reverted_a, reverted_b),
            matches=tuple(existing for existing in state.matches if existing.match_id != match_id),
        )
        return MatchReversal(
            state=next_state,
            player_a=reverted_a,
            player_b=reverted_b,
            match_record=record,
        )


def _apply_outcome(player: LeaguePlayer, delta: int, outcome: Outcome) -> LeaguePlayer:
    if outcome is Outcome.WIN:
        return replace(player, rating=player.rating + delta, wins=player.wins + 1)
    return replace(player, rating=player.rating + delta, losses=player.losses + 1)


def _revert_outcome(player: LeaguePlayer, record: MatchRecord, delta: int) -> LeaguePlayer:
    if player.player_id == record.winner_id:
        if player.wins < 1:
            raise InvalidResult(
                f"player_id={player.player_id} has no wins to revert for match_id={record.match_id}"
            )
        return replace(player, rating=player.rating - delta, wins=player.wins - 1)

    if player.losses < 1:
        raise InvalidResult(
            f"player_id={player.player_id} has no losses to revert for match_id={record.match_id}"
        )
    return replace(player, rating=player.rating - delta, losses=player.losses - 1)


__all__ = [
    "DEFAULT_PARAMETERS",
    "EloParameters",
    "LeagueEloCalculator",
    "calculate_expected_score",
    "compute_rating_delta",
    "k_factor_for",
    "round_half_away_from_zero",
]
