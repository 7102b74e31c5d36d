"""Boundary validation for reported match results."""

from __future__ import annotations

from domain.common import MatchResult
from domain.errors import InvalidResult


def validate_match_result(result: MatchResult) -> None:
    """Raise InvalidResult unless the result is a well-formed decisive outcome."""
    if not result.player_a_id or not result.player_b_id:
        raise InvalidResult("both player ids are required")
    if result.player_a_id == result.player_b_id:
        raise InvalidResult(f"player_id={result.player_a_id} cannot play against themselves")

    for label, score in (
        ("player_a_score", result.player_a_score),
        ("player_b_score", result.player_b_score),
    ):
        # bool is an int subclass; a True score is a caller bug.
        if isinstance(score, bool) or not isinstance(score, int):
            raise InvalidResult(f"{label} must be an integer, got {score!r}")
        if score < 0:
            raise InvalidResult(f"{label} must be >= 0, got {score}")

    if result.player_a_score == result.player_b_score:
        raise InvalidResult(
            f"scores cannot be tied ({result.player_a_score}-{result.player_b_score})"
        )

    if result.winner_id not in (result.player_a_id, result.player_b_id):
        raise InvalidResult(
            f"winner_id={result.winner_id} does not belong to match players "
            f"{result.player_a_id}/{result.player_b_id}"
        )

    if result.winner_id == result.player_a_id:
        winner_score, loser_score = result.player_a_score, result.player_b_score
    else:
        winner_score, loser_score = result.player_b_score, result.player_a_score
    if winner_score <= loser_score:
        raise InvalidResult(
            f"winner_id={result.winner_id} scored {winner_score}, "
            f"which is not higher than the opponent's {loser_score}"
        )


__all__ = ["validate_match_result"]
