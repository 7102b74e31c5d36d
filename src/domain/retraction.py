"""Eligibility rule for retracting a recorded match."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta

from domain.common import MatchRecord
from domain.errors import RetractionNotAllowed

RETRACTION_WINDOW = timedelta(hours=12)


def check_retraction_eligibility(
    match: MatchRecord,
    requester_id: str,
    *,
    now: datetime | None = None,
    window: timedelta = RETRACTION_WINDOW,
) -> None:
    """Raise RetractionNotAllowed unless a participant asks within the window."""
    if not match.involves(requester_id):
        raise RetractionNotAllowed(
            f"player_id={requester_id} did not take part in match_id={match.match_id}"
        )

    now = now or datetime.now(UTC).replace(tzinfo=None)
    age = now - match.created_at
    if age > window:
        raise RetractionNotAllowed(
            f"match_id={match.match_id} was recorded {age} ago; "
            f"retraction window is {window}"
        )


def is_retraction_allowed(
    match: MatchRecord,
    requester_id: str,
    *,
    now: datetime | None = None,
    window: timedelta = RETRACTION_WINDOW,
) -> bool:
    try:
        check_retraction_eligibility(match, requester_id, now=now, window=window)
    except RetractionNotAllowed:
        return False
    return True


__all__ = ["RETRACTION_WINDOW", "check_retraction_eligibility", "is_retraction_allowed"]
