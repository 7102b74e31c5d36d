"""Database repository helpers."""

from repositories.league_repository import (
    count_league_matches,
    create_league,
    ensure_league_schema,
    get_league,
    load_league_state,
    sync_league_state,
)

__all__ = [
    "count_league_matches",
    "create_league",
    "ensure_league_schema",
    "get_league",
    "load_league_state",
    "sync_league_state",
]
