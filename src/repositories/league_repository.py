"""Persistence helpers for league snapshots using SQLAlchemy."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import delete, func, select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from domain.common import LeaguePlayer, LeagueState, MatchRecord, PlayerStatus
from domain.errors import UnknownLeague
from models import Base, League, LeagueMatchRow, LeaguePlayerRow


def ensure_league_schema(engine: Engine) -> None:
    """Create league tables and their indexes if they do not exist."""
    with engine.begin() as connection:
        Base.metadata.create_all(bind=connection, checkfirst=True)


def create_league(
    session: Session,
    *,
    league_id: str,
    name: str,
    description: str | None = None,
    created_at: datetime | None = None,
) -> League:
    """Insert one empty league."""
    if session.get(League, league_id) is not None:
        raise ValueError(f"league_id={league_id} already exists")

    league = League(
        id=league_id,
        name=name,
        description=description,
        created_at=created_at or datetime.now(UTC).replace(tzinfo=None),
    )
    session.add(league)
    session.flush()
    return league


def get_league(session: Session, league_id: str, *, for_update: bool = False) -> League:
    """Fetch one league row, optionally locking it for the rest of the transaction."""
    statement = select(League).where(League.id == league_id)
    if for_update:
        statement = statement.with_for_update()
    league = session.execute(statement).scalar_one_or_none()
    if league is None:
        raise UnknownLeague(f"league_id={league_id} not found")
    return league


def load_league_state(session: Session, league_id: str, *, for_update: bool = False) -> LeagueState:
    """Read the player pool and match list of one league into a snapshot.

    With for_update=True the league row is locked until commit/rollback, which
    serializes concurrent record/retract calls against the same league.
    """
    get_league(session, league_id, for_update=for_update)

    player_rows = session.execute(
        select(LeaguePlayerRow)
        .where(LeaguePlayerRow.league_id == league_id)
        .order_by(LeaguePlayerRow.position, LeaguePlayerRow.id)
    ).scalars()
    match_rows = session.execute(
        select(LeagueMatchRow)
        .where(LeagueMatchRow.league_id == league_id)
        .order_by(LeagueMatchRow.sequence)
    ).scalars()

    return LeagueState(
        league_id=league_id,
        players=tuple(_row_to_player(row) for row in player_rows),
        matches=tuple(_row_to_match(row) for row in match_rows),
    )


def sync_league_state(session: Session, state: LeagueState) -> None:
    """Write a snapshot back so the stored league matches it exactly."""
    player_rows = {
        row.player_id: row
        for row in session.execute(
            select(LeaguePlayerRow).where(LeaguePlayerRow.league_id == state.league_id)
        ).scalars()
    }
    for position, player in enumerate(state.players):
        row = player_rows.pop(player.player_id, None)
        if row is None:
            row = LeaguePlayerRow(league_id=state.league_id, player_id=player.player_id)
            session.add(row)
        row.position = position
        row.name = player.name
        row.rating = player.rating
        row.wins = player.wins
        row.losses = player.losses
        row.status = PlayerStatus(player.status).value
        row.joined_at = player.joined_at
    for stale_row in player_rows.values():
        session.delete(stale_row)

    match_rows = {
        row.id: row
        for row in session.execute(
            select(LeagueMatchRow).where(LeagueMatchRow.league_id == state.league_id)
        ).scalars()
    }
    wanted_ids = {match.match_id for match in state.matches}
    removed_ids = [match_id for match_id in match_rows if match_id not in wanted_ids]
    if removed_ids:
        session.execute(delete(LeagueMatchRow).where(LeagueMatchRow.id.in_(removed_ids)))

    next_sequence = session.scalar(
        select(func.max(LeagueMatchRow.sequence)).where(LeagueMatchRow.league_id == state.league_id)
    )
    next_sequence = 0 if next_sequence is None else int(next_sequence) + 1
    for match in state.matches:
        row = match_rows.get(match.match_id)
        if row is None:
            session.add(_match_to_row(match, sequence=next_sequence))
            next_sequence += 1
            continue
        # Names are denormalized and follow player renames.
        row.player_a_name = match.player_a_name
        row.player_b_name = match.player_b_name

    session.flush()


def count_league_matches(session: Session, league_id: str) -> int:
    """Count recorded matches in one league."""
    result = session.scalar(
        select(func.count()).select_from(LeagueMatchRow).where(LeagueMatchRow.league_id == league_id)
    )
    return int(result or 0)


def _row_to_player(row: LeaguePlayerRow) -> LeaguePlayer:
    return LeaguePlayer(
        player_id=row.player_id,
        name=row.name,
        rating=int(row.rating),
        wins=int(row.wins),
        losses=int(row.losses),
        status=PlayerStatus(row.status),
        joined_at=row.joined_at,
    )


def _row_to_match(row: LeagueMatchRow) -> MatchRecord:
    return MatchRecord(
        match_id=row.id,
        league_id=row.league_id,
        player_a_id=row.player_a_id,
        player_b_id=row.player_b_id,
        player_a_name=row.player_a_name,
        player_b_name=row.player_b_name,
        player_a_score=int(row.player_a_score),
        player_b_score=int(row.player_b_score),
        winner_id=row.winner_id,
        elo_change_a=int(row.elo_change_a),
        elo_change_b=int(row.elo_change_b),
        created_at=row.created_at,
    )


def _match_to_row(match: MatchRecord, *, sequence: int) -> LeagueMatchRow:
    return LeagueMatchRow(
        id=match.match_id,
        league_id=match.league_id,
        player_a_id=match.player_a_id,
        player_b_id=match.player_b_id,
        player_a_name=match.player_a_name,
        player_b_name=match.player_b_name,
        player_a_score=match.player_a_score,
        player_b_score=match.player_b_score,
        winner_id=match.winner_id,
        elo_change_a=match.elo_change_a,
        elo_change_b=match.elo_change_b,
        sequence=sequence,
        created_at=match.created_at,
    )


__all__ = [
    "count_league_matches",
    "create_league",
    "ensure_league_schema",
    "get_league",
    "load_league_state",
    "sync_league_state",
]
