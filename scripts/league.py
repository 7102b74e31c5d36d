#!/usr/bin/env python3
"""League ladder commands: membership, match recording/retraction, standings."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import typer

ROOT_DIR = Path(__file__).resolve().parents[1]
SRC_DIR = ROOT_DIR / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))

from db import DEFAULT_DB_URL, create_db_engine, create_session_factory, transaction
from domain.common import MatchResult
from domain.elo.calculator import LeagueEloCalculator
from domain.elo.config import DEFAULT_CONFIG_DIR, EloSystemConfig, load_elo_system_configs
from domain.errors import LeagueError
from domain.pipeline import add_member, record_match, remove_member, rename_member, retract_match
from domain.stats import find_record_inconsistencies, last_activity, leaderboard, player_stats
from repositories.league_repository import (
    count_league_matches,
    create_league,
    ensure_league_schema,
    get_league,
    load_league_state,
)

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="League ladder commands.",
)

DbUrlOption = Annotated[
    str,
    typer.Option(
        "--db-url",
        help="Database URL. Defaults to the local league_ladder postgres instance.",
    ),
]
ConfigDirOption = Annotated[
    Path,
    typer.Option("--config-dir", help="Directory holding Elo system TOML files."),
]
ConfigNameOption = Annotated[
    str,
    typer.Option("--config-name", help="Elo system config filename (for example: default.toml)."),
]


def _load_config(config_dir: Path, config_name: str) -> EloSystemConfig:
    configs = [
        config for config in load_elo_system_configs(config_dir) if config.file_path.name == config_name
    ]
    if not configs:
        raise typer.BadParameter(
            f"No config named '{config_name}' found in {config_dir}",
            param_hint="--config-name",
        )
    return configs[0]


def _session_factory(db_url: str):
    return create_session_factory(create_db_engine(db_url))


def _fail(exc: LeagueError) -> typer.Exit:
    typer.echo(f"error: {exc}", err=True)
    return typer.Exit(code=1)


@app.command("init-db")
def init_db(db_url: DbUrlOption = DEFAULT_DB_URL) -> None:
    """Create league tables if they do not exist."""
    ensure_league_schema(create_db_engine(db_url))
    typer.echo("schema ready")


@app.command("create-league")
def create_league_command(
    league_id: Annotated[str, typer.Argument(help="Opaque league id.")],
    name: Annotated[str, typer.Option("--name", help="Display name.")],
    description: Annotated[str | None, typer.Option("--description")] = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Create an empty league."""
    try:
        with transaction(_session_factory(db_url)) as session:
            create_league(session, league_id=league_id, name=name, description=description)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="LEAGUE_ID") from exc
    typer.echo(f"created league={league_id} name={name}")


@app.command("join")
def join_command(
    league_id: Annotated[str, typer.Argument()],
    player_id: Annotated[str, typer.Argument()],
    name: Annotated[str, typer.Option("--name", help="Player display name.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_CONFIG_DIR,
    config_name: ConfigNameOption = "default.toml",
) -> None:
    """Join a league, or rejoin with the previous rating and record."""
    config = _load_config(config_dir, config_name)
    try:
        add_member(
            session_factory=_session_factory(db_url),
            league_id=league_id,
            player_id=player_id,
            name=name,
            params=config.parameters,
            echo=typer.echo,
        )
    except LeagueError as exc:
        raise _fail(exc) from exc


@app.command("leave")
def leave_command(
    league_id: Annotated[str, typer.Argument()],
    player_id: Annotated[str, typer.Argument()],
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Mark a player inactive in a league."""
    try:
        remove_member(
            session_factory=_session_factory(db_url),
            league_id=league_id,
            player_id=player_id,
            echo=typer.echo,
        )
    except LeagueError as exc:
        raise _fail(exc) from exc


@app.command("rename")
def rename_command(
    league_id: Annotated[str, typer.Argument()],
    player_id: Annotated[str, typer.Argument()],
    name: Annotated[str, typer.Option("--name", help="New display name.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Rename a player, including the names shown on their past matches."""
    if not name.strip():
        raise typer.BadParameter("--name must not be empty", param_hint="--name")

    try:
        rename_member(
            session_factory=_session_factory(db_url),
            league_id=league_id,
            player_id=player_id,
            name=name,
            echo=typer.echo,
        )
    except LeagueError as exc:
        raise _fail(exc) from exc


@app.command("record")
def record_command(
    league_id: Annotated[str, typer.Argument()],
    player_a: Annotated[str, typer.Option("--player-a")],
    player_b: Annotated[str, typer.Option("--player-b")],
    score_a: Annotated[int, typer.Option("--score-a", min=0)],
    score_b: Annotated[int, typer.Option("--score-b", min=0)],
    winner: Annotated[str | None, typer.Option("--winner", help="Defaults to the higher score.")] = None,
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_CONFIG_DIR,
    config_name: ConfigNameOption = "default.toml",
) -> None:
    """Record one decisive match result."""
    if winner is None:
        winner = player_a if score_a > score_b else player_b

    config = _load_config(config_dir, config_name)
    try:
        record_match(
            session_factory=_session_factory(db_url),
            league_id=league_id,
            result=MatchResult(
                player_a_id=player_a,
                player_b_id=player_b,
                player_a_score=score_a,
                player_b_score=score_b,
                winner_id=winner,
            ),
            calculator=LeagueEloCalculator(config.parameters),
            echo=typer.echo,
        )
    except LeagueError as exc:
        raise _fail(exc) from exc


@app.command("retract")
def retract_command(
    league_id: Annotated[str, typer.Argument()],
    match_id: Annotated[str, typer.Argument()],
    requester: Annotated[str, typer.Option("--requester", help="Player asking for the retraction.")],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_CONFIG_DIR,
    config_name: ConfigNameOption = "default.toml",
) -> None:
    """Retract a recent match and revert its rating changes."""
    config = _load_config(config_dir, config_name)
    try:
        retract_match(
            session_factory=_session_factory(db_url),
            league_id=league_id,
            match_id=match_id,
            requester_id=requester,
            calculator=LeagueEloCalculator(config.parameters),
            window=config.retraction_window,
            echo=typer.echo,
        )
    except LeagueError as exc:
        raise _fail(exc) from exc


@app.command("leaderboard")
def leaderboard_command(
    league_id: Annotated[str, typer.Argument()],
    top_n: Annotated[int, typer.Option("--top-n", help="Number of players to show.")] = 20,
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Print active players by rating."""
    if top_n <= 0:
        raise typer.BadParameter("--top-n must be greater than 0")

    try:
        with transaction(_session_factory(db_url)) as session:
            state = load_league_state(session, league_id)
    except LeagueError as exc:
        raise _fail(exc) from exc

    entries = leaderboard(state)[:top_n]
    if not entries:
        typer.echo(f"No active players in league '{league_id}'.")
        return

    for entry in entries:
        player = entry.player
        typer.echo(
            f"{entry.rank:2d}. {player.name:<20} "
            f"rating={player.rating:5d} wins={player.wins:3d} losses={player.losses:3d}"
        )


@app.command("player-stats")
def player_stats_command(
    league_id: Annotated[str, typer.Argument()],
    player_id: Annotated[str, typer.Argument()],
    db_url: DbUrlOption = DEFAULT_DB_URL,
    config_dir: ConfigDirOption = DEFAULT_CONFIG_DIR,
    config_name: ConfigNameOption = "default.toml",
) -> None:
    """Print rank, rating history and head-to-head records for one player."""
    config = _load_config(config_dir, config_name)
    try:
        with transaction(_session_factory(db_url)) as session:
            state = load_league_state(session, league_id)
        stats = player_stats(state, player_id, initial_rating=config.parameters.initial_rating)
    except LeagueError as exc:
        raise _fail(exc) from exc

    player = stats.player
    typer.echo(
        f"{player.name} rank={stats.rank} rating={player.rating} "
        f"wins={player.wins} losses={player.losses}"
    )
    typer.echo("history: " + " -> ".join(str(point.rating) for point in stats.rating_history))
    for record in stats.head_to_head:
        typer.echo(
            f"  vs {record.opponent_name:<20} wins={record.wins:3d} losses={record.losses:3d}"
        )


@app.command("league-info")
def league_info_command(
    league_id: Annotated[str, typer.Argument()],
    db_url: DbUrlOption = DEFAULT_DB_URL,
) -> None:
    """Print membership, activity and record consistency for one league."""
    try:
        with transaction(_session_factory(db_url)) as session:
            league = get_league(session, league_id)
            state = load_league_state(session, league_id)
            match_count = count_league_matches(session, league_id)
    except LeagueError as exc:
        raise _fail(exc) from exc

    latest = last_activity(state, league.created_at)
    typer.echo(
        f"{league.name} league={league_id} "
        f"active_players={len(state.active_players())} "
        f"matches={match_count} "
        f"last_activity={latest:%Y-%m-%d %H:%M:%S}"
    )
    for player_id, (recorded, on_file) in sorted(find_record_inconsistencies(state).items()):
        typer.echo(f"  inconsistent player={player_id} recorded={recorded} on_file={on_file}")


if __name__ == "__main__":
    app()
