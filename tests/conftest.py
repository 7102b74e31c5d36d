"""Shared fixtures for store-backed tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from sqlalchemy.orm import Session, sessionmaker

from db import create_db_engine, create_session_factory, transaction
from repositories.league_repository import create_league, ensure_league_schema


@pytest.fixture
def db_url(tmp_path: Path) -> str:
    return f"sqlite+pysqlite:///{tmp_path / 'league.db'}"


@pytest.fixture
def session_factory(db_url: str) -> Iterator[sessionmaker[Session]]:
    engine = create_db_engine(db_url)
    ensure_league_schema(engine)
    factory = create_session_factory(engine)
    with transaction(factory) as session:
        create_league(session, league_id="club", name="Table Tennis Club")
    yield factory
    engine.dispose()
