"""league_matches table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class LeagueMatchRow(Base):
    """A recorded match with the rating changes applied at record time."""

    __tablename__ = "league_matches"
    __table_args__ = (
        CheckConstraint("player_a_id <> player_b_id", name="ck_league_matches_distinct_players"),
        CheckConstraint("player_a_score <> player_b_score", name="ck_league_matches_no_draw"),
        CheckConstraint(
            "player_a_score >= 0 AND player_b_score >= 0",
            name="ck_league_matches_scores",
        ),
        CheckConstraint(
            "winner_id = player_a_id OR winner_id = player_b_id",
            name="ck_league_matches_winner",
        ),
        Index("idx_league_matches_league_sequence", "league_id", "sequence"),
    )

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    league_id: Mapped[str] = mapped_column(ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False)
    player_a_id: Mapped[str] = mapped_column(String(64), nullable=False)
    player_b_id: Mapped[str] = mapped_column(String(64), nullable=False)
    player_a_name: Mapped[str] = mapped_column(String(128), nullable=False)
    player_b_name: Mapped[str] = mapped_column(String(128), nullable=False)
    player_a_score: Mapped[int] = mapped_column(Integer, nullable=False)
    player_b_score: Mapped[int] = mapped_column(Integer, nullable=False)
    winner_id: Mapped[str] = mapped_column(String(64), nullable=False)
    elo_change_a: Mapped[int] = mapped_column(Integer, nullable=False)
    elo_change_b: Mapped[int] = mapped_column(Integer, nullable=False)
    sequence: Mapped[int] = mapped_column(Integer, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=False), nullable=False)
