"""league_players table model."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, Enum, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class LeaguePlayerRow(Base):
    """A player's standing in one league (one row per league member)."""

    __tablename__ = "league_players"
    __table_args__ = (
        UniqueConstraint("league_id", "player_id", name="uq_league_players_league_player"),
        CheckConstraint("wins >= 0", name="ck_league_players_wins"),
        CheckConstraint("losses >= 0", name="ck_league_players_losses"),
        Index("idx_league_players_league_rating", "league_id", "rating"),
    )

    id: Mapped[int] = mapped_column(primary_key=True, autoincrement=True)
    league_id: Mapped[str] = mapped_column(ForeignKey("leagues.id", ondelete="CASCADE"), nullable=False)
    player_id: Mapped[str] = mapped_column(String(64), nullable=False)
    position: Mapped[int] = mapped_column(Integer, nullable=False)
    name: Mapped[str] = mapped_column(String(128), nullable=False)
    rating: Mapped[int] = mapped_column(Integer, nullable=False)
    wins: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    losses: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    status: Mapped[str] = mapped_column(
        Enum(
            "active",
            "inactive",
            name="league_player_status",
            native_enum=False,
        ),
        nullable=False,
    )
    joined_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=False), nullable=True)
