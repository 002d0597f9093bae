# proxle/models.py
from __future__ import annotations
from datetime import datetime
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy import JSON, Boolean, DateTime, Float, Integer, String
from sqlalchemy.dialects.postgresql import JSONB
from .db_pg import Base

JSONType = JSON().with_variant(JSONB(), "postgresql")

# Private per-player document. Only the progression/profile paths write it.
class PlayerRow(Base):
    __tablename__ = "players"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    email: Mapped[str | None] = mapped_column(String(320), nullable=True)
    display_name: Mapped[str | None] = mapped_column(String(128), nullable=True)
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # progress
    total_games: Mapped[int] = mapped_column(Integer, default=0)
    total_wins: Mapped[int] = mapped_column(Integer, default=0)
    total_losses: Mapped[int] = mapped_column(Integer, default=0)
    win_rate: Mapped[int] = mapped_column(Integer, default=0)
    current_streak: Mapped[int] = mapped_column(Integer, default=0)
    max_streak: Mapped[int] = mapped_column(Integer, default=0)
    last_played_date: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    guess_distribution: Mapped[dict[str, int]] = mapped_column(JSONType, default=dict)

    # leaderboard preferences
    display_on_leaderboard: Mapped[bool] = mapped_column(Boolean, default=False)
    leaderboard_name: Mapped[str | None] = mapped_column(String(64), nullable=True)
    leaderboard_name_approval_status: Mapped[str] = mapped_column(String(16), default="approved")
    show_donation_amount: Mapped[bool] = mapped_column(Boolean, default=True)
    show_streak: Mapped[bool] = mapped_column(Boolean, default=True)
    message: Mapped[str | None] = mapped_column(String(280), nullable=True)
    message_approval_status: Mapped[str] = mapped_column(String(16), default="pending")

    # supporter totals (payment webhook owns these)
    donations_total: Mapped[float] = mapped_column(Float, default=0)
    donations_count: Mapped[int] = mapped_column(Integer, default=0)

    # compare-and-swap counter, bumped on every write
    version: Mapped[int] = mapped_column(Integer, default=1)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True))
    last_active_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

# Public, denormalized projection of PlayerRow. Written only by proxle.leaderboard.
class LeaderboardRow(Base):
    __tablename__ = "leaderboard"

    player_id: Mapped[str] = mapped_column(String(128), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(128))
    photo_url: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    amount: Mapped[float] = mapped_column(Float, default=0)
    current_streak: Mapped[int] = mapped_column(Integer, default=0)
    show_donation_amount: Mapped[bool] = mapped_column(Boolean, default=True)
    show_streak: Mapped[bool] = mapped_column(Boolean, default=True)
    message: Mapped[str | None] = mapped_column(String(280), nullable=True)
    approval_status: Mapped[str] = mapped_column(String(16), default="pending")
    # source document's updated_at; newer source state wins
    updated_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)
