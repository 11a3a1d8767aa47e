from __future__ import annotations

from datetime import UTC, datetime

import sqlalchemy as sa
from sqlalchemy import DateTime, Float, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from db import Base


class HighScore(Base):
    """Leaderboard row. Only end-of-session scalars land here, never equations."""

    __tablename__ = "high_scores"
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(UTC), index=True
    )
    player_name: Mapped[str] = mapped_column(String(32))
    score: Mapped[int] = mapped_column(Integer, index=True)
    grade: Mapped[int] = mapped_column(Integer, index=True)
    level: Mapped[int] = mapped_column(Integer)
    correct_answers: Mapped[int] = mapped_column(Integer, default=0)
    wrong_answers: Mapped[int] = mapped_column(Integer, default=0)
    accuracy: Mapped[float] = mapped_column(Float, default=0.0)
    session_duration: Mapped[int] = mapped_column(sa.Integer, default=0)  # seconds
    device_id: Mapped[str] = mapped_column(String(64), nullable=True)
