# schemas/scores.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class HighScoreIn(BaseModel):
    player_name: str = Field(min_length=1, max_length=32)
    score: int = Field(ge=0)
    grade: int = Field(ge=2, le=5)
    level: int = Field(ge=1)
    correct_answers: int = Field(default=0, ge=0)
    wrong_answers: int = Field(default=0, ge=0)
    accuracy: float = Field(default=0.0, ge=0, le=100)
    session_duration: int = Field(default=0, ge=0)
    device_id: Optional[str] = Field(default=None, max_length=64)


class HighScoreOut(HighScoreIn):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: Optional[datetime] = None
