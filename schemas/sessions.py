# schemas/sessions.py
from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, Field

from schemas.equations import Equation


class SessionStartRequest(BaseModel):
    grade: int


class ActiveEquation(BaseModel):
    id: str
    # only the display text leaves the server; answers stay with the session
    text: str
    operation: str
    difficulty: int


class SessionState(BaseModel):
    id: str
    grade: int
    level: int
    score: int
    lives: int
    correct: int
    wrong: int
    game_over: bool
    spawn_interval_ms: int
    fall_speed: float
    active: List[ActiveEquation] = []


class SpawnResponse(BaseModel):
    equation: ActiveEquation
    state: SessionState


class AnswerRequest(BaseModel):
    answer: str


class AnswerResponse(BaseModel):
    correct: bool
    equation_id: Optional[str] = None
    leveled_up: bool = False
    state: SessionState


class MissRequest(BaseModel):
    equation_id: str


class FinishRequest(BaseModel):
    player_name: str = Field(default="Player", min_length=1, max_length=32)
    device_id: Optional[str] = Field(default=None, max_length=64)


class SessionSummary(BaseModel):
    score: int
    grade: int
    level: int
    correct: int
    wrong: int
    accuracy: float
    duration_seconds: int
    game_over: bool


class FinishResponse(BaseModel):
    summary: SessionSummary
    score_id: Optional[int] = None


def active_view(eq_id: str, eq: Equation) -> ActiveEquation:
    return ActiveEquation(id=eq_id, text=eq.text, operation=eq.operation, difficulty=eq.difficulty)
