# schemas/equations.py
from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

Operation = Literal["add", "sub", "mul", "div", "frac-add", "frac-sub"]


class Equation(BaseModel):
    """One generated problem. ``numeric_answer`` is for verification only, never displayed."""

    model_config = ConfigDict(frozen=True)

    text: str
    answer: str
    numeric_answer: float
    operation: Operation
    difficulty: int
