# schemas/marking.py
from __future__ import annotations

from typing import Optional

from pydantic import BaseModel

# ---------- Validate ----------


class ValidateRequest(BaseModel):
    answer: str
    expected: str


class ValidationResult(BaseModel):
    correct: bool
    normalized_input: str
    normalized_answer: str
    # parsed values, None when a side could not be read as a number
    input_value: Optional[float] = None
    answer_value: Optional[float] = None


# ---------- Simplify / format ----------


class SimplifyRequest(BaseModel):
    numerator: int
    denominator: int


class SimplifyResponse(BaseModel):
    ok: bool
    value: str


class FormatRequest(BaseModel):
    value: float


class FormatResponse(BaseModel):
    ok: bool
    value: str
