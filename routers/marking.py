from __future__ import annotations

from fastapi import APIRouter, Request

from schemas.marking import (
    FormatRequest,
    FormatResponse,
    SimplifyRequest,
    SimplifyResponse,
    ValidateRequest,
    ValidationResult,
)
from validator import UNDEFINED, AnswerValidator, format_display, simplify_fraction

router = APIRouter(tags=["marking"])


def _validator(request: Request) -> AnswerValidator:
    # one stateless validator is owned by the app; fall back to a fresh one outside it
    return getattr(request.app.state, "validator", None) or AnswerValidator()


@router.post("/validate", response_model=ValidationResult)
def validate(req: ValidateRequest, request: Request):
    return _validator(request).validate(req.answer, req.expected)


@router.post("/simplify", response_model=SimplifyResponse)
def simplify(req: SimplifyRequest):
    value = simplify_fraction(req.numerator, req.denominator)
    return {"ok": value != UNDEFINED, "value": value}


@router.post("/format", response_model=FormatResponse)
def format_value(req: FormatRequest):
    return {"ok": True, "value": format_display(req.value)}
