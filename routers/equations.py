from __future__ import annotations

from typing import List

from fastapi import APIRouter, Query

from generator import EquationGenerator
from schemas.equations import Equation

router = APIRouter(tags=["equations"])


@router.get("/equations", response_model=List[Equation])
def list_equations(
    grade: int = Query(..., description="School grade 2-5; others snap to the nearest"),
    level: int = Query(default=1, ge=1),
    count: int = Query(default=1, ge=1, le=50),
):
    # a throwaway generator per request; sessions keep their own
    gen = EquationGenerator(grade, level=level)
    return [gen.generate() for _ in range(count)]
