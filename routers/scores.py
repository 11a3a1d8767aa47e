from __future__ import annotations

from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.orm import Session

from db import get_db
from models import HighScore
from schemas.scores import HighScoreIn, HighScoreOut

router = APIRouter(prefix="/scores", tags=["scores"])


@router.post("", response_model=HighScoreOut)
def create_score(body: HighScoreIn, db: Session = Depends(get_db)):
    row = HighScore(**body.model_dump())
    db.add(row)
    db.commit()
    db.refresh(row)
    return HighScoreOut.model_validate(row)


@router.get("/leaderboard", response_model=List[HighScoreOut])
def leaderboard(
    grade: Optional[int] = None,
    limit: int = Query(default=10, ge=1, le=100),
    db: Session = Depends(get_db),
):
    q = db.query(HighScore)
    if grade is not None:
        q = q.filter(HighScore.grade == grade)
    rows = q.order_by(HighScore.score.desc(), HighScore.created_at.asc()).limit(limit).all()
    return [HighScoreOut.model_validate(r) for r in rows]


@router.get("/{score_id}", response_model=HighScoreOut)
def get_score(score_id: int, db: Session = Depends(get_db)):
    row = db.get(HighScore, score_id)
    if not row:
        raise HTTPException(status_code=404, detail="Score not found")
    return HighScoreOut.model_validate(row)
