from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, Request

from schemas.sessions import (
    AnswerRequest,
    AnswerResponse,
    FinishRequest,
    FinishResponse,
    MissRequest,
    SessionStartRequest,
    SessionState,
    SpawnResponse,
    active_view,
)
from session import GameSession, SessionOver, SessionStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _store(request: Request) -> SessionStore:
    return request.app.state.sessions


def _get_session(request: Request, session_id: str) -> GameSession:
    try:
        return _store(request).get(session_id)
    except KeyError:
        raise HTTPException(status_code=404, detail="Session not found")


def _state(s: GameSession) -> SessionState:
    return SessionState(
        id=s.id,
        grade=s.grade,
        level=s.level,
        score=s.score,
        lives=s.lives,
        correct=s.correct_count,
        wrong=s.wrong_count,
        game_over=s.game_over,
        spawn_interval_ms=s.spawn_interval_ms,
        fall_speed=s.fall_speed,
        active=[active_view(eq_id, eq) for eq_id, eq in s.active_items()],
    )


@router.post("", response_model=SessionState)
def start_session(req: SessionStartRequest, request: Request):
    s = _store(request).create(req.grade, validator=getattr(request.app.state, "validator", None))
    return _state(s)


@router.get("/{session_id}", response_model=SessionState)
def get_session(session_id: str, request: Request):
    return _state(_get_session(request, session_id))


@router.post("/{session_id}/spawn", response_model=SpawnResponse)
def spawn(session_id: str, request: Request):
    s = _get_session(request, session_id)
    try:
        eq_id, eq = s.spawn()
    except SessionOver:
        raise HTTPException(status_code=409, detail="Session is over")
    return {"equation": active_view(eq_id, eq), "state": _state(s)}


@router.post("/{session_id}/answer", response_model=AnswerResponse)
def answer(session_id: str, req: AnswerRequest, request: Request):
    s = _get_session(request, session_id)
    try:
        outcome = s.submit(req.answer)
    except SessionOver:
        raise HTTPException(status_code=409, detail="Session is over")
    return {**outcome, "state": _state(s)}


@router.post("/{session_id}/miss", response_model=SessionState)
def miss(session_id: str, req: MissRequest, request: Request):
    s = _get_session(request, session_id)
    try:
        s.miss(req.equation_id)
    except SessionOver:
        raise HTTPException(status_code=409, detail="Session is over")
    except KeyError:
        raise HTTPException(status_code=404, detail="Equation not found")
    return _state(s)


@router.post("/{session_id}/finish", response_model=FinishResponse)
def finish(session_id: str, req: FinishRequest, request: Request):
    s = _get_session(request, session_id)
    _store(request).discard(session_id)
    summary = s.summary()

    # Leaderboard only ever sees scalars from the summary
    score_id = None
    try:
        from db import SessionLocal
        from models import HighScore

        with SessionLocal() as db:
            row = HighScore(
                player_name=req.player_name,
                score=summary["score"],
                grade=summary["grade"],
                level=summary["level"],
                correct_answers=summary["correct"],
                wrong_answers=summary["wrong"],
                accuracy=summary["accuracy"],
                session_duration=summary["duration_seconds"],
                device_id=req.device_id,
            )
            db.add(row)
            db.commit()
            db.refresh(row)
            score_id = row.id
    except Exception:
        logger.exception("could not save high score for session %s", session_id)
        score_id = None

    return {"summary": summary, "score_id": score_id}
