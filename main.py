import logging
import os

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from db import init_db

# Routers
from routers.equations import router as equations_router
from routers.health import router as health_router
from routers.marking import router as marking_router
from routers.scores import router as scores_router
from routers.sessions import router as sessions_router
from session import (
    DEFAULT_ANSWERS_PER_LEVEL,
    DEFAULT_IDLE_TTL,
    DEFAULT_LIVES,
    DEFAULT_MAX_SESSIONS,
    SessionStore,
)
from validator import AnswerValidator

logger = logging.getLogger("mathdrop")
logging.basicConfig(level=logging.INFO)

_DEFAULT_ORIGINS = "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000"
CORS_ORIGINS = [o.strip() for o in os.getenv("CORS_ORIGINS", _DEFAULT_ORIGINS).split(",") if o.strip()]
LIVES = int(os.getenv("MATHDROP_LIVES", str(DEFAULT_LIVES)))
ANSWERS_PER_LEVEL = int(os.getenv("MATHDROP_ANSWERS_PER_LEVEL", str(DEFAULT_ANSWERS_PER_LEVEL)))
SESSION_TTL = float(os.getenv("MATHDROP_SESSION_TTL", str(DEFAULT_IDLE_TTL)))
MAX_SESSIONS = int(os.getenv("MATHDROP_MAX_SESSIONS", str(DEFAULT_MAX_SESSIONS)))

app = FastAPI(title="Math Drop – Practice API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Owned instances, handed to whatever needs them (no module-level singletons)
app.state.validator = AnswerValidator()
app.state.sessions = SessionStore(
    lives=LIVES,
    answers_per_level=ANSWERS_PER_LEVEL,
    idle_ttl=SESSION_TTL,
    max_sessions=MAX_SESSIONS,
)


@app.on_event("startup")
def _startup() -> None:
    init_db()
    logger.info("math drop api ready (lives=%s, answers_per_level=%s)", LIVES, ANSWERS_PER_LEVEL)


@app.get("/")
def health_root():
    return {"ok": True}


app.include_router(equations_router)  # /equations
app.include_router(marking_router)  # /validate, /simplify, /format
app.include_router(sessions_router)  # /sessions/...
app.include_router(scores_router)  # /scores/...
app.include_router(health_router)  # /health/...
