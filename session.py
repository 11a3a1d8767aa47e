from __future__ import annotations

import logging
import threading
import time
import uuid
from collections import OrderedDict
from typing import Any, Dict, List, Optional, Tuple

from generator import EquationGenerator
from schemas.equations import Equation
from validator import AnswerValidator

logger = logging.getLogger(__name__)

# --- Scoring rules ----------------------------------------------------------------
POINTS_PER_LEVEL = 10  # a correct answer is worth this times the current level
WRONG_PENALTY = 5
DEFAULT_LIVES = 3
DEFAULT_ANSWERS_PER_LEVEL = 10

# Store housekeeping: idle sessions are dropped after this many seconds, oldest first past the cap
DEFAULT_IDLE_TTL = 3600
DEFAULT_MAX_SESSIONS = 1000

# Spawn pacing: starts at 3s, 200ms faster per level, never below 1.5s
_SPAWN_START_MS = 3000
_SPAWN_STEP_MS = 200
_SPAWN_FLOOR_MS = 1500


class SessionOver(Exception):
    """Raised when a finished session is asked to spawn or mark."""


class GameSession:
    """
    One play session: the equations on screen, score, lives and level.

    The generator and validator are handed in by the caller; the session owns the
    generator's level and raises it every ``answers_per_level`` correct answers.
    """

    def __init__(
        self,
        grade: int,
        generator: Optional[EquationGenerator] = None,
        validator: Optional[AnswerValidator] = None,
        lives: int = DEFAULT_LIVES,
        answers_per_level: int = DEFAULT_ANSWERS_PER_LEVEL,
        clock=time.monotonic,
    ):
        self.id = uuid.uuid4().hex
        self.generator = generator if generator is not None else EquationGenerator(grade)
        self.validator = validator if validator is not None else AnswerValidator()
        self.grade = self.generator.grade
        self.level = self.generator.level
        self.score = 0
        self.lives = lives
        self.correct_count = 0
        self.wrong_count = 0
        self.answers_per_level = max(1, answers_per_level)
        self.active: "OrderedDict[str, Equation]" = OrderedDict()
        self._clock = clock
        self._started = clock()
        self._ended: Optional[float] = None
        # endpoints for one session can run concurrently in the threadpool
        self._lock = threading.RLock()

    @property
    def game_over(self) -> bool:
        return self.lives <= 0

    @property
    def spawn_interval_ms(self) -> int:
        return max(_SPAWN_FLOOR_MS, _SPAWN_START_MS - (self.level - 1) * _SPAWN_STEP_MS)

    @property
    def fall_speed(self) -> float:
        return 1 + (self.level - 1) * 0.2

    def _ensure_running(self) -> None:
        if self.game_over:
            raise SessionOver(f"session {self.id} is over")

    def spawn(self) -> Tuple[str, Equation]:
        with self._lock:
            self._ensure_running()
            eq = self.generator.generate()
            eq_id = uuid.uuid4().hex[:12]
            self.active[eq_id] = eq
            return eq_id, eq

    def active_items(self) -> List[Tuple[str, Equation]]:
        with self._lock:
            return list(self.active.items())

    def submit(self, answer: str) -> Dict[str, Any]:
        """
        Mark a typed answer against every equation on screen, newest first.
        The first equation it solves is cleared; otherwise the answer counts as wrong.
        """
        with self._lock:
            self._ensure_running()
            if not (answer or "").strip():
                return {"correct": False, "equation_id": None, "leveled_up": False}

            for eq_id, eq in reversed(list(self.active.items())):
                if self.validator.validate(answer, eq.answer).correct:
                    del self.active[eq_id]
                    self.score += POINTS_PER_LEVEL * self.level
                    self.correct_count += 1
                    leveled_up = self.correct_count % self.answers_per_level == 0
                    if leveled_up:
                        self._level_up()
                    return {"correct": True, "equation_id": eq_id, "leveled_up": leveled_up}

            self.score = max(0, self.score - WRONG_PENALTY)
            self.wrong_count += 1
            return {"correct": False, "equation_id": None, "leveled_up": False}

    def miss(self, equation_id: str) -> None:
        """An equation reached the ground: drop it and lose a life."""
        with self._lock:
            self._ensure_running()
            if equation_id not in self.active:
                raise KeyError(equation_id)
            del self.active[equation_id]
            self.lives -= 1
            if self.game_over:
                self._ended = self._clock()
                logger.info(
                    "session %s over: score=%s level=%s correct=%s wrong=%s",
                    self.id, self.score, self.level, self.correct_count, self.wrong_count,
                )

    def _level_up(self) -> None:
        self.level += 1
        self.generator.set_level(self.level)
        logger.info("session %s reached level %s", self.id, self.level)

    @property
    def accuracy(self) -> float:
        total = self.correct_count + self.wrong_count
        return (self.correct_count / total) * 100 if total else 0.0

    def summary(self) -> Dict[str, Any]:
        with self._lock:
            end = self._ended if self._ended is not None else self._clock()
            return {
                "score": self.score,
                "grade": self.grade,
                "level": self.level,
                "correct": self.correct_count,
                "wrong": self.wrong_count,
                "accuracy": round(self.accuracy, 2),
                "duration_seconds": int(end - self._started),
                "game_over": self.game_over,
            }


class SessionStore:
    """
    Live sessions by id. Endpoints run in a threadpool, so access goes through a lock.

    Sessions nobody has touched for ``idle_ttl`` seconds are dropped, and past
    ``max_sessions`` the least recently touched go first. Both checks run on create/get.
    """

    def __init__(
        self,
        lives: int = DEFAULT_LIVES,
        answers_per_level: int = DEFAULT_ANSWERS_PER_LEVEL,
        idle_ttl: float = DEFAULT_IDLE_TTL,
        max_sessions: int = DEFAULT_MAX_SESSIONS,
        clock=time.monotonic,
    ):
        self.lives = lives
        self.answers_per_level = answers_per_level
        self.idle_ttl = idle_ttl
        self.max_sessions = max(1, max_sessions)
        self._clock = clock
        self._sessions: "OrderedDict[str, GameSession]" = OrderedDict()
        self._touched: Dict[str, float] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)

    def _touch(self, session_id: str, now: float) -> None:
        self._touched[session_id] = now
        self._sessions.move_to_end(session_id)

    def _evict(self, now: float, room: int = 0) -> None:
        # _sessions is kept in touch order, oldest first
        while self._sessions:
            oldest = next(iter(self._sessions))
            idle = now - self._touched[oldest]
            if idle <= self.idle_ttl and len(self._sessions) + room <= self.max_sessions:
                break
            self._sessions.pop(oldest)
            self._touched.pop(oldest, None)
            logger.info("session %s evicted after %.0fs idle", oldest, idle)

    def create(self, grade: int, validator: Optional[AnswerValidator] = None) -> GameSession:
        s = GameSession(
            grade,
            generator=EquationGenerator(grade),
            validator=validator,
            lives=self.lives,
            answers_per_level=self.answers_per_level,
        )
        with self._lock:
            now = self._clock()
            self._evict(now, room=1)
            self._sessions[s.id] = s
            self._touch(s.id, now)
        logger.info("session %s started at grade %s", s.id, s.grade)
        return s

    def get(self, session_id: str) -> GameSession:
        with self._lock:
            now = self._clock()
            self._evict(now)
            s = self._sessions[session_id]
            self._touch(session_id, now)
            return s

    def discard(self, session_id: str) -> Optional[GameSession]:
        with self._lock:
            self._touched.pop(session_id, None)
            return self._sessions.pop(session_id, None)
