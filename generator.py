from __future__ import annotations

import logging
import random
from typing import Any, Callable, Dict, List, Optional

from sympy import Rational

from schemas.equations import Equation, Operation
from validator import simplify_fraction

logger = logging.getLogger(__name__)

MIN_GRADE = 2
MAX_GRADE = 5

# Base operand ceiling for add/sub by grade (grades 4 and up share the last one)
_BASE_MAX = {2: 10, 3: 20}
_BASE_MAX_DEFAULT = 50
# Ceiling grows by this much every _LEVELS_PER_BONUS levels
_LEVEL_BONUS = 5
_LEVELS_PER_BONUS = 3

_MIN_DENOMINATOR = 2
_MAX_DENOMINATOR = 8

# Difficulty tiers: (largest operand <= limit) -> tier
_DIFFICULTY_TIERS = ((10, 1), (20, 2), (50, 3))
_TOP_TIER = 4


def difficulty_for(*operands: int) -> int:
    biggest = max(abs(o) for o in operands)
    for limit, tier in _DIFFICULTY_TIERS:
        if biggest <= limit:
            return tier
    return _TOP_TIER


class EquationGenerator:
    """
    Produces grade-appropriate arithmetic problems with exact answers.

    ``rng`` is any object exposing ``randint(a, b)`` and ``choice(seq)``; it defaults to a
    fresh ``random.Random``. Grade is fixed for the life of the generator, level moves
    forward through ``set_level``.
    """

    def __init__(self, grade: int, level: int = 1, rng: Optional[Any] = None):
        clamped = min(max(int(grade), MIN_GRADE), MAX_GRADE)
        if clamped != grade:
            logger.warning("grade %s unsupported, using grade %s", grade, clamped)
        self._grade = clamped
        self._level = max(1, int(level))
        self._rng = rng if rng is not None else random.Random()
        self._builders: Dict[Operation, Callable[[], Equation]] = {
            "add": self._addition,
            "sub": self._subtraction,
            "mul": self._multiplication,
            "div": self._division,
            "frac-add": self._fraction_addition,
            "frac-sub": self._fraction_subtraction,
        }

    @property
    def grade(self) -> int:
        return self._grade

    @property
    def level(self) -> int:
        return self._level

    def set_level(self, level: int) -> None:
        self._level = max(1, int(level))

    # --- Eligibility / ranges -----------------------------------------------------

    def allowed_operations(self) -> List[Operation]:
        if self._grade == 2:
            return ["add", "sub"]
        if self._grade == 3:
            return ["add", "sub", "mul", "div"]
        if self._grade == 4:
            ops: List[Operation] = ["add", "sub", "mul", "div", "frac-add"]
            if self._level >= 5:
                ops.append("frac-sub")
            return ops
        ops = ["mul", "div", "frac-add", "frac-sub"]
        if self._level >= 3:
            ops += ["add", "sub"]
        return ops

    def max_number(self) -> int:
        base = _BASE_MAX.get(self._grade, _BASE_MAX_DEFAULT)
        return base + ((self._level - 1) // _LEVELS_PER_BONUS) * _LEVEL_BONUS

    def _max_factor(self) -> int:
        # times tables: up to 9 in grade 3, up to 12 otherwise
        return 9 if self._grade == 3 else 12

    # --- Generation ---------------------------------------------------------------

    def generate(self) -> Equation:
        operation = self._rng.choice(self.allowed_operations())
        eq = self._builders[operation]()
        logger.debug("generated %s = %s (grade %s, level %s)", eq.text, eq.answer, self._grade, self._level)
        return eq

    def _addition(self) -> Equation:
        top = self.max_number()
        a = self._rng.randint(2, top)
        b = self._rng.randint(2, top)
        return Equation(
            text=f"{a} + {b}",
            answer=str(a + b),
            numeric_answer=a + b,
            operation="add",
            difficulty=difficulty_for(a, b),
        )

    def _subtraction(self) -> Equation:
        a = self._rng.randint(5, self.max_number())
        b = self._rng.randint(2, a)  # never larger than the minuend
        return Equation(
            text=f"{a} - {b}",
            answer=str(a - b),
            numeric_answer=a - b,
            operation="sub",
            difficulty=difficulty_for(a, b),
        )

    def _multiplication(self) -> Equation:
        top = self._max_factor()
        a = self._rng.randint(2, top)
        b = self._rng.randint(2, top)
        return Equation(
            text=f"{a} × {b}",
            answer=str(a * b),
            numeric_answer=a * b,
            operation="mul",
            difficulty=difficulty_for(a, b),
        )

    def _division(self) -> Equation:
        top = self._max_factor()
        divisor = self._rng.randint(2, top)
        quotient = self._rng.randint(2, top)
        dividend = divisor * quotient
        return Equation(
            text=f"{dividend} ÷ {divisor}",
            answer=str(quotient),
            numeric_answer=quotient,
            operation="div",
            difficulty=difficulty_for(dividend, divisor),
        )

    def _fraction_addition(self) -> Equation:
        den = self._rng.randint(_MIN_DENOMINATOR, _MAX_DENOMINATOR)
        n1 = self._rng.randint(1, den - 1)
        n2 = self._rng.randint(1, den - 1)
        return Equation(
            text=f"{n1}/{den} + {n2}/{den}",
            answer=simplify_fraction(n1 + n2, den),
            numeric_answer=float(Rational(n1 + n2, den)),
            operation="frac-add",
            difficulty=difficulty_for(n1, n2, den),
        )

    def _fraction_subtraction(self) -> Equation:
        # needs two distinct positive numerators below the denominator, so at least thirds
        den = self._rng.randint(_MIN_DENOMINATOR + 1, _MAX_DENOMINATOR)
        n1 = self._rng.randint(2, den - 1)
        n2 = self._rng.randint(1, n1 - 1)
        return Equation(
            text=f"{n1}/{den} - {n2}/{den}",
            answer=simplify_fraction(n1 - n2, den),
            numeric_answer=float(Rational(n1 - n2, den)),
            operation="frac-sub",
            difficulty=difficulty_for(n1, n2, den),
        )
