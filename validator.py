from __future__ import annotations

import logging
import math
import re
from typing import Optional

from sympy import Rational

from schemas.marking import ValidationResult

logger = logging.getLogger(__name__)

# --- Matching policy --------------------------------------------------------------
# Absolute tolerance for numeric equivalence; absorbs rounding from fraction division.
TOLERANCE = 1e-4
# Returned by simplify_fraction when the denominator is zero.
UNDEFINED = "undefined"
LEN_LIMIT = 100

# --- Answer grammar ---------------------------------------------------------------
_DECIMAL_RE = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)$")
_MIXED_RE = re.compile(r"^([+-]?)(\d+)\s+(\d+)\s*/\s*(\d+)$")
_FRACTION_RE = re.compile(r"^([+-]?\d+)\s*/\s*(\d+)$")
_ZERO_DENOMINATOR_RE = re.compile(r"/0$")

# --- Normalization ----------------------------------------------------------------
_WS_RE = re.compile(r"\s+")
_SLASH_RE = re.compile(r"\s*/\s*")
_LEADING_ZEROS_RE = re.compile(r"(?<![\d.])0+(?=\d)")
# whole numeric tokens only, so "1..5" or "1.2.3" stay as typed
_DECIMAL_PART_RE = re.compile(r"(?<![\d.])(\d*)\.(\d*)(?![\d.])")


def _trim_decimal(m: re.Match) -> str:
    whole, frac = m.group(1), m.group(2)
    if not whole and not frac:
        return m.group(0)
    frac = frac.rstrip("0")
    whole = whole or "0"
    return f"{whole}.{frac}" if frac else whole


def normalize(text: str) -> str:
    """
    Canonical text form of an answer: case-folded, whitespace collapsed, no spaces
    around '/', no leading zeros on integer parts, no trailing zeros after a decimal point.
    Applying it twice gives the same result as applying it once.
    """
    if not isinstance(text, str):
        return ""
    s = _WS_RE.sub(" ", text.strip()).casefold()
    s = _SLASH_RE.sub("/", s)
    s = _LEADING_ZEROS_RE.sub("", s)
    return _DECIMAL_PART_RE.sub(_trim_decimal, s)


def _parse_exact(text: str) -> Optional[Rational]:
    s = normalize(text)
    if not s or len(s) > LEN_LIMIT:
        return None

    # Plain number (no fraction bar)
    if "/" not in s:
        if _DECIMAL_RE.match(s) is None:
            return None
        return Rational(s)

    # Mixed number "w n/d"
    m = _MIXED_RE.match(s)
    if m:
        sign, whole, num, den = m.group(1), int(m.group(2)), int(m.group(3)), int(m.group(4))
        if den == 0:
            return None
        val = whole + Rational(num, den)
        return -val if sign == "-" else val

    # Simple fraction "a/b"
    m = _FRACTION_RE.match(s)
    if m:
        num, den = int(m.group(1)), int(m.group(2))
        if den == 0:
            return None
        return Rational(num, den)

    return None


def parse_number(text: str) -> Optional[float]:
    """Integer, decimal, fraction or mixed number -> float; None when it is none of those."""
    val = _parse_exact(text)
    if val is None:
        return None
    return float(val)


def simplify_fraction(numerator: int, denominator: int) -> str:
    """
    Reduce by GCD and render as an integer, a mixed number ("1 1/2") or a proper
    fraction ("3/4"). A zero denominator yields UNDEFINED.
    """
    if denominator == 0:
        return UNDEFINED
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    g = math.gcd(numerator, denominator)
    num, den = numerator // g, denominator // g
    if den == 1:
        return str(num)

    sign = "-" if num < 0 else ""
    whole, rem = divmod(abs(num), den)
    if whole:
        return f"{sign}{whole} {rem}/{den}"
    return f"{sign}{rem}/{den}"


def format_display(value: float) -> str:
    if not math.isfinite(value):
        return str(value)
    if float(value).is_integer():
        return str(int(value))
    s = f"{value:.2f}".rstrip("0").rstrip(".")
    return "0" if s == "-0" else s


class AnswerValidator:
    """
    Decides whether a typed answer is mathematically equivalent to the expected one.

    Stateless: one instance can be shared by any number of callers. Every rejection is
    reported as ``correct=False``; nothing here raises on bad input.
    """

    tolerance = TOLERANCE

    simplify_fraction = staticmethod(simplify_fraction)
    format_display = staticmethod(format_display)
    normalize = staticmethod(normalize)

    def validate(self, raw_input: str, expected: str) -> ValidationResult:
        norm_input = normalize(raw_input)
        norm_expected = normalize(expected)

        if not norm_input or not norm_expected:
            return ValidationResult(
                correct=False, normalized_input=norm_input, normalized_answer=norm_expected
            )

        user_val = _parse_exact(raw_input)
        exp_val = _parse_exact(expected)
        user_f = float(user_val) if user_val is not None else None
        exp_f = float(exp_val) if exp_val is not None else None

        if user_f is not None and exp_f is not None:
            correct = math.isclose(user_f, exp_f, rel_tol=0, abs_tol=self.tolerance)
        elif _ZERO_DENOMINATOR_RE.search(norm_input) or _ZERO_DENOMINATOR_RE.search(norm_expected):
            correct = False
        else:
            # Last resort for answers outside the numeric grammar
            correct = norm_input == norm_expected

        logger.debug("validate %r against %r -> %s", raw_input, expected, correct)
        return ValidationResult(
            correct=correct,
            normalized_input=norm_input,
            normalized_answer=norm_expected,
            input_value=user_f,
            answer_value=exp_f,
        )
