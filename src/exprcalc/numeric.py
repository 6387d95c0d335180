"""Overflow-aware arithmetic and epsilon-tolerant comparisons.

Every arithmetic step of the evaluator goes through these helpers so that
overflow and degenerate division surface as ``None`` instead of silently
producing ``inf`` or ``nan``.
"""

from __future__ import annotations

import math

EPSILON = 1e-12


def equal(a: float, b: float) -> bool:
    return abs(a - b) < EPSILON


def is_zero(x: float) -> bool:
    return equal(x, 0.0)


def is_integer(x: float) -> bool:
    """True if *x* is within EPSILON of the nearest integer."""
    return equal(x, round(x))


def remove_decimal_part(x: float) -> float:
    return float(round(x))


def _finite(result: float) -> float | None:
    if math.isfinite(result):
        return result
    return None


def safe_add(a: float, b: float) -> float | None:
    return _finite(a + b)


def safe_sub(a: float, b: float) -> float | None:
    return _finite(a - b)


def safe_mul(a: float, b: float) -> float | None:
    return _finite(a * b)


def safe_div(a: float, b: float) -> float | None:
    """Divide, returning None for a zero divisor or a non-finite quotient."""
    if b == 0:
        return None
    return _finite(a / b)
