"""
Numeric Utilities
panel_eval/scoring/utils.py

Score arithmetic stays in full float precision; rounding is a presentation
concern handled by to_display().
"""

import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Optional


def to_decimal(value: float, places: int = 2) -> Decimal:
    """Convert float to Decimal with explicit precision."""
    return Decimal(str(value)).quantize(
        Decimal(10) ** -places, rounding=ROUND_HALF_UP
    )


def to_display(value: Optional[float], places: int = 2) -> Optional[float]:
    """Round a score for presentation. None passes through."""
    if value is None:
        return None
    return float(to_decimal(value, places))


def mean(values: Iterable[float]) -> float:
    """
    Arithmetic mean.

    Returns 0.0 for an empty input instead of dividing by zero.
    """
    items = list(values)
    if not items:
        return 0.0
    return math.fsum(items) / len(items)


def is_real_number(value: object) -> bool:
    """True for finite int/float values. Booleans are rejected."""
    if isinstance(value, bool):
        return False
    if not isinstance(value, (int, float)):
        return False
    return math.isfinite(value)
