"""
Scoring Utilities
shinko/scoring/utils.py
"""

from decimal import Decimal
from typing import Iterable


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp value to range [min_val, max_val]."""
    return max(min_val, min(max_val, value))


def weights_total(weights: Iterable[Decimal]) -> Decimal:
    """Exact sum of a weight table; a valid table totals Decimal('1')."""
    return sum(weights, Decimal("0"))
