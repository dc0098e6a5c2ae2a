"""
scoring/validation.py

Optional clamping layer in front of the engine.

The engine scores whatever it is given. Clamping ratings to the slider
range before scoring is an addition on top of that contract: it changes
PRIO-6 for out-of-range legacy records, so it is only applied when a
caller asks for it (CLAMP_RATINGS / ValuationService(clamp=True)).
"""

import math
from typing import Optional

from shinko.config import settings
from shinko.models.opportunity import ValuationInput
from shinko.scoring.utils import clamp


def clamp_rating(
    value: float,
    min_val: Optional[int] = None,
    max_val: Optional[int] = None,
) -> float:
    """
    Clamp a single rating to [RATING_MIN, RATING_MAX].

    NaN has no position on the scale and maps to the minimum.
    """
    lo = settings.RATING_MIN if min_val is None else min_val
    hi = settings.RATING_MAX if max_val is None else max_val
    if math.isnan(value):
        return float(lo)
    return clamp(value, lo, hi)


def clamp_input(inputs: ValuationInput) -> ValuationInput:
    """Return a copy of inputs with every rating clamped."""
    return inputs.model_copy(
        update={
            "velocity": clamp_rating(inputs.velocity),
            "viability": clamp_rating(inputs.viability),
            "revenue": clamp_rating(inputs.revenue),
        }
    )


def is_in_domain(inputs: ValuationInput) -> bool:
    """True when all three ratings already sit inside the slider range."""
    return all(
        settings.RATING_MIN <= value <= settings.RATING_MAX
        for value in (inputs.velocity, inputs.viability, inputs.revenue)
    )
