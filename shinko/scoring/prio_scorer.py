# shinko/scoring/prio_scorer.py
"""
PRIO-6 Priority Scorer
----------------------
Weighted average of the three opportunity ratings, scaled by 10.

Formula:
    PRIO-6 = (velocity × 0.4 + viability × 0.35 + revenue × 0.25) × 10

Weights (sum = 1.0):
    velocity   0.40
    viability  0.35
    revenue    0.25

No validation and no clamping: ratings outside [1, 5] (including zero and
negatives) scale proportionally. Input bounds belong to the caller.
"""
from decimal import Decimal
from typing import Dict

# Exact weights, used for the weight-sum check and the /weights endpoint
PRIO_WEIGHTS: Dict[str, Decimal] = {
    "velocity":  Decimal("0.40"),
    "viability": Decimal("0.35"),
    "revenue":   Decimal("0.25"),
}

PRIO_SCALE = Decimal("10")


def compute_prio_score(velocity: float, viability: float, revenue: float) -> float:
    """
    Compute the PRIO-6 score.

    Evaluated in binary floating point, term by term and left to right,
    so stored snapshots reproduce bit for bit. Some in-domain results
    therefore carry float noise: (1, 3, 1) -> 16.999999999999996.

    Args:
        velocity: Delivery-speed rating, nominally 1-5.
        viability: Technical-feasibility rating, nominally 1-5.
        revenue: Revenue-potential rating, nominally 1-5.

    Returns:
        The score as a float; nominally in [10, 50]. NaN and infinities
        propagate without raising.
    """
    v, via, r = float(velocity), float(viability), float(revenue)
    return (v * 0.4 + via * 0.35 + r * 0.25) * 10
