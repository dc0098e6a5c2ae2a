# shinko/scoring/rde_classifier.py
"""
RDE Quadrant Classifier
-----------------------
Splits the velocity × viability plane at 3 on both axes.

    velocity >= 3, viability >= 3  ->  SPRINT_ATTACK
    velocity <  3, viability >= 3  ->  STRATEGIC_PLAN
    velocity >= 3, viability <  3  ->  MVP_PARTNERSHIP
    velocity <  3, viability <  3  ->  DISCARD_HOLD

The midpoint belongs to the high side on both axes: (3, 3) is
SPRINT_ATTACK. Existing charts depend on this boundary.
"""
from shinko.models.enumerations import RdeQuadrant

RDE_MIDPOINT = 3


def classify_rde_quadrant(velocity: float, viability: float) -> RdeQuadrant:
    """
    Classify an opportunity into its RDE quadrant.

    Total over the reals. A NaN rating fails the >= test and lands on the
    low side of its axis.
    """
    fast = velocity >= RDE_MIDPOINT
    feasible = viability >= RDE_MIDPOINT

    if fast and feasible:
        return RdeQuadrant.SPRINT_ATTACK
    if feasible:
        return RdeQuadrant.STRATEGIC_PLAN
    if fast:
        return RdeQuadrant.MVP_PARTNERSHIP
    return RdeQuadrant.DISCARD_HOLD
