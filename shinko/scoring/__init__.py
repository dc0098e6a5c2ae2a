"""
scoring/ - Opportunity Valuation Engine

Modules:
    utils.py              - Clamping and weight-table helpers
    prio_scorer.py        - PRIO-6 weighted priority score
    tads_scorer.py        - T.A.D.S. validation score
    rde_classifier.py     - RDE quadrant classification
    status_advisor.py     - Suggested status and T.A.D.S. band
    validation.py         - Opt-in rating clamping
    valuation_service.py  - Runs all scorers for one opportunity
"""

from shinko.scoring.prio_scorer import PRIO_WEIGHTS, compute_prio_score
from shinko.scoring.rde_classifier import RDE_MIDPOINT, classify_rde_quadrant
from shinko.scoring.tads_scorer import compute_tads_score

__all__ = [
    "PRIO_WEIGHTS",
    "RDE_MIDPOINT",
    "classify_rde_quadrant",
    "compute_prio_score",
    "compute_tads_score",
]
