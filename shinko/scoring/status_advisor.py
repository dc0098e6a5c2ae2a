"""
scoring/status_advisor.py

Status suggestion and T.A.D.S. banding used by the creation flow.

Suggested status (checked in order):
    T.A.D.S. < 4                  -> Archived
    PRIO-6 / 10 >= 4.0            -> Active
    PRIO-6 / 10 >= 3.0            -> Negotiation
    otherwise                     -> Future

The thresholds are on the unscaled weighted average (1-5 range), so
PRIO-6 is divided by its ×10 scale before comparing.
"""

from shinko.models.enumerations import ProjectStatus, TadsBand

MIN_VIABLE_TADS = 4
ACTIVE_THRESHOLD = 4.0
NEGOTIATION_THRESHOLD = 3.0

STRONG_TADS = 8
MODERATE_TADS = 5


def suggest_status(prio_score: float, tads_score: int) -> ProjectStatus:
    """Suggest a pipeline status for a freshly valued opportunity."""
    if tads_score < MIN_VIABLE_TADS:
        return ProjectStatus.ARCHIVED

    unscaled = prio_score / 10
    if unscaled >= ACTIVE_THRESHOLD:
        return ProjectStatus.ACTIVE
    if unscaled >= NEGOTIATION_THRESHOLD:
        return ProjectStatus.NEGOTIATION
    return ProjectStatus.FUTURE


def tads_band(tads_score: int) -> TadsBand:
    if tads_score >= STRONG_TADS:
        return TadsBand.STRONG
    if tads_score >= MODERATE_TADS:
        return TadsBand.MODERATE
    return TadsBand.WEAK
