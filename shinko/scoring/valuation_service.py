# shinko/scoring/valuation_service.py
"""
Valuation Service
-----------------
Runs the three scorers over one opportunity and returns the snapshot the
calling layer stores with the record.

    1. PRIO-6      compute_prio_score(velocity, viability, revenue)
    2. T.A.D.S.    compute_tads_score(tads)
    3. RDE         classify_rde_quadrant(velocity, viability)
    4. Suggested status and T.A.D.S. band for the creation flow

The snapshot is always recomputed from scratch; nothing is diffed.
"""
import structlog
from dataclasses import dataclass
from typing import Any, Dict, Optional

from shinko.config import settings
from shinko.models.enumerations import ProjectStatus, RdeQuadrant, TadsBand
from shinko.models.opportunity import ValuationInput
from shinko.scoring.prio_scorer import compute_prio_score
from shinko.scoring.rde_classifier import classify_rde_quadrant
from shinko.scoring.status_advisor import suggest_status, tads_band
from shinko.scoring.tads_scorer import compute_tads_score
from shinko.scoring.validation import clamp_input, is_in_domain

logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class ValuationResult:
    """Output of ValuationService.evaluate()."""
    prio_score: float            # PRIO-6, nominally [10, 50]
    tads_score: int              # [0, 10], even
    rde_quadrant: RdeQuadrant
    suggested_status: ProjectStatus
    tads_band: TadsBand
    clamped: bool                # True when ratings were clamped before scoring

    def snapshot(self) -> Dict[str, Any]:
        """Fields written onto the persisted record."""
        return {
            "prio_score": self.prio_score,
            "tads_score": self.tads_score,
            "rde_quadrant": self.rde_quadrant,
        }


class ValuationService:
    """Score an opportunity with PRIO-6, T.A.D.S. and RDE."""

    def __init__(self, clamp: Optional[bool] = None):
        self.clamp = settings.CLAMP_RATINGS if clamp is None else clamp

    def evaluate(self, inputs: ValuationInput) -> ValuationResult:
        """
        Args:
            inputs: Complete ratings and flags. Ratings are used as given
                    unless the service was built with clamp=True.

        Returns:
            ValuationResult with all three scores plus creation-flow hints.
        """
        clamped = False
        if self.clamp and not is_in_domain(inputs):
            inputs = clamp_input(inputs)
            clamped = True

        prio = compute_prio_score(inputs.velocity, inputs.viability, inputs.revenue)
        tads = compute_tads_score(inputs.tads)
        quadrant = classify_rde_quadrant(inputs.velocity, inputs.viability)

        result = ValuationResult(
            prio_score=prio,
            tads_score=tads,
            rde_quadrant=quadrant,
            suggested_status=suggest_status(prio, tads),
            tads_band=tads_band(tads),
            clamped=clamped,
        )

        logger.debug(
            "opportunity_valued",
            velocity=inputs.velocity,
            viability=inputs.viability,
            revenue=inputs.revenue,
            prio_score=prio,
            tads_score=tads,
            rde_quadrant=quadrant.value,
            clamped=clamped,
        )
        return result
