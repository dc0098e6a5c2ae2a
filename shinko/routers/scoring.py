"""
routers/scoring.py - Valuation Endpoints

Endpoints:
  POST /api/v1/scoring/evaluate  - Score a draft without storing it
  GET  /api/v1/scoring/weights   - PRIO-6 weights and their total
  GET  /api/v1/scoring/legend    - Quadrant legend and terminology tables
"""

from decimal import Decimal
from typing import Dict, List

import structlog
from fastapi import APIRouter, Depends
from pydantic import BaseModel

from shinko.config import settings
from shinko.core.dependencies import get_valuation_service
from shinko.models.enumerations import ProjectStatus, RdeQuadrant, TadsBand
from shinko.models.opportunity import OpportunityDraft, ValuationInput
from shinko.models.terminology import (
    ARCHETYPE_TERMS,
    INTENSITY_LABELS,
    MATRIX_AXIS_DOMAIN,
    QUADRANT_LEGEND,
    TADS_BAND_COLORS,
    TADS_TERMS,
)
from shinko.scoring.prio_scorer import PRIO_WEIGHTS
from shinko.scoring.rde_classifier import RDE_MIDPOINT
from shinko.scoring.tads_scorer import MAX_TADS_SCORE, POINTS_PER_FLAG
from shinko.scoring.utils import weights_total
from shinko.scoring.valuation_service import ValuationService
from shinko.services.cache import TTL_LEGEND, get_cache
from shinko.services.redis_cache import LEGEND_KEY

logger = structlog.get_logger(__name__)

router = APIRouter(prefix=f"{settings.API_V1_PREFIX}/scoring", tags=["Scoring"])


# =====================================================================
# Response Models
# =====================================================================

class EvaluationResponse(BaseModel):
    """Scores for a draft opportunity."""
    inputs: ValuationInput
    prio_score: float
    tads_score: int
    tads_band: TadsBand
    rde_quadrant: RdeQuadrant
    quadrant_label: str
    quadrant_color: str
    suggested_status: ProjectStatus
    clamped: bool


class WeightsResponse(BaseModel):
    weights: Dict[str, float]
    total: float
    is_valid: bool
    scale: int


class QuadrantLegendEntry(BaseModel):
    quadrant: RdeQuadrant
    label: str
    action: str
    color: str
    hex: str


class TermResponse(BaseModel):
    key: str
    label: str
    description: str


class LegendResponse(BaseModel):
    quadrants: List[QuadrantLegendEntry]
    archetypes: List[TermResponse]
    intensities: Dict[int, str]
    tads_flags: List[TermResponse]
    tads_bands: Dict[str, str]
    tads_points_per_flag: int
    tads_max_score: int
    rde_midpoint: int
    axis_domain: List[int]


# =====================================================================
# Routes
# =====================================================================

@router.post(
    "/evaluate",
    response_model=EvaluationResponse,
    summary="Score a draft opportunity",
    description="""
    Runs PRIO-6, T.A.D.S. and RDE on a draft without persisting it.

    Missing ratings fall back to DRAFT_RATING_DEFAULT and missing flags
    count as false.
    """,
)
async def evaluate_draft(
    draft: OpportunityDraft,
    service: ValuationService = Depends(get_valuation_service),
) -> EvaluationResponse:
    inputs = draft.to_valuation_input()
    result = service.evaluate(inputs)
    legend = QUADRANT_LEGEND[result.rde_quadrant]

    return EvaluationResponse(
        inputs=inputs,
        prio_score=result.prio_score,
        tads_score=result.tads_score,
        tads_band=result.tads_band,
        rde_quadrant=result.rde_quadrant,
        quadrant_label=legend.label,
        quadrant_color=legend.hex,
        suggested_status=result.suggested_status,
        clamped=result.clamped,
    )


@router.get(
    "/weights",
    response_model=WeightsResponse,
    summary="PRIO-6 weights",
)
async def get_weights() -> WeightsResponse:
    total = weights_total(PRIO_WEIGHTS.values())
    return WeightsResponse(
        weights={name: float(w) for name, w in PRIO_WEIGHTS.items()},
        total=float(total),
        is_valid=total == Decimal("1"),
        scale=10,
    )


@router.get(
    "/legend",
    response_model=LegendResponse,
    summary="Quadrant legend and terminology",
    description="Static display tables for charts and forms. Cached for 24 hours.",
)
async def get_legend() -> LegendResponse:
    cache = get_cache()
    if cache:
        try:
            cached = cache.get(LEGEND_KEY, LegendResponse)
            if cached:
                return cached
        except Exception as e:
            logger.warning("cache_read_failed", key=LEGEND_KEY, error=str(e))

    lo, hi = MATRIX_AXIS_DOMAIN
    response = LegendResponse(
        quadrants=[
            QuadrantLegendEntry(
                quadrant=q, label=e.label, action=e.action, color=e.color, hex=e.hex
            )
            for q, e in QUADRANT_LEGEND.items()
        ],
        archetypes=[
            TermResponse(key=a.value, label=t.label, description=t.description)
            for a, t in ARCHETYPE_TERMS.items()
        ],
        intensities={int(level): label for level, label in INTENSITY_LABELS.items()},
        tads_flags=[
            TermResponse(key=flag, label=t.label, description=t.description)
            for flag, t in TADS_TERMS.items()
        ],
        tads_bands={band.value: color for band, color in TADS_BAND_COLORS.items()},
        tads_points_per_flag=POINTS_PER_FLAG,
        tads_max_score=MAX_TADS_SCORE,
        rde_midpoint=RDE_MIDPOINT,
        axis_domain=[lo, hi],
    )

    if cache:
        try:
            cache.set(LEGEND_KEY, response, TTL_LEGEND)
        except Exception as e:
            logger.warning("cache_write_failed", key=LEGEND_KEY, error=str(e))

    return response
