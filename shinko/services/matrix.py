"""
Matrix Feed - Shinko OS
shinko/services/matrix.py

Flattens opportunities into primitive points for the RDE quadrant chart:
x = velocity, y = viability, bubble label = PRIO-6.
"""

from typing import Iterable, List, Optional
from uuid import UUID

from pydantic import BaseModel

from shinko.models.opportunity import Opportunity
from shinko.models.terminology import MATRIX_AXIS_DOMAIN, QUADRANT_LEGEND
from shinko.models.enumerations import RdeQuadrant
from shinko.scoring.rde_classifier import RDE_MIDPOINT, classify_rde_quadrant


class MatrixPoint(BaseModel):
    id: UUID
    title: str
    x: float
    y: float
    prio: float
    quadrant: RdeQuadrant
    color: str


class MatrixFeed(BaseModel):
    x_domain: List[int]
    y_domain: List[int]
    midpoint: int
    points: List[MatrixPoint]


def _coordinate(value: Optional[float]) -> float:
    # Unrated axes plot at the origin
    return float(value) if value is not None else 0.0


def build_matrix_points(opportunities: Iterable[Opportunity]) -> List[MatrixPoint]:
    """
    Build chart points.

    The quadrant is classified from the plotted coordinates so the point
    colour always agrees with the area it is drawn in.
    """
    points = []
    for opp in opportunities:
        x = _coordinate(opp.velocity)
        y = _coordinate(opp.viability)
        quadrant = classify_rde_quadrant(x, y)
        points.append(
            MatrixPoint(
                id=opp.id,
                title=opp.title,
                x=x,
                y=y,
                prio=float(opp.prio_score or 0),
                quadrant=quadrant,
                color=QUADRANT_LEGEND[quadrant].hex,
            )
        )
    return points


def build_matrix_feed(opportunities: Iterable[Opportunity]) -> MatrixFeed:
    lo, hi = MATRIX_AXIS_DOMAIN
    return MatrixFeed(
        x_domain=[lo, hi],
        y_domain=[lo, hi],
        midpoint=RDE_MIDPOINT,
        points=build_matrix_points(opportunities),
    )
