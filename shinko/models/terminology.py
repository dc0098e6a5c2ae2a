"""
Terminology - Shinko OS
shinko/models/terminology.py

Static display tables for the presentation layer: quadrant legend,
archetype and intensity labels, T.A.D.S. flag descriptions.

Nothing in shinko.scoring reads these; scoring stays label-free.
"""

from dataclasses import dataclass
from typing import Dict

from shinko.models.enumerations import Archetype, IntensityLevel, RdeQuadrant, TadsBand


@dataclass(frozen=True)
class QuadrantLegend:
    label: str
    action: str
    color: str
    hex: str


@dataclass(frozen=True)
class TermEntry:
    label: str
    description: str


QUADRANT_LEGEND: Dict[RdeQuadrant, QuadrantLegend] = {
    RdeQuadrant.SPRINT_ATTACK: QuadrantLegend(
        label="Sprint / Attack",
        action="Execute immediately",
        color="green",
        hex="#10b981",
    ),
    RdeQuadrant.STRATEGIC_PLAN: QuadrantLegend(
        label="Strategic / Plan",
        action="Feasible but slow: plan before committing",
        color="yellow",
        hex="#f59e0b",
    ),
    RdeQuadrant.MVP_PARTNERSHIP: QuadrantLegend(
        label="MVP / Partnership",
        action="Fast but hard: partner or cut scope",
        color="orange",
        hex="#f97316",
    ),
    RdeQuadrant.DISCARD_HOLD: QuadrantLegend(
        label="Discard / Hold",
        action="Deprioritize",
        color="red",
        hex="#ef4444",
    ),
}

ARCHETYPE_TERMS: Dict[Archetype, TermEntry] = {
    Archetype.SAAS_ENTRY: TermEntry(
        "Entry SaaS", "Low-ticket product for fast acquisition."
    ),
    Archetype.SAAS_VERTICAL: TermEntry(
        "Vertical SaaS", "Specialised software for a single industry."
    ),
    Archetype.SERVICE_TECH: TermEntry(
        "Service + Technology", "Consulting delivery backed by proprietary tooling."
    ),
    Archetype.PLATFORM: TermEntry(
        "Automation Platform", "Multi-tenant platform that automates operations."
    ),
    Archetype.INTERNAL: TermEntry(
        "Internal / Marketing", "Internal initiative or marketing asset."
    ),
}

INTENSITY_LABELS: Dict[IntensityLevel, str] = {
    IntensityLevel.L1: "Validation",
    IntensityLevel.L2: "Traction",
    IntensityLevel.L3: "Scale",
    IntensityLevel.L4: "Dominance",
}

TADS_TERMS: Dict[str, TermEntry] = {
    "scalability": TermEntry("Scalability", "Scales without a linear increase in cost."),
    "integration": TermEntry("Integration", "Connects natively with the ecosystem."),
    "pain_point": TermEntry("Pain point", "Solves a real, immediate pain."),
    "recurring": TermEntry("Recurring", "Continuous billing model."),
    "mvp_speed": TermEntry("Speed to MVP", "Speed of functional validation."),
}

TADS_BAND_COLORS: Dict[TadsBand, str] = {
    TadsBand.STRONG: "#10b981",
    TadsBand.MODERATE: "#eab308",
    TadsBand.WEAK: "#ef4444",
}

# Chart axes run over [0, 6]; the quadrant split sits at 3 on both
MATRIX_AXIS_DOMAIN = (0, 6)
