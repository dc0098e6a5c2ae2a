from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator
from uuid import UUID, uuid4
from datetime import datetime, timezone
from typing import Optional

from shinko.config import settings
from shinko.models.enumerations import (
    Archetype,
    IntensityLevel,
    ProjectStatus,
    RDEStatus,
    RdeQuadrant,
)


# Fixed order; persisted records and the creation flow rely on it
TADS_FLAGS = ("scalability", "integration", "pain_point", "recurring", "mvp_speed")

# camelCase names used by records exported from the web client
TADS_FLAG_ALIASES = {
    "scalability": "scalability",
    "integration": "integration",
    "pain_point": "painPoint",
    "recurring": "recurring",
    "mvp_speed": "mvpSpeed",
}

RATING_FIELDS = ("velocity", "viability", "revenue")


class TadsCriteria(BaseModel):
    """
    The five T.A.D.S. validation flags.

    Accepts both snake_case and the camelCase names (painPoint, mvpSpeed)
    found in exported records.
    """

    model_config = ConfigDict(populate_by_name=True)

    scalability: bool = False
    integration: bool = False
    pain_point: bool = Field(
        default=False,
        validation_alias=AliasChoices("pain_point", "painPoint"),
    )
    recurring: bool = False
    mvp_speed: bool = Field(
        default=False,
        validation_alias=AliasChoices("mvp_speed", "mvpSpeed"),
    )

    def true_count(self) -> int:
        return sum(1 for flag in TADS_FLAGS if getattr(self, flag))


class ValuationInput(BaseModel):
    """
    Complete input accepted by the valuation engine.

    Ratings are deliberately unbounded: legacy records may carry values
    outside the 1-5 slider range and must score exactly as before.
    """

    velocity: float
    viability: float
    revenue: float
    tads: TadsCriteria = Field(default_factory=TadsCriteria)


def _check_rating(field_name: str, value: Optional[int]) -> Optional[int]:
    if value is None:
        return value
    if not settings.RATING_MIN <= value <= settings.RATING_MAX:
        raise ValueError(
            f"{field_name.capitalize()} must be between "
            f"{settings.RATING_MIN} and {settings.RATING_MAX}"
        )
    return value


class OpportunityDraft(BaseModel):
    """
    Editing state of an opportunity: every field is optional.

    Used for PATCH payloads and for stateless simulation.
    """

    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    client_id: Optional[str] = None
    organization_id: Optional[int] = None

    rde: Optional[RDEStatus] = None
    archetype: Optional[Archetype] = None
    intensity: Optional[IntensityLevel] = None

    velocity: Optional[int] = None
    viability: Optional[int] = None
    revenue: Optional[int] = None
    tads: Optional[TadsCriteria] = None

    status: Optional[ProjectStatus] = None

    @field_validator("velocity", "viability", "revenue")
    @classmethod
    def validate_rating(cls, value, info):
        return _check_rating(info.field_name, value)

    def to_valuation_input(self, default_rating: Optional[float] = None) -> ValuationInput:
        """
        Complete the draft for scoring.

        Missing ratings fall back to default_rating (DRAFT_RATING_DEFAULT
        when not given); missing flags count as false.
        """
        fallback = settings.DRAFT_RATING_DEFAULT if default_rating is None else default_rating
        return ValuationInput(
            velocity=self.velocity if self.velocity is not None else fallback,
            viability=self.viability if self.viability is not None else fallback,
            revenue=self.revenue if self.revenue is not None else fallback,
            tads=self.tads or TadsCriteria(),
        )


class OpportunityCreate(OpportunityDraft):
    """Payload for creating an opportunity. Defaults mirror the creation wizard."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str = ""

    rde: RDEStatus = RDEStatus.WARM
    archetype: Archetype = Archetype.SAAS_ENTRY
    intensity: IntensityLevel = IntensityLevel.L1

    velocity: int = 3
    viability: int = 3
    revenue: int = 3
    tads: TadsCriteria = Field(default_factory=TadsCriteria)


class OpportunityUpdate(OpportunityDraft):
    """Partial update payload."""
    pass


class Opportunity(BaseModel):
    """
    Persisted opportunity record.

    prio_score, tads_score and rde_quadrant are a cached snapshot,
    overwritten on every save.
    """

    id: UUID = Field(default_factory=uuid4)
    organization_id: int
    client_id: Optional[str] = None

    title: str
    description: str = ""

    rde: RDEStatus = RDEStatus.WARM
    archetype: Archetype = Archetype.SAAS_ENTRY
    intensity: IntensityLevel = IntensityLevel.L1

    velocity: float
    viability: float
    revenue: float
    tads: TadsCriteria = Field(default_factory=TadsCriteria)

    prio_score: float
    tads_score: int
    rde_quadrant: RdeQuadrant

    status: ProjectStatus = ProjectStatus.FUTURE
    is_deleted: bool = False

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    def to_valuation_input(self) -> ValuationInput:
        return ValuationInput(
            velocity=self.velocity,
            viability=self.viability,
            revenue=self.revenue,
            tads=self.tads,
        )
