"""
Opportunity Router - Shinko OS
shinko/routers/opportunities.py

Opportunity CRUD. Every write goes through the repository, which
recomputes the PRIO-6 / T.A.D.S. / RDE snapshot. Reads are cached in Redis.
"""

import math
import time
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.exceptions import HTTPException, RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from shinko.config import settings
from shinko.core.dependencies import get_opportunity_repository
from shinko.core.exceptions import (
    EntityDeletedException,
    EntityNotFoundException,
    OrganizationMismatchException,
)
from shinko.models.enumerations import (
    Archetype,
    IntensityLevel,
    ProjectStatus,
    RDEStatus,
    RdeQuadrant,
    TadsBand,
)
from shinko.models.opportunity import (
    Opportunity,
    OpportunityCreate,
    OpportunityUpdate,
    TadsCriteria,
)
from shinko.models.terminology import QUADRANT_LEGEND
from shinko.repositories.opportunity_repository import OpportunityRepository
from shinko.scoring.status_advisor import tads_band
from shinko.services.cache import TTL_OPPORTUNITY, get_cache
from shinko.services.redis_cache import opportunity_key, opportunity_list_key
from shinko.services.matrix import MatrixFeed, build_matrix_feed

logger = structlog.get_logger(__name__)

router = APIRouter(prefix=settings.API_V1_PREFIX, tags=["Opportunities"])



#  Validation Error Messages


FIELD_MESSAGES = {
    "title": {
        "missing": "Opportunity title is required",
        "string_too_short": "Opportunity title cannot be empty",
        "string_too_long": "Opportunity title must not exceed 255 characters",
        "string_type": "Opportunity title must be a string",
    },
    "velocity": {
        "int_type": "Velocity must be an integer",
        "int_parsing": "Velocity must be a valid integer",
        "int_from_float": "Velocity must be a whole number",
    },
    "viability": {
        "int_type": "Viability must be an integer",
        "int_parsing": "Viability must be a valid integer",
        "int_from_float": "Viability must be a whole number",
    },
    "revenue": {
        "int_type": "Revenue must be an integer",
        "int_parsing": "Revenue must be a valid integer",
        "int_from_float": "Revenue must be a whole number",
    },
    "archetype": {
        "enum": "Archetype must be one of: " + ", ".join(a.value for a in Archetype),
    },
    "intensity": {
        "enum": "Intensity must be a level between 1 and 4",
    },
}

DEFAULT_MESSAGES = {
    "missing": "Field '{field}' is required",
    "string_too_short": "Field '{field}' is too short",
    "string_too_long": "Field '{field}' is too long",
    "less_than_equal": "Field '{field}' exceeds maximum allowed value",
    "greater_than_equal": "Field '{field}' is below minimum allowed value",
    "uuid_parsing": "Field '{field}' must be a valid UUID",
    "string_type": "Field '{field}' must be a string",
    "bool_type": "Field '{field}' must be a boolean",
    "bool_parsing": "Field '{field}' must be true or false",
    "int_type": "Field '{field}' must be an integer",
    "int_parsing": "Field '{field}' must be a valid integer",
    "enum": "Field '{field}' has an unsupported value",
    "json_invalid": "Malformed JSON request body",
}


def get_validation_message(field: str, error_type: str) -> str:
    leaf = field.split(".")[-1]
    if leaf in FIELD_MESSAGES:
        for key in FIELD_MESSAGES[leaf]:
            if key in error_type:
                return FIELD_MESSAGES[leaf][key]
    for key, template in DEFAULT_MESSAGES.items():
        if key in error_type:
            return template.format(field=field)
    return f"Invalid value for field '{field}'"


def _error_body(error_code: str, message: str, details: Optional[dict] = None) -> dict:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content=_error_body("VALIDATION_ERROR", "Request validation failed"),
        )
    err = errors[0]
    error_type = err.get("type", "")
    loc = err.get("loc", [])
    if "json_invalid" in error_type:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=_error_body("INVALID_REQUEST", "Malformed JSON request body"),
        )
    field = ".".join(str(l) for l in loc if l not in ("body", "query", "path"))
    if error_type == "value_error":
        # Raised by our own validators; their text is already user-facing
        message = str(err.get("ctx", {}).get("error", "")) or err.get("msg", "")
    else:
        message = get_validation_message(field, error_type)
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body(
            "VALIDATION_ERROR",
            message,
            {"field": field, "type": error_type} if field else None,
        ),
    )



#  Schemas


class ErrorResponse(BaseModel):
    error_code: str
    message: str
    details: Optional[dict] = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class CacheInfo(BaseModel):
    """Cache metadata for debugging - shows if Redis is working."""
    hit: bool
    source: str
    key: str
    latency_ms: float
    ttl_seconds: int


class OpportunityResponse(BaseModel):
    id: UUID
    organization_id: int
    client_id: Optional[str] = None
    title: str
    description: str
    rde: RDEStatus
    archetype: Archetype
    intensity: IntensityLevel
    velocity: float
    viability: float
    revenue: float
    tads: TadsCriteria
    prio_score: float
    tads_score: int
    tads_band: TadsBand
    rde_quadrant: RdeQuadrant
    quadrant_color: str
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime
    cache: Optional[CacheInfo] = None


class PaginatedOpportunityResponse(BaseModel):
    items: list[OpportunityResponse]
    total: int
    page: int
    page_size: int
    total_pages: int
    cache: Optional[CacheInfo] = None



#  Exception Helpers


def raise_error(status_code: int, error_code: str, message: str):
    raise HTTPException(
        status_code=status_code,
        detail=ErrorResponse(error_code=error_code, message=message).model_dump(mode="json"),
    )

def raise_opportunity_not_found():
    raise_error(status.HTTP_404_NOT_FOUND, "OPPORTUNITY_NOT_FOUND", "Opportunity not found")

def raise_opportunity_deleted():
    raise_error(status.HTTP_410_GONE, "OPPORTUNITY_DELETED", "Opportunity has been deleted")

def raise_organization_mismatch():
    raise_error(
        status.HTTP_403_FORBIDDEN,
        "ORGANIZATION_MISMATCH",
        "Opportunity belongs to another organization",
    )


def _translate(exc: Exception):
    if isinstance(exc, EntityNotFoundException):
        raise_opportunity_not_found()
    if isinstance(exc, EntityDeletedException):
        raise_opportunity_deleted()
    if isinstance(exc, OrganizationMismatchException):
        raise_organization_mismatch()
    raise exc



#  Cache Helpers


def create_cache_info(hit: bool, key: str, latency_ms: float, ttl: int) -> CacheInfo:
    return CacheInfo(
        hit=hit,
        source="redis" if hit else "store",
        key=key,
        latency_ms=round(latency_ms, 3),
        ttl_seconds=ttl,
    )


def invalidate_opportunity_cache(opportunity_id: Optional[UUID] = None) -> None:
    """Invalidate opportunity cache entries in Redis."""
    cache = get_cache()
    if cache:
        try:
            cache.invalidate_opportunity(opportunity_id)
        except Exception as e:
            logger.warning("cache_invalidation_failed", error=str(e))



#  Helper Functions


def to_response(record: Opportunity, cache_info: Optional[CacheInfo] = None) -> OpportunityResponse:
    return OpportunityResponse(
        id=record.id,
        organization_id=record.organization_id,
        client_id=record.client_id,
        title=record.title,
        description=record.description,
        rde=record.rde,
        archetype=record.archetype,
        intensity=record.intensity,
        velocity=record.velocity,
        viability=record.viability,
        revenue=record.revenue,
        tads=record.tads,
        prio_score=record.prio_score,
        tads_score=record.tads_score,
        tads_band=tads_band(record.tads_score),
        rde_quadrant=record.rde_quadrant,
        quadrant_color=QUADRANT_LEGEND[record.rde_quadrant].hex,
        status=record.status,
        created_at=record.created_at,
        updated_at=record.updated_at,
        cache=cache_info,
    )



#  Routes


@router.post(
    "/opportunities",
    response_model=OpportunityResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Create an opportunity",
    description="Validates the ratings, scores PRIO-6 / T.A.D.S. / RDE and stores the record. "
                "When status is omitted the suggested status is used.",
)
async def create_opportunity(
    payload: OpportunityCreate,
    repo: OpportunityRepository = Depends(get_opportunity_repository),
) -> OpportunityResponse:
    record = repo.create(payload)
    invalidate_opportunity_cache()
    return to_response(record)


@router.get(
    "/opportunities",
    response_model=PaginatedOpportunityResponse,
    summary="List opportunities",
    description="Active opportunities, newest first. Cached for 5 minutes.",
)
async def list_opportunities(
    organization_id: Optional[int] = Query(None, description="Tenant filter"),
    quadrant: Optional[RdeQuadrant] = Query(None),
    status_filter: Optional[ProjectStatus] = Query(None, alias="status"),
    page: int = Query(1, ge=1),
    page_size: int = Query(20, ge=1, le=100),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
) -> PaginatedOpportunityResponse:
    cache_key = opportunity_list_key(
        organization_id, quadrant, status_filter, page, page_size
    )
    cache = get_cache()
    start_time = time.time()

    # 1. Try cache first
    if cache:
        try:
            cached = cache.get(cache_key, PaginatedOpportunityResponse)
            if cached:
                latency = (time.time() - start_time) * 1000
                cached.cache = create_cache_info(True, cache_key, latency, TTL_OPPORTUNITY)
                return cached
        except Exception as e:
            logger.warning("cache_read_failed", key=cache_key, error=str(e))

    # 2. Cache miss - read from the store
    records = repo.list(organization_id=organization_id, quadrant=quadrant, status=status_filter)
    total = len(records)
    offset = (page - 1) * page_size
    window = records[offset:offset + page_size]

    latency = (time.time() - start_time) * 1000
    response = PaginatedOpportunityResponse(
        items=[to_response(r) for r in window],
        total=total,
        page=page,
        page_size=page_size,
        total_pages=math.ceil(total / page_size) if total else 0,
        cache=create_cache_info(False, cache_key, latency, TTL_OPPORTUNITY),
    )

    # 3. Store in cache
    if cache:
        try:
            cache.set(cache_key, response, TTL_OPPORTUNITY)
        except Exception as e:
            logger.warning("cache_write_failed", key=cache_key, error=str(e))

    return response


@router.get(
    "/opportunities/matrix",
    response_model=MatrixFeed,
    summary="RDE matrix chart feed",
    description="Velocity x viability points with PRIO-6 and quadrant colour.",
)
async def get_opportunity_matrix(
    organization_id: Optional[int] = Query(None, description="Tenant filter"),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
) -> MatrixFeed:
    return build_matrix_feed(repo.list(organization_id=organization_id))


@router.get(
    "/opportunities/{opportunity_id}",
    response_model=OpportunityResponse,
    summary="Get an opportunity",
    description="Returns one opportunity with its cached scores. Cached for 5 minutes.",
)
async def get_opportunity(
    opportunity_id: UUID,
    organization_id: Optional[int] = Query(None, description="Caller's tenant"),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
) -> OpportunityResponse:
    cache_key = opportunity_key(opportunity_id)
    cache = get_cache()
    start_time = time.time()

    if cache:
        try:
            cached = cache.get(cache_key, OpportunityResponse)
            if cached and (organization_id is None or cached.organization_id == organization_id):
                latency = (time.time() - start_time) * 1000
                cached.cache = create_cache_info(True, cache_key, latency, TTL_OPPORTUNITY)
                return cached
        except Exception as e:
            logger.warning("cache_read_failed", key=cache_key, error=str(e))

    try:
        record = repo.get(opportunity_id, organization_id=organization_id)
    except (EntityNotFoundException, EntityDeletedException, OrganizationMismatchException) as e:
        _translate(e)

    latency = (time.time() - start_time) * 1000
    response = to_response(record, create_cache_info(False, cache_key, latency, TTL_OPPORTUNITY))

    if cache:
        try:
            cache.set(cache_key, response, TTL_OPPORTUNITY)
        except Exception as e:
            logger.warning("cache_write_failed", key=cache_key, error=str(e))

    return response


@router.patch(
    "/opportunities/{opportunity_id}",
    response_model=OpportunityResponse,
    summary="Update an opportunity",
    description="Partial update. The PRIO-6 / T.A.D.S. / RDE snapshot is recomputed on every save.",
)
async def update_opportunity(
    opportunity_id: UUID,
    payload: OpportunityUpdate,
    organization_id: Optional[int] = Query(None, description="Caller's tenant"),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
) -> OpportunityResponse:
    try:
        record = repo.update(opportunity_id, payload, organization_id=organization_id)
    except (EntityNotFoundException, EntityDeletedException, OrganizationMismatchException) as e:
        _translate(e)

    invalidate_opportunity_cache(opportunity_id)
    return to_response(record)


@router.delete(
    "/opportunities/{opportunity_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete an opportunity",
    description="Soft delete. Subsequent reads return 410.",
)
async def delete_opportunity(
    opportunity_id: UUID,
    organization_id: Optional[int] = Query(None, description="Caller's tenant"),
    repo: OpportunityRepository = Depends(get_opportunity_repository),
) -> Response:
    try:
        repo.delete(opportunity_id, organization_id=organization_id)
    except (EntityNotFoundException, EntityDeletedException, OrganizationMismatchException) as e:
        _translate(e)

    invalidate_opportunity_cache(opportunity_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
