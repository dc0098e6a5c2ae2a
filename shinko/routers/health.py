"""
Health Check Router - Shinko OS
shinko/routers/health.py

Reports service status and Redis connectivity.
"""
from datetime import datetime, timezone
from typing import Dict

import redis
from fastapi import APIRouter, status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from shinko.config import settings
from shinko.services.cache import get_cache

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str
    dependencies: Dict[str, str]


def check_redis() -> str:
    """Redis is optional: a missing cache degrades, it does not fail."""
    if not settings.CACHE_ENABLED:
        return "disabled"
    cache = get_cache()
    if cache is None:
        return "unavailable"
    try:
        cache.ping()
    except (redis.RedisError, ConnectionError) as e:
        return f"unhealthy: {e}"
    return "healthy"


@router.get("/health", response_model=HealthResponse, summary="Service health")
async def health_check():
    dependencies = {"engine": "healthy", "redis": check_redis()}
    overall = "healthy" if dependencies["redis"] in ("healthy", "disabled") else "degraded"
    body = HealthResponse(
        status=overall,
        timestamp=datetime.now(timezone.utc),
        version=settings.APP_VERSION,
        environment=settings.APP_ENV,
        dependencies=dependencies,
    )
    return JSONResponse(status_code=status.HTTP_200_OK, content=body.model_dump(mode="json"))
