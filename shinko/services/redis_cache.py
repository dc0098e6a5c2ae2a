"""
Redis Cache - Shinko OS
shinko/services/redis_cache.py

Pydantic-aware Redis wrapper plus the key scheme for cached opportunity
reads. Keys:
    opportunity:{uuid}
    opportunities:list:org:{org}:quadrant:{q}:status:{s}:page:{n}:size:{k}
    scoring:legend
"""
import redis
from typing import Optional, TypeVar, Type
from uuid import UUID

from pydantic import BaseModel

from shinko.config import settings
from shinko.models.enumerations import ProjectStatus, RdeQuadrant

T = TypeVar("T", bound=BaseModel)

OPPORTUNITY_KEY_PREFIX = "opportunity:"
OPPORTUNITY_LIST_KEY_PREFIX = "opportunities:list:"
LEGEND_KEY = "scoring:legend"


def opportunity_key(opportunity_id: UUID) -> str:
    return f"{OPPORTUNITY_KEY_PREFIX}{opportunity_id}"


def opportunity_list_key(
    organization_id: Optional[int],
    quadrant: Optional[RdeQuadrant],
    status: Optional[ProjectStatus],
    page: int,
    page_size: int,
) -> str:
    return (
        f"{OPPORTUNITY_LIST_KEY_PREFIX}org:{organization_id}:"
        f"quadrant:{quadrant.value if quadrant else None}:"
        f"status:{status.value if status else None}:"
        f"page:{page}:size:{page_size}"
    )


class RedisCache:
    def __init__(self, url: Optional[str] = None):
        self.client = redis.Redis.from_url(
            url or settings.REDIS_URL,
            decode_responses=True,
            socket_connect_timeout=5,
        )

    def get(self, key: str, model: Type[T]) -> Optional[T]:
        """Get cached item and deserialize to Pydantic model."""
        data = self.client.get(key)
        if data:
            return model.model_validate_json(data)
        return None

    def set(self, key: str, value: BaseModel, ttl_seconds: int) -> None:
        """Cache Pydantic model with TTL."""
        self.client.setex(key, ttl_seconds, value.model_dump_json())

    def delete(self, key: str) -> None:
        self.client.delete(key)

    def delete_pattern(self, pattern: str) -> None:
        """Invalidate all keys matching pattern."""
        for key in self.client.scan_iter(match=pattern):
            self.client.delete(key)

    def invalidate_opportunity(self, opportunity_id: Optional[UUID] = None) -> None:
        """
        Drop every cached list page and, when given, one cached record.

        Any write changes list membership or order, so list pages always go.
        """
        if opportunity_id is not None:
            self.delete(opportunity_key(opportunity_id))
        self.delete_pattern(f"{OPPORTUNITY_LIST_KEY_PREFIX}*")

    def ping(self) -> bool:
        return bool(self.client.ping())
