"""Service layer: Redis cache and chart feeds."""
