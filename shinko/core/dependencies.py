"""
Dependencies - Shinko OS
shinko/core/dependencies.py

FastAPI dependency injection for the repository and valuation service.
"""

from functools import lru_cache

from shinko.repositories.opportunity_repository import OpportunityRepository
from shinko.scoring.valuation_service import ValuationService


@lru_cache()
def get_valuation_service() -> ValuationService:
    """Get cached ValuationService instance."""
    return ValuationService()


@lru_cache()
def get_opportunity_repository() -> OpportunityRepository:
    """Get cached OpportunityRepository instance."""
    return OpportunityRepository(valuation=get_valuation_service())
