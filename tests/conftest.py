# tests/conftest.py

"""
Pytest Fixtures - shared app client and opportunity payloads.

Redis caching is switched off before the app is imported so tests never
depend on a running Redis; cache behaviour is covered with mocks in
test_redis_cache.py.
"""

import os

os.environ["CACHE_ENABLED"] = "false"
os.environ.setdefault("LOG_LEVEL", "WARNING")
os.environ.setdefault("LOG_FORMAT", "console")

import pytest
from fastapi.testclient import TestClient

from shinko.core.dependencies import get_opportunity_repository
from shinko.main import app


# =============================================================================
# FASTAPI TEST CLIENT FIXTURE
# =============================================================================

@pytest.fixture(scope="module")
def client():
    """Create a TestClient for FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture(autouse=True)
def clean_store():
    """Every test starts with an empty opportunity store."""
    repo = get_opportunity_repository()
    repo.clear()
    yield repo
    repo.clear()


# =============================================================================
# OPPORTUNITY PAYLOAD FIXTURES
# =============================================================================

@pytest.fixture
def sample_organization_id():
    return 7


@pytest.fixture
def scenario_payload(sample_organization_id):
    """velocity=4, viability=5, revenue=2 with three flags set: 38.5 / 6 / Sprint."""
    return {
        "title": "Clinic scheduling SaaS",
        "description": "Online booking for small clinics",
        "organization_id": sample_organization_id,
        "archetype": "SaaS Verticalizado",
        "intensity": 2,
        "velocity": 4,
        "viability": 5,
        "revenue": 2,
        "tads": {
            "scalability": True,
            "integration": True,
            "painPoint": False,
            "recurring": False,
            "mvpSpeed": True,
        },
    }


@pytest.fixture
def discard_payload(sample_organization_id):
    """Low on both axes with every flag set."""
    return {
        "title": "Hardware kiosk",
        "organization_id": sample_organization_id,
        "velocity": 1,
        "viability": 2,
        "revenue": 5,
        "tads": {
            "scalability": True,
            "integration": True,
            "pain_point": True,
            "recurring": True,
            "mvp_speed": True,
        },
    }


@pytest.fixture
def invalid_velocity_payload(sample_organization_id):
    return {
        "title": "Out of range",
        "organization_id": sample_organization_id,
        "velocity": 7,
    }


@pytest.fixture
def legacy_rows():
    """Rows as exported by the web client, including an out-of-range rating."""
    return [
        {
            "id": "a1000000-0000-0000-0000-000000000001",
            "title": "Legacy CRM add-on",
            "organizationId": 7,
            "velocity": 5,
            "viability": 4,
            "revenue": 3,
            "prioScore": 4.15,
            "tads": {"scalability": True, "painPoint": True},
            "status": "Active",
            "createdAt": "2024-03-01T12:00:00+00:00",
        },
        {
            "id": "a1000000-0000-0000-0000-000000000002",
            "title": "Assistant auto-filled idea",
            "organizationId": 7,
            "velocity": 8,
            "viability": 2,
            "revenue": 1,
            "tads": {},
            "status": "Future",
            "createdAt": "2024-03-02T12:00:00+00:00",
        },
    ]
