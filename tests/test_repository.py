# tests/test_repository.py

"""
Opportunity Repository Tests - scoring on write, partial updates,
soft delete, tenant checks and legacy imports.
"""

from uuid import UUID, uuid4

import pytest
from pydantic import ValidationError

from shinko.core.exceptions import (
    EntityDeletedException,
    EntityNotFoundException,
    OrganizationMismatchException,
)
from shinko.models.enumerations import ProjectStatus, RdeQuadrant
from shinko.models.opportunity import OpportunityCreate, OpportunityUpdate
from shinko.repositories.opportunity_repository import OpportunityRepository, normalize_row
from shinko.scoring.valuation_service import ValuationService


@pytest.fixture
def repo():
    return OpportunityRepository(valuation=ValuationService(clamp=False))


@pytest.fixture
def created(repo, scenario_payload):
    return repo.create(OpportunityCreate.model_validate(scenario_payload))


class TestCreate:

    def test_snapshot_written(self, created):
        assert created.prio_score == pytest.approx(38.5)
        assert created.tads_score == 6
        assert created.rde_quadrant == RdeQuadrant.SPRINT_ATTACK

    def test_suggested_status_used_when_omitted(self, created):
        assert created.status == ProjectStatus.NEGOTIATION

    def test_explicit_status_kept(self, repo, scenario_payload):
        scenario_payload["status"] = "Frozen"
        record = repo.create(OpportunityCreate.model_validate(scenario_payload))
        assert record.status == ProjectStatus.FROZEN

    def test_default_organization(self, repo):
        record = repo.create(OpportunityCreate(title="No tenant"))
        assert record.organization_id == 3

    def test_returned_record_is_a_copy(self, repo, created):
        created.title = "changed"
        assert repo.get(created.id).title == "Clinic scheduling SaaS"


class TestUpdate:

    def test_rating_change_rescores(self, repo, created):
        updated = repo.update(created.id, OpportunityUpdate(velocity=1, viability=2))
        # (1*.4 + 2*.35 + 2*.25) * 10
        assert updated.prio_score == pytest.approx(16.0)
        assert updated.rde_quadrant == RdeQuadrant.DISCARD_HOLD
        assert updated.tads_score == 6

    def test_flags_merge_one_by_one(self, repo, created):
        updated = repo.update(
            created.id, OpportunityUpdate.model_validate({"tads": {"recurring": True}})
        )
        assert updated.tads.scalability is True
        assert updated.tads.mvp_speed is True
        assert updated.tads.recurring is True
        assert updated.tads_score == 8

    def test_flag_can_be_cleared(self, repo, created):
        updated = repo.update(
            created.id, OpportunityUpdate.model_validate({"tads": {"mvpSpeed": False}})
        )
        assert updated.tads.mvp_speed is False
        assert updated.tads_score == 4

    def test_text_only_update_keeps_scores(self, repo, created):
        updated = repo.update(created.id, OpportunityUpdate(title="Renamed"))
        assert updated.title == "Renamed"
        assert updated.prio_score == pytest.approx(38.5)
        assert updated.updated_at >= created.updated_at

    def test_status_not_rederived(self, repo, created):
        updated = repo.update(created.id, OpportunityUpdate(velocity=1, viability=1, revenue=1))
        assert updated.status == ProjectStatus.NEGOTIATION

    def test_unknown_id(self, repo):
        with pytest.raises(EntityNotFoundException):
            repo.update(uuid4(), OpportunityUpdate(title="x"))

    def test_wrong_organization(self, repo, created):
        with pytest.raises(OrganizationMismatchException):
            repo.update(created.id, OpportunityUpdate(title="x"), organization_id=99)


class TestDelete:

    def test_soft_delete(self, repo, created):
        repo.delete(created.id)
        assert repo.exists(created.id)
        with pytest.raises(EntityDeletedException):
            repo.get(created.id)

    def test_deleted_hidden_from_list(self, repo, created):
        repo.delete(created.id)
        assert repo.list() == []

    def test_delete_twice(self, repo, created):
        repo.delete(created.id)
        with pytest.raises(EntityDeletedException):
            repo.delete(created.id)


class TestList:

    def test_filters(self, repo, scenario_payload, discard_payload):
        repo.create(OpportunityCreate.model_validate(scenario_payload))
        repo.create(OpportunityCreate.model_validate(discard_payload))
        repo.create(OpportunityCreate(title="Other tenant", organization_id=11))

        assert len(repo.list()) == 3
        assert len(repo.list(organization_id=7)) == 2
        assert [r.title for r in repo.list(quadrant=RdeQuadrant.DISCARD_HOLD)] == ["Hardware kiosk"]
        assert len(repo.list(status=ProjectStatus.NEGOTIATION)) == 1

    def test_newest_first(self, repo):
        first = repo.create(OpportunityCreate(title="first"))
        second = repo.create(OpportunityCreate(title="second"))
        ids = [r.id for r in repo.list()]
        assert ids.index(second.id) <= ids.index(first.id)


class TestLoadRows:

    def test_camel_case_keys(self):
        row = normalize_row(
            {"prioScore": 1, "organizationId": 2, "title": "t", "velocity": 4, "viability": 5, "revenue": 2}
        )
        assert row == {
            "prio_score": 1,
            "organization_id": 2,
            "title": "t",
            "velocity": 4,
            "viability": 5,
            "revenue": 2,
        }

    def test_missing_ratings_use_draft_default(self):
        row = normalize_row({"title": "t", "velocity": 4, "viability": None})
        assert (row["velocity"], row["viability"], row["revenue"]) == (4, 1, 1)

    def test_row_without_ratings_loads_with_defaults(self, repo):
        loaded = repo.load_rows(
            [
                {"title": "complete", "velocity": 4, "viability": 4, "revenue": 4},
                {"id": "a1000000-0000-0000-0000-000000000009", "title": "no ratings"},
            ]
        )
        assert loaded == 2
        record = repo.get(UUID("a1000000-0000-0000-0000-000000000009"))
        assert (record.velocity, record.viability, record.revenue) == (1, 1, 1)
        assert record.prio_score == pytest.approx(10.0)
        assert record.rde_quadrant == RdeQuadrant.DISCARD_HOLD

    def test_invalid_row_loads_nothing(self, repo):
        with pytest.raises(ValidationError):
            repo.load_rows(
                [
                    {"title": "fine", "velocity": 4, "viability": 4, "revenue": 4},
                    {"velocity": 3, "viability": 3, "revenue": 3},
                ]
            )
        assert repo.list() == []

    def test_export_includes_deleted(self, repo, created):
        repo.delete(created.id)
        rows = repo.export_rows()
        assert [r["is_deleted"] for r in rows] == [True]

        other = OpportunityRepository(valuation=ValuationService(clamp=False))
        other.load_rows(rows)
        with pytest.raises(EntityDeletedException):
            other.get(created.id)

    def test_stored_prio_kept(self, repo, legacy_rows):
        assert repo.load_rows(legacy_rows) == 2
        record = repo.get(UUID("a1000000-0000-0000-0000-000000000001"))
        assert record.prio_score == 4.15
        assert record.tads_score == 4
        assert record.rde_quadrant == RdeQuadrant.SPRINT_ATTACK
        assert record.status == ProjectStatus.ACTIVE

    def test_missing_prio_computed_without_clamping(self, repo, legacy_rows):
        repo.load_rows(legacy_rows)
        record = repo.get(UUID("a1000000-0000-0000-0000-000000000002"))
        assert record.prio_score == pytest.approx(41.5)
        assert record.tads_score == 0
        assert record.rde_quadrant == RdeQuadrant.MVP_PARTNERSHIP

    def test_rescored_on_next_save(self, repo, legacy_rows):
        repo.load_rows(legacy_rows)
        record_id = UUID("a1000000-0000-0000-0000-000000000001")
        updated = repo.update(record_id, OpportunityUpdate(description="touched"))
        # (5*.4 + 4*.35 + 3*.25) * 10
        assert updated.prio_score == pytest.approx(41.5)

    def test_export_rows_round_trip(self, repo, legacy_rows):
        repo.load_rows(legacy_rows)
        rows = repo.export_rows(organization_id=7)
        other = OpportunityRepository(valuation=ValuationService(clamp=False))
        assert other.load_rows(rows) == 2
        assert other.get(UUID("a1000000-0000-0000-0000-000000000001")).prio_score == 4.15
