"""
Opportunity Repository - Shinko OS
shinko/repositories/opportunity_repository.py

In-process, tenant-scoped store for opportunity records. Every create and
update recomputes the cached PRIO-6 / T.A.D.S. / RDE snapshot from the
stored ratings and flags and overwrites it in full.
"""

from __future__ import annotations

import threading
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional
from uuid import UUID

import structlog

from shinko.core.exceptions import (
    EntityDeletedException,
    EntityNotFoundException,
    OrganizationMismatchException,
)
from shinko.config import settings
from shinko.models.enumerations import ProjectStatus, RdeQuadrant
from shinko.models.opportunity import (
    Opportunity,
    OpportunityCreate,
    OpportunityDraft,
    RATING_FIELDS,
    TadsCriteria,
)
from shinko.scoring.prio_scorer import compute_prio_score
from shinko.scoring.rde_classifier import classify_rde_quadrant
from shinko.scoring.tads_scorer import compute_tads_score
from shinko.scoring.valuation_service import ValuationService

logger = structlog.get_logger(__name__)

ENTITY_TYPE = "Opportunity"

# Keys used by records exported from the web client
CAMEL_CASE_KEYS = {
    "organizationId": "organization_id",
    "clientId": "client_id",
    "prioScore": "prio_score",
    "tadsScore": "tads_score",
    "rdeQuadrant": "rde_quadrant",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
    "isDeleted": "is_deleted",
}


def normalize_row(row: Dict[str, Any]) -> Dict[str, Any]:
    """
    Rename camelCase export keys to record field names.

    A rating that is missing or null falls back to DRAFT_RATING_DEFAULT,
    the same fallback the creation flow applies to an untouched slider.
    """
    record = {CAMEL_CASE_KEYS.get(k, k): v for k, v in row.items()}
    for field in RATING_FIELDS:
        if record.get(field) is None:
            record[field] = settings.DRAFT_RATING_DEFAULT
    return record


class OpportunityRepository:
    """
    Repository for opportunity records.

    Writes are serialised with a lock; reads return copies so callers
    never mutate stored records.
    """

    def __init__(self, valuation: Optional[ValuationService] = None):
        self.valuation = valuation or ValuationService()
        self._records: Dict[UUID, Opportunity] = {}
        self._lock = threading.Lock()

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def create(self, payload: OpportunityCreate) -> Opportunity:
        """Value and store a new opportunity."""
        inputs = payload.to_valuation_input()
        result = self.valuation.evaluate(inputs)

        record = Opportunity(
            organization_id=payload.organization_id or settings.DEFAULT_ORGANIZATION_ID,
            client_id=payload.client_id,
            title=payload.title,
            description=payload.description,
            rde=payload.rde,
            archetype=payload.archetype,
            intensity=payload.intensity,
            velocity=inputs.velocity,
            viability=inputs.viability,
            revenue=inputs.revenue,
            tads=inputs.tads,
            status=payload.status or result.suggested_status,
            **result.snapshot(),
        )

        with self._lock:
            self._records[record.id] = record

        logger.info(
            "opportunity_created",
            opportunity_id=str(record.id),
            organization_id=record.organization_id,
            prio_score=record.prio_score,
            tads_score=record.tads_score,
            rde_quadrant=record.rde_quadrant.value,
        )
        return record.model_copy(deep=True)

    def update(
        self,
        opportunity_id: UUID,
        draft: OpportunityDraft,
        organization_id: Optional[int] = None,
    ) -> Opportunity:
        """
        Merge a partial draft over the stored record and rescore it.

        Only fields present in the draft change. Flags merge one by one,
        so sending {"tads": {"recurring": true}} leaves the other flags as
        they were. The snapshot is recomputed even when no rating changed.
        """
        with self._lock:
            current = self._get_live(opportunity_id, organization_id)

            changes = draft.model_dump(
                exclude_unset=True, exclude_none=True, exclude={"tads", "organization_id"}
            )
            if draft.tads is not None:
                merged = current.tads.model_dump()
                merged.update(draft.tads.model_dump(include=draft.tads.model_fields_set))
                changes["tads"] = TadsCriteria(**merged)

            updated = current.model_copy(update=changes)
            result = self.valuation.evaluate(updated.to_valuation_input())
            updated = updated.model_copy(
                update={**result.snapshot(), "updated_at": datetime.now(timezone.utc)}
            )
            self._records[opportunity_id] = updated

        logger.info(
            "opportunity_updated",
            opportunity_id=str(opportunity_id),
            fields=sorted(changes),
            prio_score=updated.prio_score,
            tads_score=updated.tads_score,
            rde_quadrant=updated.rde_quadrant.value,
        )
        return updated.model_copy(deep=True)

    def delete(self, opportunity_id: UUID, organization_id: Optional[int] = None) -> None:
        """Soft-delete an opportunity."""
        with self._lock:
            current = self._get_live(opportunity_id, organization_id)
            self._records[opportunity_id] = current.model_copy(
                update={"is_deleted": True, "updated_at": datetime.now(timezone.utc)}
            )
        logger.info("opportunity_deleted", opportunity_id=str(opportunity_id))

    def load_rows(self, rows: Iterable[Dict[str, Any]]) -> int:
        """
        Import persisted rows.

        A stored prio_score is kept as-is so legacy snapshots are not
        silently rewritten; it is computed only when absent. tads_score and
        rde_quadrant are always derived from the stored flags and ratings.

        All rows are validated before any is stored: a row that fails
        validation raises and the store is left untouched.
        """
        records = {}
        for raw in rows:
            row = normalize_row(raw)
            row.setdefault("organization_id", settings.DEFAULT_ORGANIZATION_ID)
            tads = TadsCriteria.model_validate(row.get("tads") or {})
            if row.get("prio_score") is None:
                row["prio_score"] = compute_prio_score(
                    row["velocity"], row["viability"], row["revenue"]
                )
            row["tads"] = tads
            row["tads_score"] = compute_tads_score(tads)
            row["rde_quadrant"] = classify_rde_quadrant(row["velocity"], row["viability"])
            record = Opportunity.model_validate(row)
            records[record.id] = record

        with self._lock:
            self._records.update(records)
        logger.info("opportunities_loaded", count=len(records))
        return len(records)

    def clear(self) -> None:
        with self._lock:
            self._records.clear()

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get(self, opportunity_id: UUID, organization_id: Optional[int] = None) -> Opportunity:
        with self._lock:
            return self._get_live(opportunity_id, organization_id).model_copy(deep=True)

    def list(
        self,
        organization_id: Optional[int] = None,
        quadrant: Optional[RdeQuadrant] = None,
        status: Optional[ProjectStatus] = None,
    ) -> List[Opportunity]:
        """Active opportunities, newest first, optionally filtered."""
        with self._lock:
            records = [r for r in self._records.values() if not r.is_deleted]

        if organization_id is not None:
            records = [r for r in records if r.organization_id == organization_id]
        if quadrant is not None:
            records = [r for r in records if r.rde_quadrant == quadrant]
        if status is not None:
            records = [r for r in records if r.status == status]

        records.sort(key=lambda r: r.created_at, reverse=True)
        return [r.model_copy(deep=True) for r in records]

    def exists(self, opportunity_id: UUID) -> bool:
        """Check if an opportunity exists (regardless of deleted status)."""
        with self._lock:
            return opportunity_id in self._records

    def export_rows(self, organization_id: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Dump records as JSON-ready rows for backup or rescoring.

        Soft-deleted records are included with is_deleted=True so that
        load_rows() restores them as deleted.
        """
        with self._lock:
            records = list(self._records.values())
        return [
            r.model_dump(mode="json")
            for r in records
            if organization_id is None or r.organization_id == organization_id
        ]

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _get_live(self, opportunity_id: UUID, organization_id: Optional[int]) -> Opportunity:
        record = self._records.get(opportunity_id)
        if record is None:
            raise EntityNotFoundException(ENTITY_TYPE, str(opportunity_id))
        if record.is_deleted:
            raise EntityDeletedException(ENTITY_TYPE, str(opportunity_id))
        if organization_id is not None and record.organization_id != organization_id:
            raise OrganizationMismatchException(ENTITY_TYPE, str(opportunity_id), organization_id)
        return record
