"""
Recompute the cached PRIO-6 / T.A.D.S. / RDE snapshot of exported records.
Reports records whose stored PRIO-6 differs from the recomputed value.

Usage:
    python -m shinko.scripts.rescore_export export.json --dry-run
    python -m shinko.scripts.rescore_export export.json -o rescored.json
    python -m shinko.scripts.rescore_export export.json --clamp --dry-run
"""

import argparse
import json
import math
import sys
from pathlib import Path
from typing import Any, Dict, List, Tuple

import structlog

from shinko.core.logging import configure_logging
from shinko.models.opportunity import TadsCriteria, ValuationInput
from shinko.repositories.opportunity_repository import normalize_row
from shinko.scoring.valuation_service import ValuationService

logger = structlog.get_logger(__name__)

# Stored snapshots were rounded for display; smaller gaps are not drift
DRIFT_TOLERANCE = 0.005


def rescore_row(row: Dict[str, Any], service: ValuationService) -> Tuple[Dict[str, Any], float]:
    """
    Rescore one exported record.

    Returns:
        (rescored row, absolute PRIO-6 drift against the stored value;
        NaN when the row carried no stored value)
    """
    record = normalize_row(row)
    tads = TadsCriteria.model_validate(record.get("tads") or {})
    result = service.evaluate(
        ValuationInput(
            velocity=record["velocity"],
            viability=record["viability"],
            revenue=record["revenue"],
            tads=tads,
        )
    )

    stored = record.get("prio_score")
    drift = abs(float(stored) - result.prio_score) if stored is not None else math.nan

    record["tads"] = tads.model_dump()
    record.update(
        prio_score=result.prio_score,
        tads_score=result.tads_score,
        rde_quadrant=result.rde_quadrant.value,
    )
    return record, drift


def rescore_rows(rows: List[Dict[str, Any]], clamp: bool = False) -> Tuple[List[Dict[str, Any]], int]:
    """Rescore every row; returns (rows, number of rows whose PRIO-6 drifted)."""
    service = ValuationService(clamp=clamp)
    rescored = []
    drifted = 0
    for row in rows:
        new_row, drift = rescore_row(row, service)
        if not math.isnan(drift) and drift > DRIFT_TOLERANCE:
            drifted += 1
            logger.info(
                "prio_drift",
                opportunity_id=str(new_row.get("id")),
                stored=row.get("prioScore", row.get("prio_score")),
                recomputed=new_row["prio_score"],
            )
        rescored.append(new_row)
    return rescored, drifted


def main(argv: List[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Recompute opportunity score snapshots")
    parser.add_argument("export", help="JSON array of exported opportunity records")
    parser.add_argument("-o", "--output", help="Where to write rescored records (default: overwrite input)")
    parser.add_argument("--dry-run", action="store_true", help="Report drift without writing")
    parser.add_argument("--clamp", action="store_true", help="Clamp ratings to the slider range first")
    args = parser.parse_args(argv)

    configure_logging(fmt="console")

    path = Path(args.export)
    rows = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(rows, list):
        logger.error("export_not_a_list", path=str(path))
        return 1

    rescored, drifted = rescore_rows(rows, clamp=args.clamp)
    logger.info("rescore_summary", total=len(rescored), drifted=drifted, clamp=args.clamp)

    if args.dry_run:
        return 0

    out = Path(args.output) if args.output else path
    out.write_text(json.dumps(rescored, indent=2, default=str), encoding="utf-8")
    logger.info("rescore_written", path=str(out))
    return 0


if __name__ == "__main__":
    sys.exit(main())
