# tests/test_rescore_export.py

"""
Rescore Script Tests - snapshot recomputation over exported records
"""

import json

import pytest

from shinko.scripts.rescore_export import main, rescore_rows


class TestRescoreRows:

    def test_stale_snapshot_counted_as_drift(self, legacy_rows):
        rescored, drifted = rescore_rows(legacy_rows)
        assert drifted == 1
        assert rescored[0]["prio_score"] == pytest.approx(41.5)
        assert rescored[0]["tads_score"] == 4
        assert rescored[0]["rde_quadrant"] == "sprint_attack"

    def test_missing_snapshot_is_not_drift(self, legacy_rows):
        rescored, drifted = rescore_rows(legacy_rows[1:])
        assert drifted == 0
        assert rescored[0]["prio_score"] == pytest.approx(41.5)
        assert rescored[0]["rde_quadrant"] == "mvp_partnership"

    def test_rounding_within_tolerance(self):
        row = {"id": "x", "velocity": 4, "viability": 5, "revenue": 2, "prioScore": 38.501}
        _, drifted = rescore_rows([row])
        assert drifted == 0

    def test_row_missing_ratings_uses_default(self, legacy_rows):
        rows = legacy_rows + [{"id": "x", "title": "no ratings", "prioScore": 10.0}]
        rescored, drifted = rescore_rows(rows)
        assert len(rescored) == 3
        assert (rescored[2]["velocity"], rescored[2]["viability"], rescored[2]["revenue"]) == (1, 1, 1)
        assert rescored[2]["prio_score"] == pytest.approx(10.0)
        assert drifted == 1

    def test_clamp_option(self, legacy_rows):
        rescored, _ = rescore_rows(legacy_rows[1:], clamp=True)
        assert rescored[0]["prio_score"] == pytest.approx(29.5)

    def test_flags_written_snake_case(self, legacy_rows):
        rescored, _ = rescore_rows(legacy_rows[:1])
        assert rescored[0]["tads"]["pain_point"] is True
        assert "organization_id" in rescored[0]


class TestMain:

    @pytest.fixture
    def export_file(self, tmp_path, legacy_rows):
        path = tmp_path / "export.json"
        path.write_text(json.dumps(legacy_rows), encoding="utf-8")
        return path

    def test_dry_run_leaves_file(self, export_file):
        before = export_file.read_text(encoding="utf-8")
        assert main([str(export_file), "--dry-run"]) == 0
        assert export_file.read_text(encoding="utf-8") == before

    def test_writes_output(self, export_file, tmp_path):
        out = tmp_path / "rescored.json"
        assert main([str(export_file), "-o", str(out)]) == 0
        rows = json.loads(out.read_text(encoding="utf-8"))
        assert [r["prio_score"] for r in rows] == pytest.approx([41.5, 41.5])

    def test_rejects_non_list(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text('{"velocity": 3}', encoding="utf-8")
        assert main([str(path), "--dry-run"]) == 1
