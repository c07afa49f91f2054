"""Tests for estimated-vs-actual project variance."""

from datetime import date, datetime, timezone

from app.matching_engine.types import CanonicalEntity
from app.project_linker.records import ProjectLinkRecord
from app.project_linker.variance import ActualHours, compute_variance
from app.services.catalog_service import actual_hours_by_reference


def _record(external_id, entity_id, estimated, name="Project"):
    return ProjectLinkRecord(
        external_id=external_id,
        external_name=name,
        estimated_hours=estimated,
        total_tasks=5,
        completed_tasks=2,
        matched_entity=CanonicalEntity(id=entity_id, name=name) if entity_id else None,
        confidence=1.0 if entity_id else 0.0,
        last_updated=datetime(2026, 1, 1, tzinfo=timezone.utc),
    )


class TestComputeVariance:
    """Tests for compute_variance."""

    def test_under_and_over_budget(self):
        report = compute_variance(
            [_record("1", 100, 10.0), _record("2", 101, 4.0)],
            {"1": ActualHours(7.5, 2, 2), "2": ActualHours(6.0, 1, 1)},
        )
        by_id = {p.external_id: p for p in report.projects}
        assert by_id["1"].variance_hours == 2.5
        assert by_id["1"].status == "under_budget"
        assert by_id["1"].completion_percentage == 75
        assert by_id["2"].variance_hours == -2.0
        assert by_id["2"].status == "over_budget"
        assert by_id["2"].completion_percentage == 100

    def test_sorted_by_absolute_variance(self):
        report = compute_variance(
            [_record("1", 100, 10.0), _record("2", 101, 4.0), _record("3", 102, 1.0)],
            {"1": ActualHours(9.0), "2": ActualHours(10.0), "3": ActualHours(1.0)},
        )
        assert [p.external_id for p in report.projects] == ["2", "1", "3"]
        assert report.projects[-1].status == "on_track"

    def test_unmatched_records_left_out(self):
        report = compute_variance([_record("9", None, 10.0)], {"9": ActualHours(3.0)})
        assert report.projects == []
        assert report.total_estimated_hours == 0.0

    def test_no_time_logged(self):
        [project] = compute_variance([_record("1", 100, 8.0)], {}).projects
        assert project.actual_hours == 0.0
        assert project.entry_count == 0
        assert project.completion_percentage == 0

    def test_no_estimate(self):
        [project] = compute_variance([_record("1", 100, 0.0)], {"1": ActualHours(2.0, 1, 1)}).projects
        assert project.completion_percentage == 0
        assert project.variance_hours == -2.0

    def test_summary(self):
        report = compute_variance(
            [_record("1", 100, 10.0), _record("2", 101, 0.0), _record("3", 102, 5.0)],
            {"1": ActualHours(4.0), "2": ActualHours(1.5)},
        )
        assert report.total_estimated_hours == 15.0
        assert report.total_actual_hours == 5.5
        assert report.total_variance_hours == 9.5
        assert report.projects_with_estimates == 2
        assert report.projects_with_time_logged == 2


class TestActualHoursByReference:
    """Tests for the time log aggregation query."""

    async def test_groups_by_reference_since_date(self, seeded_db):
        actuals = await actual_hours_by_reference(seeded_db, date(2026, 1, 1))
        assert set(actuals) == {"1201", "1202"}
        assert actuals["1201"] == ActualHours(hours=7.5, entry_count=2, unique_users=2)
        assert actuals["1202"] == ActualHours(hours=6.0, entry_count=1, unique_users=1)

    async def test_earlier_start_includes_older_logs(self, seeded_db):
        actuals = await actual_hours_by_reference(seeded_db, date(2025, 1, 1))
        assert actuals["1201"].hours == 9.5
        assert actuals["1201"].entry_count == 3
