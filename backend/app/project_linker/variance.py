"""Pure estimated-vs-actual variance for linked projects."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field

from app.project_linker.records import ProjectLinkRecord


@dataclass
class ActualHours:
    """Logged time for one external project reference."""

    hours: float = 0.0
    entry_count: int = 0
    unique_users: int = 0


@dataclass
class ProjectVariance:
    project_id: int | None
    project_name: str
    external_id: str
    external_name: str
    estimated_hours: float
    actual_hours: float
    variance_hours: float
    completion_percentage: int
    entry_count: int
    unique_contributors: int
    total_tasks: int
    completed_tasks: int
    status: str


@dataclass
class VarianceReport:
    projects: list[ProjectVariance] = field(default_factory=list)
    total_estimated_hours: float = 0.0
    total_actual_hours: float = 0.0
    total_variance_hours: float = 0.0
    projects_with_estimates: int = 0
    projects_with_time_logged: int = 0


def _status(variance: float) -> str:
    if variance > 0:
        return "under_budget"
    if variance < 0:
        return "over_budget"
    return "on_track"


def compute_variance(
    records: Iterable[ProjectLinkRecord],
    actuals: Mapping[str, ActualHours],
) -> VarianceReport:
    """Compare each linked project's estimate with hours logged against it.

    `actuals` is keyed by external project id (the time log reference number).
    Unmatched link records are left out. Projects are sorted by absolute
    variance, largest first.
    """
    projects: list[ProjectVariance] = []

    for record in records:
        if not record.matched:
            continue
        actual = actuals.get(record.external_id) or ActualHours()
        estimated = record.estimated_hours
        variance = round(estimated - actual.hours, 2)
        completion = min(100, round(actual.hours / estimated * 100)) if estimated > 0 else 0

        projects.append(ProjectVariance(
            project_id=record.matched_entity.id,
            project_name=record.matched_entity.name,
            external_id=record.external_id,
            external_name=record.external_name,
            estimated_hours=estimated,
            actual_hours=actual.hours,
            variance_hours=variance,
            completion_percentage=completion,
            entry_count=actual.entry_count,
            unique_contributors=actual.unique_users,
            total_tasks=record.total_tasks,
            completed_tasks=record.completed_tasks,
            status=_status(variance),
        ))

    projects.sort(key=lambda p: abs(p.variance_hours), reverse=True)

    return VarianceReport(
        projects=projects,
        total_estimated_hours=round(sum(p.estimated_hours for p in projects), 2),
        total_actual_hours=round(sum(p.actual_hours for p in projects), 2),
        total_variance_hours=round(sum(p.variance_hours for p in projects), 2),
        projects_with_estimates=sum(1 for p in projects if p.estimated_hours > 0),
        projects_with_time_logged=sum(1 for p in projects if p.actual_hours > 0),
    )
