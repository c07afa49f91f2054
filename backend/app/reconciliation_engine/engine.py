"""Pure hours reconciliation across platforms — no DB or HTTP dependency.

Precondition: task keys are already aligned. A report entry belongs to a
registry task only when its `task_ref` equals the task id or the task's
identifier on that platform (`platform_refs[source]`). Fuzzy name alignment
must happen upstream, otherwise naming drift shows up as unmatched tasks.
"""

from collections.abc import Sequence
from dataclasses import dataclass, field


@dataclass(frozen=True)
class RegistryTask:
    """A task row from the registry sheet.

    `platform_refs` maps each platform the task is tagged for to that
    platform's identifier for it (empty string: use the registry id).
    """

    id: str
    name: str
    hours: float = 0.0
    platform_refs: dict[str, str] = field(default_factory=dict)
    attributes: dict = field(default_factory=dict)


@dataclass(frozen=True)
class ReportEntry:
    task_ref: str
    hours: float


@dataclass(frozen=True)
class PlatformReport:
    source_name: str
    entries: Sequence[ReportEntry] = ()


@dataclass
class SourceTotals:
    total_hours: float = 0.0
    matched_task_count: int = 0
    unmatched_refs: list[str] = field(default_factory=list)
    unmatched_hours: float = 0.0


@dataclass
class TaskReconciliation:
    task_id: str
    matched_sources: list[str] = field(default_factory=list)
    unmatched_sources: list[str] = field(default_factory=list)

    @property
    def matched(self) -> bool:
        return bool(self.matched_sources)


@dataclass
class Discrepancy:
    task_id: str
    task_name: str
    expected_hours: float
    reported_hours_by_source: dict[str, float] = field(default_factory=dict)
    delta_by_source: dict[str, float] = field(default_factory=dict)
    delta: float = 0.0
    missing_sources: list[str] = field(default_factory=list)


@dataclass
class ReconciliationResult:
    per_source: dict[str, SourceTotals] = field(default_factory=dict)
    tasks: list[TaskReconciliation] = field(default_factory=list)
    discrepancies: list[Discrepancy] = field(default_factory=list)


def _source_index(registry: Sequence[RegistryTask], source: str) -> dict[str, RegistryTask]:
    """task_ref -> task for one source; platform ids take precedence over registry ids."""
    index = {task.id: task for task in registry if task.id}
    for task in registry:
        ref = task.platform_refs.get(source)
        if ref:
            index[ref] = task
    return index


def _merge_reports(sources: Sequence[PlatformReport]) -> dict[str, list[ReportEntry]]:
    merged: dict[str, list[ReportEntry]] = {}
    for report in sources:
        merged.setdefault(report.source_name, []).extend(report.entries)
    return merged


def reconcile(
    registry: Sequence[RegistryTask],
    sources: Sequence[PlatformReport],
    tolerance: float = 0.0,
) -> ReconciliationResult:
    """Compare registry hours with every platform's reported hours.

    A task is a discrepancy when a reporting source differs from the expected
    hours by more than `tolerance`, or when a source the task is expected in
    never reported it. A task with no platform tags is expected in every
    source of this call. Sources with no entries are valid and simply match
    nothing.
    """
    reports = _merge_reports(sources)
    source_names = sorted(reports)

    per_source: dict[str, SourceTotals] = {}
    # source -> task id -> summed hours
    reported: dict[str, dict[str, float]] = {}

    for source in source_names:
        index = _source_index(registry, source)
        totals = SourceTotals()
        hours_by_task: dict[str, float] = {}

        for entry in reports[source]:
            task = index.get(entry.task_ref)
            if task is None:
                totals.unmatched_refs.append(entry.task_ref)
                totals.unmatched_hours += entry.hours
                continue
            hours_by_task[task.id] = hours_by_task.get(task.id, 0.0) + entry.hours

        totals.total_hours = round(sum(hours_by_task.values()), 6)
        totals.matched_task_count = len(hours_by_task)
        totals.unmatched_hours = round(totals.unmatched_hours, 6)
        per_source[source] = totals
        reported[source] = hours_by_task

    tasks: list[TaskReconciliation] = []
    discrepancies: list[Discrepancy] = []

    for task in registry:
        status = TaskReconciliation(task_id=task.id)
        reported_by_source: dict[str, float] = {}
        for source in source_names:
            if task.id in reported[source]:
                status.matched_sources.append(source)
                reported_by_source[source] = round(reported[source][task.id], 6)
            else:
                status.unmatched_sources.append(source)
        tasks.append(status)

        expected_sources = set(task.platform_refs) or set(source_names)
        missing = [s for s in status.unmatched_sources if s in expected_sources]
        deltas = {s: round(h - task.hours, 6) for s, h in reported_by_source.items()}
        drifted = any(abs(d) > tolerance for d in deltas.values())

        if drifted or missing:
            discrepancies.append(Discrepancy(
                task_id=task.id,
                task_name=task.name,
                expected_hours=task.hours,
                reported_hours_by_source=reported_by_source,
                delta_by_source=deltas,
                # Largest magnitude; a positive delta wins a tie
                delta=max(deltas.values(), key=lambda d: (abs(d), d)) if deltas else 0.0,
                missing_sources=missing,
            ))

    return ReconciliationResult(per_source=per_source, tasks=tasks, discrepancies=discrepancies)
