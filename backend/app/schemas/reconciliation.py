"""Pydantic schemas for hours reconciliation."""

from pydantic import BaseModel, Field


class RegistryTaskIn(BaseModel):
    id: str
    name: str = ""
    hours: float = 0.0
    platform_refs: dict[str, str] = Field(default_factory=dict)


class ReportEntryIn(BaseModel):
    task_ref: str
    hours: float = 0.0


class PlatformReportIn(BaseModel):
    source_name: str
    entries: list[ReportEntryIn] = Field(default_factory=list)


class ReconciliationRequest(BaseModel):
    tasks: list[RegistryTaskIn] = Field(default_factory=list)
    reports: list[PlatformReportIn] = Field(default_factory=list)
    tolerance: float | None = Field(None, ge=0.0, description="Overrides the configured tolerance (hours)")


class SourceTotalsResponse(BaseModel):
    total_hours: float = 0.0
    matched_task_count: int = 0
    unmatched_refs: list[str] = Field(default_factory=list)
    unmatched_hours: float = 0.0


class TaskReconciliationResponse(BaseModel):
    task_id: str
    matched: bool
    matched_sources: list[str] = Field(default_factory=list)
    unmatched_sources: list[str] = Field(default_factory=list)


class DiscrepancyResponse(BaseModel):
    task_id: str
    task_name: str
    expected_hours: float
    reported_hours_by_source: dict[str, float] = Field(default_factory=dict)
    delta_by_source: dict[str, float] = Field(default_factory=dict)
    delta: float = 0.0
    missing_sources: list[str] = Field(default_factory=list)


class ReconciliationResponse(BaseModel):
    success: bool = True
    total_tasks: int = 0
    per_source: dict[str, SourceTotalsResponse] = Field(default_factory=dict)
    tasks: list[TaskReconciliationResponse] = Field(default_factory=list)
    discrepancies: list[DiscrepancyResponse] = Field(default_factory=list)
    total_discrepancies: int = 0
