"""Pydantic schemas for the project sync webhook, links and variance."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.schemas.matching import EntityResponse


class ProjectSyncRequest(BaseModel):
    external_project_id: str | None = Field(
        None,
        validation_alias=AliasChoices("external_project_id", "asana_project_gid"),
        description="Project id on the external tracker",
    )
    external_project_name: str | None = Field(
        None, validation_alias=AliasChoices("external_project_name", "asana_project_name")
    )
    estimated_hours: float = 0.0
    total_tasks: int = 0
    completed_tasks: int = 0

    @field_validator("external_project_id", mode="before")
    @classmethod
    def _coerce_id(cls, value):
        # Trackers send numeric gids as JSON numbers
        return str(value) if isinstance(value, int) else value

    @field_validator("estimated_hours", mode="before")
    @classmethod
    def _coerce_hours(cls, value):
        try:
            return float(value)
        except (TypeError, ValueError):
            return 0.0

    @field_validator("total_tasks", "completed_tasks", mode="before")
    @classmethod
    def _coerce_count(cls, value):
        try:
            return int(float(value))
        except (TypeError, ValueError):
            return 0


class ProjectLinkResponse(BaseModel):
    external_id: str
    external_name: str
    estimated_hours: float
    total_tasks: int
    completed_tasks: int
    matched: bool
    matched_project: EntityResponse | None = None
    confidence: float
    last_updated: datetime


class ProjectSyncResponse(BaseModel):
    success: bool = True
    matched: bool
    message: str
    link: ProjectLinkResponse


class ProjectLinkListResponse(BaseModel):
    success: bool = True
    links: list[ProjectLinkResponse] = Field(default_factory=list)
    total: int = 0


class ProjectVarianceResponse(BaseModel):
    project_id: int | None = None
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


class VarianceSummary(BaseModel):
    total_projects: int = 0
    projects_with_estimates: int = 0
    projects_with_time_logged: int = 0
    total_estimated_hours: float = 0.0
    total_actual_hours: float = 0.0
    total_variance_hours: float = 0.0


class VarianceReportResponse(BaseModel):
    success: bool = True
    projects: list[ProjectVarianceResponse] = Field(default_factory=list)
    summary: VarianceSummary
    start_date: str
