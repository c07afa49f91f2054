"""Pydantic schemas for company and product matching."""

from pydantic import BaseModel, Field


class EntityResponse(BaseModel):
    id: int
    name: str
    email: str | None = None

    model_config = {"from_attributes": True}


class CompanyListResponse(BaseModel):
    success: bool = True
    companies: list[EntityResponse] = Field(default_factory=list)


class CompanyMatchResponse(BaseModel):
    success: bool = True
    query: str
    match: EntityResponse | None = None
    rule: str | None = None


class CompanyMatchesResponse(BaseModel):
    success: bool = True
    query: str
    matches: list[EntityResponse] = Field(default_factory=list)


class ProductMatchResponse(BaseModel):
    success: bool = True
    query: str
    match: EntityResponse | None = None
    strategy: str
    score: float


class TimeLogEntry(BaseModel):
    id: int
    date: str
    duration: float
    user_id: int | None = None
    project_name: str
    reference_number: str | None = None
    description: str | None = None


class CompanyTimeLogsResponse(BaseModel):
    success: bool = True
    company: EntityResponse
    timelogs: list[TimeLogEntry] = Field(default_factory=list)
    total_hours: float = 0.0
