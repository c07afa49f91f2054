"""Company endpoints — list, fuzzy match, time logs."""

from datetime import date

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.dependencies import get_db
from app.matching_engine.matchers import find_matching_companies, find_matching_company, name_match_rule
from app.schemas.matching import (
    CompanyListResponse,
    CompanyMatchesResponse,
    CompanyMatchResponse,
    CompanyTimeLogsResponse,
    EntityResponse,
)
from app.services.catalog_service import company_timelogs, get_company, load_companies

router = APIRouter()


def _require_name(name: str | None) -> str:
    name = (name or "").strip()
    if not name:
        raise HTTPException(status_code=400, detail="Missing required query param: name")
    return name


@router.get("", response_model=CompanyListResponse)
async def list_companies(db: AsyncSession = Depends(get_db)) -> CompanyListResponse:
    companies = await load_companies(db)
    return CompanyListResponse(companies=[EntityResponse(**c.to_dict()) for c in companies])


@router.get("/match", response_model=CompanyMatchResponse)
async def match_company(
    name: str | None = Query(None, description="Free-text company name"),
    db: AsyncSession = Depends(get_db),
) -> CompanyMatchResponse:
    """Resolve a company name to a single company (first match wins)."""
    name = _require_name(name)
    company = find_matching_company(name, await load_companies(db))
    if company is None:
        return CompanyMatchResponse(query=name)

    rule = name_match_rule(name, company.name)
    return CompanyMatchResponse(
        query=name,
        match=EntityResponse(**company.to_dict()),
        rule=rule.value if rule else None,
    )


@router.get("/matches", response_model=CompanyMatchesResponse)
async def match_companies(
    name: str | None = Query(None, description="Free-text company name"),
    db: AsyncSession = Depends(get_db),
) -> CompanyMatchesResponse:
    """Every company the name could refer to."""
    name = _require_name(name)
    matches = find_matching_companies(name, await load_companies(db))
    return CompanyMatchesResponse(query=name, matches=[EntityResponse(**c.to_dict()) for c in matches])


@router.get("/{company_id}/timelogs", response_model=CompanyTimeLogsResponse)
async def get_company_timelogs(
    company_id: int,
    start_date: date | None = None,
    end_date: date | None = None,
    db: AsyncSession = Depends(get_db),
) -> CompanyTimeLogsResponse:
    """Recent time logs on projects named after the company."""
    company = await get_company(db, company_id)
    if company is None or not company.name:
        raise HTTPException(status_code=404, detail="Company not found")

    logs = await company_timelogs(db, company.name, start_date, end_date)
    return CompanyTimeLogsResponse(
        company=EntityResponse(**company.to_dict()),
        timelogs=logs,
        total_hours=round(sum(log["duration"] for log in logs), 2),
    )
