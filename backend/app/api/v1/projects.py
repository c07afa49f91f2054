"""Project sync webhook, stored links and estimate variance."""

import logging

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.dependencies import get_db, get_project_linker
from app.project_linker.records import ProjectLinkRecord, ProjectSyncEvent
from app.project_linker.service import ProjectLinker
from app.project_linker.variance import compute_variance
from app.schemas.matching import EntityResponse
from app.schemas.project_link import (
    ProjectLinkListResponse,
    ProjectLinkResponse,
    ProjectSyncRequest,
    ProjectSyncResponse,
    ProjectVarianceResponse,
    VarianceReportResponse,
    VarianceSummary,
)
from app.services.catalog_service import actual_hours_by_reference, load_projects

logger = logging.getLogger("opscentral.project_linker")

webhook_router = APIRouter()
router = APIRouter()


@webhook_router.post("/project-sync", response_model=ProjectSyncResponse)
async def project_sync(
    request: ProjectSyncRequest,
    db: AsyncSession = Depends(get_db),
    linker: ProjectLinker = Depends(get_project_linker),
) -> ProjectSyncResponse:
    """Receive a project snapshot from the automation workflow and link it.

    Missing id or name is rejected with 400 by the MatchInputError handler.
    """
    event = ProjectSyncEvent(
        external_id=request.external_project_id or "",
        external_name=request.external_project_name or "",
        estimated_hours=request.estimated_hours,
        total_tasks=request.total_tasks,
        completed_tasks=request.completed_tasks,
    )
    record = await linker.sync(event, await load_projects(db))

    if record.matched:
        logger.info(
            'Matched external project "%s" with local project "%s" (%.1f%% confidence)',
            record.external_name, record.matched_entity.name, record.confidence * 100,
        )
        message = f"Matched with {record.matched_entity.name}"
    else:
        logger.info('No match found for external project "%s"', record.external_name)
        message = "No matching local project found"

    return ProjectSyncResponse(matched=record.matched, message=message, link=_link_to_response(record))


@router.get("/links", response_model=ProjectLinkListResponse)
async def list_links(linker: ProjectLinker = Depends(get_project_linker)) -> ProjectLinkListResponse:
    """Latest link per canonical project, plus unmatched external projects."""
    records = sorted(await linker.records(), key=lambda r: r.last_updated, reverse=True)
    return ProjectLinkListResponse(links=[_link_to_response(r) for r in records], total=len(records))


@router.get("/variance", response_model=VarianceReportResponse)
async def project_variance(
    db: AsyncSession = Depends(get_db),
    linker: ProjectLinker = Depends(get_project_linker),
) -> VarianceReportResponse:
    """Estimated hours from synced projects vs hours logged against them."""
    actuals = await actual_hours_by_reference(db, since=settings.variance_start_date)
    report = compute_variance(await linker.records(), actuals)

    return VarianceReportResponse(
        projects=[ProjectVarianceResponse(**vars(p)) for p in report.projects],
        summary=VarianceSummary(
            total_projects=len(report.projects),
            projects_with_estimates=report.projects_with_estimates,
            projects_with_time_logged=report.projects_with_time_logged,
            total_estimated_hours=report.total_estimated_hours,
            total_actual_hours=report.total_actual_hours,
            total_variance_hours=report.total_variance_hours,
        ),
        start_date=settings.variance_start_date.isoformat(),
    )


def _link_to_response(record: ProjectLinkRecord) -> ProjectLinkResponse:
    return ProjectLinkResponse(
        external_id=record.external_id,
        external_name=record.external_name,
        estimated_hours=record.estimated_hours,
        total_tasks=record.total_tasks,
        completed_tasks=record.completed_tasks,
        matched=record.matched,
        matched_project=EntityResponse(**record.matched_entity.to_dict()) if record.matched_entity else None,
        confidence=record.confidence,
        last_updated=record.last_updated,
    )
