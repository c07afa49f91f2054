"""Reconciliation endpoints — ad-hoc run and registry sheet run."""

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.ext.asyncio import AsyncSession

from app.config import settings
from app.dependencies import get_db, get_reconciliation_service
from app.reconciliation_engine.engine import (
    PlatformReport,
    ReconciliationResult,
    RegistryTask,
    ReportEntry,
    reconcile,
)
from app.reconciliation_engine.service import ReconciliationService
from app.registry.sheets import RegistryFetchError
from app.schemas.reconciliation import (
    DiscrepancyResponse,
    ReconciliationRequest,
    ReconciliationResponse,
    SourceTotalsResponse,
    TaskReconciliationResponse,
)

router = APIRouter()


@router.post("/run", response_model=ReconciliationResponse)
async def run_reconciliation(
    request: ReconciliationRequest,
    service: ReconciliationService = Depends(get_reconciliation_service),
) -> ReconciliationResponse:
    """Reconcile a caller-supplied registry against caller-supplied platform reports.

    Task references must already be aligned with registry ids or platform refs.
    """
    registry = [
        RegistryTask(id=t.id, name=t.name, hours=t.hours, platform_refs=dict(t.platform_refs))
        for t in request.tasks
    ]
    reports = [
        PlatformReport(r.source_name, [ReportEntry(e.task_ref, e.hours) for e in r.entries])
        for r in request.reports
    ]
    if request.tolerance is not None:
        result = reconcile(registry, reports, tolerance=request.tolerance)
    else:
        result = service.reconcile(registry, reports)
    return _to_response(len(registry), result)


@router.get("/registry", response_model=ReconciliationResponse)
async def reconcile_registry(
    tab: str | None = None,
    sheet_id: str | None = None,
    db: AsyncSession = Depends(get_db),
    service: ReconciliationService = Depends(get_reconciliation_service),
) -> ReconciliationResponse:
    """Reconcile the registry sheet against every configured platform."""
    if not (sheet_id or settings.google_sheet_id):
        raise HTTPException(status_code=400, detail="Missing required query param: sheet_id")

    try:
        registry, result = await service.reconcile_registry(db, sheet_id=sheet_id, tab_name=tab)
    except RegistryFetchError as e:
        raise HTTPException(status_code=502, detail=str(e)) from e

    return _to_response(len(registry), result)


def _to_response(total_tasks: int, result: ReconciliationResult) -> ReconciliationResponse:
    return ReconciliationResponse(
        total_tasks=total_tasks,
        per_source={
            name: SourceTotalsResponse(
                total_hours=totals.total_hours,
                matched_task_count=totals.matched_task_count,
                unmatched_refs=totals.unmatched_refs,
                unmatched_hours=totals.unmatched_hours,
            )
            for name, totals in result.per_source.items()
        },
        tasks=[
            TaskReconciliationResponse(
                task_id=t.task_id,
                matched=t.matched,
                matched_sources=t.matched_sources,
                unmatched_sources=t.unmatched_sources,
            )
            for t in result.tasks
        ],
        discrepancies=[DiscrepancyResponse(**vars(d)) for d in result.discrepancies],
        total_discrepancies=len(result.discrepancies),
    )
