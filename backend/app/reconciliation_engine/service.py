"""ReconciliationService — gathers registry and platform hours, then reconciles.

Flow:
1. Fetch the registry tab and every platform report concurrently
2. Time tracker hours come from the time log table, grouped by reference number
3. Configured platforms without an integration contribute an empty report
4. Reconcile (pure) and log a summary
"""

import asyncio
import logging
import time

from sqlalchemy.ext.asyncio import AsyncSession

from app.config import Settings
from app.reconciliation_engine.engine import (
    PlatformReport,
    ReconciliationResult,
    RegistryTask,
    reconcile,
)
from app.registry.sheets import fetch_sheet_csv, parse_registry_csv
from app.services.catalog_service import time_tracker_entries

logger = logging.getLogger("opscentral.reconciliation")

TIME_TRACKER_SOURCE = "time_tracker"


class ReconciliationService:
    """Cross-platform hours reconciliation."""

    def __init__(self, settings: Settings):
        self.settings = settings

    async def load_registry(self, sheet_id: str | None = None, tab_name: str | None = None) -> list[RegistryTask]:
        sheet_id = sheet_id or self.settings.google_sheet_id
        if not sheet_id:
            raise ValueError("Registry sheet id not configured. Set GOOGLE_SHEET_ID in .env")

        csv_text = await fetch_sheet_csv(
            self.settings.sheets_base_url,
            sheet_id,
            tab_name or self.settings.registry_tab,
            timeout=self.settings.sheets_timeout_seconds,
        )
        return parse_registry_csv(csv_text, self.settings.registry_platform_columns)

    async def load_report(self, db: AsyncSession, source_name: str) -> PlatformReport:
        if source_name == TIME_TRACKER_SOURCE:
            return PlatformReport(source_name, await time_tracker_entries(db))
        # No integration for this platform yet
        return PlatformReport(source_name, ())

    async def reconcile_registry(
        self,
        db: AsyncSession,
        sheet_id: str | None = None,
        tab_name: str | None = None,
    ) -> tuple[list[RegistryTask], ReconciliationResult]:
        start = time.perf_counter()

        # One AsyncSession cannot run queries concurrently, so reports share a sequential loader
        async def load_reports() -> list[PlatformReport]:
            return [await self.load_report(db, name) for name in self.settings.reconciliation_sources]

        registry, reports = await asyncio.gather(
            self.load_registry(sheet_id, tab_name),
            load_reports(),
        )
        result = self.reconcile(registry, reports)

        logger.info(
            "Reconciled %d registry tasks across %d sources: %d discrepancies (%.1f ms)",
            len(registry),
            len(reports),
            len(result.discrepancies),
            (time.perf_counter() - start) * 1000,
        )
        return registry, result

    def reconcile(self, registry: list[RegistryTask], reports: list[PlatformReport]) -> ReconciliationResult:
        return reconcile(registry, reports, tolerance=self.settings.reconciliation_tolerance_hours)
