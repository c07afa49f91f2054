"""ProjectLinker — links external project snapshots to canonical projects.

Flow:
1. Validate the sync event
2. Edit-distance match the external name against the canonical projects
3. Build a link record and upsert it into the injected store (last write wins)
"""

from collections.abc import Sequence
from datetime import datetime, timezone

from app.matching_engine.similarity import PROJECT_MATCH_THRESHOLD, link_external_project
from app.matching_engine.types import CanonicalEntity, MatchInputError
from app.project_linker.records import ProjectLinkRecord, ProjectSyncEvent
from app.project_linker.store import ProjectLinkStore


class ProjectLinker:
    """Owns the link store for external-to-canonical project mappings."""

    def __init__(self, store: ProjectLinkStore, threshold: float = PROJECT_MATCH_THRESHOLD):
        self.store = store
        self.threshold = threshold

    async def sync(self, event: ProjectSyncEvent, candidates: Sequence[CanonicalEntity]) -> ProjectLinkRecord:
        """Link one sync event and remember the result.

        Raises:
            MatchInputError: if the event has no external id or name.
        """
        external_id = (event.external_id or "").strip()
        external_name = (event.external_name or "").strip()
        if not external_id or not external_name:
            raise MatchInputError("Missing required fields: external_id, external_name")

        result = link_external_project(external_name, candidates, self.threshold)

        record = ProjectLinkRecord(
            external_id=external_id,
            external_name=external_name,
            estimated_hours=event.estimated_hours,
            total_tasks=event.total_tasks,
            completed_tasks=event.completed_tasks,
            matched_entity=result.matched_entity,
            confidence=result.score,
            last_updated=datetime.now(timezone.utc),
        )
        await self.store.put(record)
        return record

    async def records(self) -> list[ProjectLinkRecord]:
        return await self.store.all()
