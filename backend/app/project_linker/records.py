"""Value types for external project sync events and their stored links."""

from dataclasses import dataclass
from datetime import datetime

from app.matching_engine.types import CanonicalEntity

UNMATCHED_KEY_PREFIX = "unmatched:"


@dataclass(frozen=True)
class ProjectSyncEvent:
    """A project snapshot pushed by the automation webhook."""

    external_id: str
    external_name: str
    estimated_hours: float = 0.0
    total_tasks: int = 0
    completed_tasks: int = 0


@dataclass(frozen=True)
class ProjectLinkRecord:
    external_id: str
    external_name: str
    estimated_hours: float
    total_tasks: int
    completed_tasks: int
    matched_entity: CanonicalEntity | None
    confidence: float
    last_updated: datetime

    @property
    def matched(self) -> bool:
        return self.matched_entity is not None

    @property
    def store_key(self) -> str:
        """Canonical project id when matched, else a per-external-id sentinel."""
        if self.matched_entity is not None:
            return str(self.matched_entity.id)
        return f"{UNMATCHED_KEY_PREFIX}{self.external_id}"

    def to_dict(self) -> dict:
        return {
            "external_id": self.external_id,
            "external_name": self.external_name,
            "estimated_hours": self.estimated_hours,
            "total_tasks": self.total_tasks,
            "completed_tasks": self.completed_tasks,
            "matched_entity": self.matched_entity.to_dict() if self.matched_entity else None,
            "confidence": self.confidence,
            "last_updated": self.last_updated.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectLinkRecord":
        entity = data.get("matched_entity")
        return cls(
            external_id=data["external_id"],
            external_name=data["external_name"],
            estimated_hours=float(data.get("estimated_hours") or 0.0),
            total_tasks=int(data.get("total_tasks") or 0),
            completed_tasks=int(data.get("completed_tasks") or 0),
            matched_entity=CanonicalEntity.from_dict(entity) if entity else None,
            confidence=float(data.get("confidence") or 0.0),
            last_updated=datetime.fromisoformat(data["last_updated"]),
        )
