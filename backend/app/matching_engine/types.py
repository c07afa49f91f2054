"""Shared value types for entity resolution — no DB or HTTP dependency."""

import enum
from dataclasses import dataclass


class MatchInputError(ValueError):
    """Raised when a resolution call is missing a required name or identifier.

    Distinct from a no-match result so callers can map it to a 400.
    """


class MatchStrategy(str, enum.Enum):
    EXACT = "exact"
    SUBSTRING = "substring"
    ABBREVIATION = "abbreviation"
    TOKEN_OVERLAP = "token_overlap"
    EDIT_DISTANCE = "edit_distance"
    NONE = "none"


@dataclass(frozen=True)
class CanonicalEntity:
    """A company, product or project record from the system of record."""

    id: int
    name: str
    email: str | None = None

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "email": self.email}

    @classmethod
    def from_dict(cls, data: dict) -> "CanonicalEntity":
        return cls(id=data["id"], name=data.get("name") or "", email=data.get("email"))


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a single resolution call."""

    matched_entity: CanonicalEntity | None
    strategy: MatchStrategy
    score: float

    def __post_init__(self):
        if not 0.0 <= self.score <= 1.0:
            raise ValueError(f"score must lie in [0, 1], got {self.score}")
        if self.strategy == MatchStrategy.NONE:
            if self.matched_entity is not None or self.score != 0.0:
                raise ValueError("a 'none' result carries no entity and a zero score")
        elif self.matched_entity is None:
            raise ValueError(f"strategy {self.strategy.value} requires a matched entity")

    @classmethod
    def no_match(cls) -> "MatchResult":
        return cls(matched_entity=None, strategy=MatchStrategy.NONE, score=0.0)

    @property
    def matched(self) -> bool:
        return self.matched_entity is not None
