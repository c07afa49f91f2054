"""Product/service name resolution against the catalog."""

from collections.abc import Sequence

from app.matching_engine.normalizer import tokens
from app.matching_engine.types import CanonicalEntity, MatchInputError, MatchResult, MatchStrategy

PRODUCT_MATCH_THRESHOLD = 0.6


def token_overlap_score(query: str, candidate: str) -> float:
    """Share of the query's tokens also present in the candidate."""
    query_tokens = tokens(query)
    overlap = len(query_tokens & tokens(candidate))
    return overlap / max(1, len(query_tokens))


def resolve_product(name: str | None, candidates: Sequence[CanonicalEntity]) -> MatchResult:
    """Resolve a free-text product name to a catalog entry.

    Cascade: exact (case-insensitive) -> single substring hit -> best token
    overlap among the substring hits (or the whole catalog when there were
    none), accepted at PRODUCT_MATCH_THRESHOLD. Ties keep the first candidate.

    Raises:
        MatchInputError: if `name` is blank.
    """
    query = (name or "").strip()
    if not query:
        raise MatchInputError("Missing required product name")

    named = [c for c in candidates if c.name and c.name.strip()]
    lowered = query.lower()

    for candidate in named:
        if candidate.name.strip().lower() == lowered:
            return MatchResult(candidate, MatchStrategy.EXACT, 1.0)

    hits = [c for c in named if lowered in c.name.lower()]
    if len(hits) == 1:
        coverage = min(1.0, len(query) / len(hits[0].name.strip()))
        return MatchResult(hits[0], MatchStrategy.SUBSTRING, round(coverage, 3))

    best: CanonicalEntity | None = None
    best_score = 0.0
    for candidate in hits or named:
        score = token_overlap_score(query, candidate.name)
        if best is None or score > best_score:
            best, best_score = candidate, score

    if best is not None and best_score >= PRODUCT_MATCH_THRESHOLD:
        return MatchResult(best, MatchStrategy.TOKEN_OVERLAP, round(best_score, 3))

    return MatchResult.no_match()
