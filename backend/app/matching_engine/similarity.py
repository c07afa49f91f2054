"""Edit-distance similarity for external project names."""

from collections.abc import Sequence

from app.matching_engine.types import CanonicalEntity, MatchResult, MatchStrategy

PROJECT_MATCH_THRESHOLD = 0.6


def levenshtein_distance(s1: str, s2: str) -> int:
    """Classic DP edit distance keeping a single row of len(s2) + 1 costs."""
    costs = list(range(len(s2) + 1))
    for i, c1 in enumerate(s1, start=1):
        diagonal = costs[0]
        costs[0] = i
        for j, c2 in enumerate(s2, start=1):
            above = costs[j]
            if c1 == c2:
                costs[j] = diagonal
            else:
                costs[j] = min(diagonal, above, costs[j - 1]) + 1
            diagonal = above
    return costs[len(s2)]


def similarity(s1: str, s2: str) -> float:
    """(longest - distance) / longest; 1.0 for two empty strings."""
    longest = max(len(s1), len(s2))
    if longest == 0:
        return 1.0
    return (longest - levenshtein_distance(s1, s2)) / longest


def link_external_project(
    external_name: str | None,
    candidates: Sequence[CanonicalEntity],
    threshold: float = PROJECT_MATCH_THRESHOLD,
) -> MatchResult:
    """Pick the candidate whose name is most similar to `external_name`.

    Names are compared lower-cased and trimmed. The first maximal candidate
    wins; anything below `threshold` is a no-match.
    """
    target = (external_name or "").lower().strip()
    if not target:
        return MatchResult.no_match()

    best: CanonicalEntity | None = None
    best_score = 0.0
    for candidate in candidates:
        candidate_name = (candidate.name or "").lower().strip()
        if not candidate_name:
            continue
        score = similarity(target, candidate_name)
        if score > best_score:
            best, best_score = candidate, score

    if best is None or best_score < threshold:
        return MatchResult.no_match()

    return MatchResult(best, MatchStrategy.EDIT_DISTANCE, best_score)
