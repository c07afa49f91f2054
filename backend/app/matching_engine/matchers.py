"""Pure company-name matching functions — no DB or HTTP dependency.

Handles variations such as:
- "JKS Technology" = "JKS"
- "Makati Medical Center (MMC)" = "Makati Medical Center"
- "CyberBattalion" = "Cyber Battalion"
"""

import enum
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from app.matching_engine.normalizer import abbreviation, first_words, normalize
from app.matching_engine.types import CanonicalEntity


class NameRule(str, enum.Enum):
    """Cascade rules, strictest first."""

    EXACT = "exact"
    CONTAINMENT = "containment"
    ABBREVIATION = "abbreviation"
    FIRST_TOKEN = "first_token"
    FIRST_TWO_TOKENS = "first_two_tokens"
    SYNONYM_GROUP = "synonym_group"


@dataclass(frozen=True)
class SynonymGroup:
    """Domain variants sharing an anchor token.

    Two names match when both contain `anchor` and each contains at least
    one of `synonyms` (plain substring checks on the normalized form).
    """

    anchor: str
    synonyms: tuple[str, ...]

    def matches(self, norm_a: str, norm_b: str) -> bool:
        if self.anchor not in norm_a or self.anchor not in norm_b:
            return False
        return any(s in norm_a for s in self.synonyms) and any(s in norm_b for s in self.synonyms)


DEFAULT_SYNONYM_GROUPS: tuple[SynonymGroup, ...] = (
    SynonymGroup(anchor="makati", synonyms=("medical", "med")),
    SynonymGroup(anchor="cyber", synonyms=("battalion", "batt")),
)


def name_match_rule(
    name_a: str | None,
    name_b: str | None,
    synonym_groups: Iterable[SynonymGroup] = DEFAULT_SYNONYM_GROUPS,
) -> NameRule | None:
    """Return the first cascade rule under which the two names match, or None."""
    if not name_a or not name_b:
        return None

    norm_a = normalize(name_a)
    norm_b = normalize(name_b)

    if norm_a == norm_b:
        return NameRule.EXACT

    # An empty normal form would be "contained" in everything
    if not norm_a or not norm_b:
        return None

    if norm_a in norm_b or norm_b in norm_a:
        return NameRule.CONTAINMENT

    abbr_a = abbreviation(name_a)
    abbr_b = abbreviation(name_b)
    if abbr_a == abbr_b or abbr_b in norm_a or abbr_a in norm_b:
        return NameRule.ABBREVIATION

    if first_words(name_a, 1) == first_words(name_b, 1):
        return NameRule.FIRST_TOKEN

    if first_words(name_a, 2) == first_words(name_b, 2):
        return NameRule.FIRST_TWO_TOKENS

    for group in synonym_groups:
        if group.matches(norm_a, norm_b):
            return NameRule.SYNONYM_GROUP

    return None


def names_match(
    name_a: str | None,
    name_b: str | None,
    synonym_groups: Iterable[SynonymGroup] = DEFAULT_SYNONYM_GROUPS,
) -> bool:
    return name_match_rule(name_a, name_b, synonym_groups) is not None


def find_matching_company(
    search_name: str | None,
    companies: Sequence[CanonicalEntity],
    synonym_groups: Iterable[SynonymGroup] = DEFAULT_SYNONYM_GROUPS,
) -> CanonicalEntity | None:
    """Find the company a free-text name refers to.

    An exact normalized match anywhere in the list wins; otherwise the first
    company (in input order) that satisfies any cascade rule.
    """
    if not search_name or not companies:
        return None

    target = normalize(search_name)
    for company in companies:
        if company.name and normalize(company.name) == target:
            return company

    groups = tuple(synonym_groups)
    for company in companies:
        if names_match(search_name, company.name, groups):
            return company

    return None


def find_matching_companies(
    search_name: str | None,
    companies: Sequence[CanonicalEntity],
    synonym_groups: Iterable[SynonymGroup] = DEFAULT_SYNONYM_GROUPS,
) -> list[CanonicalEntity]:
    """All companies matching the name, in input order."""
    if not search_name or not companies:
        return []

    groups = tuple(synonym_groups)
    return [c for c in companies if names_match(search_name, c.name, groups)]
