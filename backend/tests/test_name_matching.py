"""Tests for the company-name matching cascade."""

import pytest

from app.matching_engine.matchers import (
    DEFAULT_SYNONYM_GROUPS,
    NameRule,
    SynonymGroup,
    find_matching_companies,
    find_matching_company,
    name_match_rule,
    names_match,
)
from app.matching_engine.types import CanonicalEntity


class TestNameMatchRule:
    """Tests for name_match_rule — which rule fires first."""

    def test_exact_after_normalization(self):
        assert name_match_rule("Makati Medical Center (MMC)", "makati medical center") == NameRule.EXACT

    def test_containment(self):
        assert name_match_rule("JKS Technology", "JKS") == NameRule.CONTAINMENT

    def test_containment_is_bidirectional(self):
        assert name_match_rule("JKS", "JKS Technology") == NameRule.CONTAINMENT

    def test_abbreviation(self):
        # "jks tec" is contained in "jks tech solutions"
        assert name_match_rule("JKS Technology", "JKS Tech Solutions") == NameRule.ABBREVIATION

    def test_first_token(self):
        assert name_match_rule("Acme Logistics", "Acme Freight") == NameRule.FIRST_TOKEN

    def test_synonym_group(self):
        assert name_match_rule("CyberBattalion", "Cyber Battalion") == NameRule.SYNONYM_GROUP

    def test_medical_center_synonyms(self):
        assert name_match_rule("Med Makati", "Medical Center of Makati") == NameRule.SYNONYM_GROUP

    def test_no_match(self):
        assert name_match_rule("JKS Technology", "Northwind Traders") is None

    def test_empty_inputs(self):
        assert name_match_rule("", "JKS") is None
        assert name_match_rule("JKS", None) is None

    def test_empty_normal_form_never_contained(self):
        assert name_match_rule("(MMC)", "Makati Medical Center") is None


class TestNamesMatch:
    """Tests for names_match."""

    @pytest.mark.parametrize("name", ["JKS", "Makati Medical Center (MMC)", "(x)", "   ", "a.b"])
    def test_reflexive(self, name):
        assert names_match(name, name) is True

    @pytest.mark.parametrize("a, b", [
        ("JKS Technology", "JKS"),
        ("Makati Medical Center (MMC)", "Makati Medical Center"),
        ("CyberBattalion", "Cyber Battalion"),
    ])
    def test_known_variants(self, a, b):
        assert names_match(a, b) is True

    def test_different_companies(self):
        assert names_match("Globe Telecom", "Smart Communications") is False

    def test_synonym_groups_are_pluggable(self):
        groups = DEFAULT_SYNONYM_GROUPS + (SynonymGroup(anchor="metro", synonyms=("bank", "bk")),)
        assert names_match("MetroBank", "Metro Bk") is False
        assert names_match("MetroBank", "Metro Bk", groups) is True

    def test_without_synonym_groups(self):
        assert names_match("CyberBattalion", "Cyber Battalion", synonym_groups=()) is False


class TestFindMatchingCompany:
    """Tests for find_matching_company."""

    def test_exact_match_preferred_over_earlier_fuzzy(self):
        companies = [
            CanonicalEntity(id=1, name="JKS Technology Services"),
            CanonicalEntity(id=2, name="JKS"),
        ]
        assert find_matching_company("jks", companies).id == 2

    def test_first_fuzzy_match_wins(self, companies):
        result = find_matching_company("Cyber Battalion", companies)
        assert result.id == 3

    def test_first_match_not_best_match(self):
        companies = [
            CanonicalEntity(id=1, name="Acme Freight"),
            CanonicalEntity(id=2, name="Acme Logistics International"),
        ]
        # Both share the first token; input order decides
        assert find_matching_company("Acme Logistics Intl", companies).id == 1

    def test_no_match(self, companies):
        assert find_matching_company("Globe Telecom", companies) is None

    def test_empty_inputs(self, companies):
        assert find_matching_company("", companies) is None
        assert find_matching_company("JKS", []) is None

    def test_candidate_with_empty_name_ignored(self):
        companies = [CanonicalEntity(id=1, name=""), CanonicalEntity(id=2, name="JKS")]
        assert find_matching_company("JKS Technology", companies).id == 2


class TestFindMatchingCompanies:
    """Tests for find_matching_companies."""

    def test_returns_all_in_order(self):
        companies = [
            CanonicalEntity(id=1, name="Acme Freight"),
            CanonicalEntity(id=2, name="Beta Corp"),
            CanonicalEntity(id=3, name="Acme"),
        ]
        assert [c.id for c in find_matching_companies("Acme Logistics", companies)] == [1, 3]

    def test_no_cap(self):
        companies = [CanonicalEntity(id=i, name=f"Acme Branch {i}") for i in range(25)]
        assert len(find_matching_companies("Acme", companies)) == 25

    def test_empty(self, companies):
        assert find_matching_companies(None, companies) == []
