from saas_atlas.core.models import Company
from saas_atlas.search.grouping import (
    MAX_RELATED, distinct_categories, group_by_category, related_companies
)


def make_company(id, category):
    return Company(id=id, name=f"Product {id}", category=category, docs_url="https://example.com")


class TestCategoryGrouping:
    """Test suite for category grouping."""

    def setup_method(self):
        """Setup test data."""
        self.companies = [
            make_company("1", "Payments"),
            make_company("2", "Analytics"),
            make_company("3", "Payments"),
            make_company("4", "Observability"),
            make_company("5", "Analytics"),
        ]

    def test_distinct_categories_first_seen_order(self):
        """Test categories are collected once, in first-seen order."""
        assert distinct_categories(self.companies) == ["Payments", "Analytics", "Observability"]

    def test_groups_preserve_relative_order(self):
        """Test members keep their input order."""
        groups = group_by_category(self.companies)
        assert [c.id for c in groups["Payments"]] == ["1", "3"]
        assert [c.id for c in groups["Analytics"]] == ["2", "5"]
        assert [c.id for c in groups["Observability"]] == ["4"]

    def test_union_of_groups_equals_input(self):
        """Test each record appears exactly once, keyed by its category."""
        groups = group_by_category(self.companies)
        members = [c for group in groups.values() for c in group]
        assert sorted(c.id for c in members) == sorted(c.id for c in self.companies)
        for category, group in groups.items():
            assert all(c.category == category for c in group)

    def test_empty_input(self):
        """Test grouping of an empty list."""
        assert group_by_category([]) == {}
        assert distinct_categories([]) == []


class TestRelatedCompanies:
    """Test suite for related-company derivation."""

    def test_excludes_selected_company(self):
        """Test the selected company is never related to itself."""
        companies = [make_company("1", "Payments"), make_company("2", "Payments")]
        related = related_companies(companies, companies[0])
        assert [c.id for c in related] == ["2"]

    def test_same_category_only(self):
        """Test related companies share the selected category."""
        companies = [make_company("1", "Payments"), make_company("2", "Analytics"),
                     make_company("3", "Payments")]
        related = related_companies(companies, companies[0])
        assert all(c.category == "Payments" for c in related)
        assert [c.id for c in related] == ["3"]

    def test_capped_at_five(self):
        """Test result size never exceeds the cap."""
        companies = [make_company(str(i), "Payments") for i in range(10)]
        related = related_companies(companies, companies[0])
        assert len(related) == MAX_RELATED == 5
        assert [c.id for c in related] == ["1", "2", "3", "4", "5"]

        assert len(related_companies(companies, companies[0], limit=50)) == 5
        assert len(related_companies(companies, companies[0], limit=2)) == 2
        assert related_companies(companies, companies[0], limit=0) == []

    def test_identity_by_id(self):
        """Test exclusion compares ids, not object identity."""
        companies = [make_company("1", "Payments"), make_company("2", "Payments")]
        copy = make_company("1", "Payments")
        assert [c.id for c in related_companies(companies, copy)] == ["2"]
