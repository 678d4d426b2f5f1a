import pytest

from saas_atlas.core.models import Company
from saas_atlas.search.engine import (
    SearchEngine, filter_companies, match_field, rank_companies, score_company
)


def make_company(id, name, category, description=None):
    return Company(id=id, name=name, category=category,
                   docs_url=f"https://{name.lower()}.com/docs", description=description)


class TestSearchEngine:
    """Test suite for client-side company search."""

    def setup_method(self):
        """Setup test data."""
        self.stripe = make_company("1", "Stripe", "Payments")
        self.datadog = make_company("2", "Datadog", "Observability")
        self.segment = make_company("3", "Segment", "Analytics", "stripe data pipeline")
        self.companies = [self.stripe, self.datadog, self.segment]

    def test_ranked_search_example(self):
        """Test ranked search orders name matches above description matches."""
        ranked = rank_companies(self.companies, "stripe")

        assert [r.company.name for r in ranked] == ["Stripe", "Segment"]
        assert [r.score for r in ranked] == [100, 50]
        assert ranked[0].matched_field == "name"
        assert ranked[1].matched_field == "description"

    def test_empty_query_returns_unfiltered_list(self):
        """Test empty and whitespace queries mean no filter."""
        engine = SearchEngine()
        assert engine.search(self.companies, "") == self.companies
        assert engine.search(self.companies, "   ") == self.companies
        assert filter_companies(self.companies, None) == self.companies

    def test_case_insensitive_matching(self):
        """Test matching ignores case."""
        assert match_field(self.datadog, "DATADOG") == "name"
        assert match_field(self.datadog, "observ") == "category"
        assert match_field(self.segment, "PIPELINE") == "description"

    def test_field_priority_scores(self):
        """Test each field has its own score."""
        company = make_company("9", "Acme Pay", "Payments", "pay later")
        assert score_company(company, "pay") == 100
        assert score_company(company, "ments") == 75
        assert score_company(company, "later") == 50
        assert score_company(company, "nothing") == 0

    @pytest.mark.parametrize("query", ["", "   ", None])
    def test_blank_query_scores_zero(self, query):
        """Test a blank query carries no relevance."""
        assert score_company(self.stripe, query) == 0

    def test_missing_description_does_not_match(self):
        """Test companies without a description only match on name/category."""
        assert match_field(self.stripe, "pipeline") is None

    def test_ties_keep_encounter_order(self):
        """Test stable ordering for equal scores."""
        companies = [
            make_company("1", "Beta", "Payments"),
            make_company("2", "Alpha Pay", "Billing"),
            make_company("3", "Gamma", "Payments"),
        ]
        ranked = rank_companies(companies, "pay")
        assert [r.company.id for r in ranked] == ["2", "1", "3"]

    def test_unranked_filter_keeps_order(self):
        """Test unranked filtering keeps encounter order."""
        engine = SearchEngine(ranking_enabled=False)
        results = engine.search(self.companies, "stripe")
        assert results == [self.stripe, self.segment]

        results = engine.search(self.companies, "a")
        assert results == self.companies

    def test_query_is_not_trimmed_for_matching(self):
        """Test a non-blank query is matched as typed."""
        assert filter_companies(self.companies, " stripe") == []
        assert filter_companies(self.companies, "stripe data") == [self.segment]

    @pytest.mark.parametrize("query", ["stripe", "a", "data", "OBS", "zzz"])
    def test_every_result_contains_query(self, query):
        """Test all results contain the query in some field."""
        needle = query.lower()
        for company in SearchEngine().search(self.companies, query):
            fields = [company.name, company.category, company.description or ""]
            assert any(needle in f.lower() for f in fields)

    @pytest.mark.parametrize("query", ["stripe", "a", "data", "payments"])
    def test_filtering_is_idempotent(self, query):
        """Test filtering a filtered result again changes nothing."""
        engine = SearchEngine()
        once = engine.search(self.companies, query)
        twice = engine.search(once, query)
        assert set(c.id for c in once) == set(c.id for c in twice)

    def test_scored_matches_search_order(self):
        """Test scored() and search() agree on ordering."""
        for ranking in (True, False):
            engine = SearchEngine(ranking_enabled=ranking)
            scored = engine.scored(self.companies, "stripe")
            assert [s.company for s in scored] == engine.search(self.companies, "stripe")
