import pytest
from unittest.mock import Mock

from saas_atlas.core.exceptions import StoreError
from saas_atlas.core.models import Company, ViewMode
from saas_atlas.search.history import MemoryStorage, RecentSearches
from saas_atlas.store.loader import DirectoryLoader
from saas_atlas.view.directory import DirectoryOptions, DirectoryView


def make_company(id, name, category, description=None):
    return Company(id=id, name=name, category=category,
                   docs_url=f"https://www.{name.lower()}.com/help", description=description)


COMPANIES = [
    make_company("1", "Adyen", "Payments"),
    make_company("2", "Datadog", "Observability"),
    make_company("3", "Segment", "Analytics", "stripe data pipeline"),
    make_company("4", "Stripe", "Payments"),
]


def make_view(companies=None, **options):
    source = Mock()
    source.fetch_companies.return_value = list(COMPANIES if companies is None else companies)
    history = RecentSearches(MemoryStorage())
    view = DirectoryView(DirectoryLoader(source), DirectoryOptions(**options), history=history)
    return view, source


class TestDirectoryView:
    """Test suite for the directory view state."""

    def test_initial_state(self):
        """Test the view starts loading in list mode."""
        view, _ = make_view()
        assert view.loading is True
        assert view.companies == []
        assert view.mode == ViewMode.LIST

    def test_activate_loads_once(self):
        """Test the directory is fetched exactly once."""
        view, source = make_view()
        view.activate()
        view.activate()

        assert source.fetch_companies.call_count == 1
        assert view.loading is False
        assert view.companies == COMPANIES
        assert view.categories == ["Payments", "Observability", "Analytics"]

    def test_load_failure_is_empty_with_error(self):
        """Test a retrieval error leaves an empty list and a distinct error."""
        source = Mock()
        source.fetch_companies.side_effect = StoreError("connection refused")
        view = DirectoryView(DirectoryLoader(source))
        view.activate()

        assert view.companies == []
        assert view.loading is False
        assert view.load_failed
        assert "connection refused" in view.error

    def test_unexpected_load_error_ends_loading(self):
        """Test an error the loader does not handle still ends the loading state."""
        source = Mock()
        source.fetch_companies.side_effect = RuntimeError("boom")
        view = DirectoryView(DirectoryLoader(source))

        with pytest.raises(RuntimeError):
            view.activate()
        assert view.loading is False
        assert view.companies == []

    def test_empty_directory_is_not_an_error(self):
        """Test an empty result is not reported as a failure."""
        view, _ = make_view(companies=[])
        view.activate()
        assert view.companies == []
        assert not view.load_failed

    def test_search_ranked(self):
        """Test ranked search results."""
        view, _ = make_view()
        view.activate()
        visible = view.search("stripe")

        assert [c.name for c in visible] == ["Stripe", "Segment"]
        assert [r.score for r in view.results] == [100, 50]
        assert view.title == "Results"

    def test_search_unranked(self):
        """Test unranked search keeps list order."""
        view, _ = make_view(ranking_enabled=False)
        view.activate()
        assert [c.name for c in view.search("stripe")] == ["Segment", "Stripe"]

    def test_blank_query_shows_everything(self):
        """Test clearing the query restores the full list."""
        view, _ = make_view()
        view.activate()
        view.search("stripe")
        visible = view.search("  ")

        assert visible == COMPANIES
        assert view.results == []
        assert view.title == "All Products"

    def test_query_before_load_applies_after_load(self):
        """Test a query typed while loading is applied once data arrives."""
        view, _ = make_view()
        view.search("data")
        assert view.visible_companies() == []

        view.activate()
        assert [c.name for c in view.visible_companies()] == ["Datadog", "Segment"]

    def test_search_remembers_queries(self):
        """Test only remembered searches are recorded."""
        view, _ = make_view()
        view.activate()
        view.search("str")
        view.search("stripe", remember=True)
        view.search("   ", remember=True)

        assert view.recent_searches() == ["stripe"]

    def test_grouped_by_category(self):
        """Test grouping of visible companies."""
        view, _ = make_view()
        view.activate()
        groups = view.grouped()

        assert list(groups) == ["Payments", "Observability", "Analytics"]
        assert [c.name for c in groups["Payments"]] == ["Adyen", "Stripe"]

        view.search("stripe")
        assert list(view.grouped()) == ["Payments", "Analytics"]

    def test_grouping_disabled(self):
        """Test a single heading when grouping is disabled."""
        view, _ = make_view(group_by_category=False)
        view.activate()
        assert view.grouped() == {"All Products": COMPANIES}

        view.search("zzz")
        assert view.grouped() == {}

    def test_select_and_clear(self):
        """Test the two view modes."""
        view, _ = make_view()
        view.activate()

        view.select(COMPANIES[1])
        assert view.mode == ViewMode.DETAIL
        assert view.selected is COMPANIES[1]

        view.select(COMPANIES[2])
        assert view.selected is COMPANIES[2]

        view.clear_selection()
        assert view.mode == ViewMode.LIST
        assert view.selected is None

    def test_related(self):
        """Test related companies for the selection."""
        view, _ = make_view()
        view.activate()
        assert view.related() == []

        view.select(COMPANIES[0])
        assert [c.name for c in view.related()] == ["Stripe"]

    def test_related_respects_configured_limit(self):
        """Test the related limit option."""
        companies = [make_company(str(i), f"Pay{i}", "Payments") for i in range(8)]
        view, _ = make_view(companies=companies, related_limit=3)
        view.activate()
        view.select(companies[0])
        assert [c.id for c in view.related()] == ["1", "2", "3"]
        assert len(view.related(limit=10)) == 3

    def test_find(self):
        """Test lookup by id and case-insensitive name."""
        view, _ = make_view()
        view.activate()
        assert view.find("2") is COMPANIES[1]
        assert view.find("stripe") is COMPANIES[3]
        assert view.find("  DATADOG ") is COMPANIES[1]
        assert view.find("unknown") is None
        assert view.find("") is None

    def test_resources_and_logo(self):
        """Test derived links for the selection."""
        view, _ = make_view()
        view.activate()
        assert view.resources() == []
        assert view.logo_url() is None

        view.select(COMPANIES[3])
        assert view.logo_url() == "https://logo.clearbit.com/stripe.com"
        resources = view.resources()
        assert len(resources) == 5
        assert resources[0].url == "https://stripe.com/docs"

    def test_intent_filter(self):
        """Test intent restricts resources only when enabled."""
        view, _ = make_view(intent_filters=True)
        view.activate()
        view.select(COMPANIES[3])

        view.set_intent("community")
        assert [r.url for r in view.resources()] == ["https://stripe.com/community"]

        view.set_intent(None)
        assert len(view.resources()) == 5

    def test_intent_ignored_when_disabled(self):
        """Test intent has no effect without intent filters."""
        view, _ = make_view(intent_filters=False)
        view.activate()
        view.select(COMPANIES[3])
        view.set_intent("community")
        assert len(view.resources()) == 5

    def test_unknown_intent(self):
        """Test unknown intents are rejected."""
        view, _ = make_view(intent_filters=True)
        with pytest.raises(ValueError) as exc_info:
            view.set_intent("billing")
        assert "Unknown intent" in str(exc_info.value)

    def test_options_from_config(self):
        """Test options are read from the directory config section."""
        options = DirectoryOptions.from_config({'ranking_enabled': False, 'intent_filters': True})
        assert options.ranking_enabled is False
        assert options.group_by_category is True
        assert options.intent_filters is True
        assert options.related_limit == 5
