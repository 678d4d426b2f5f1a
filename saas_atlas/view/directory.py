"""
Directory view state: load once, search, group, select and drill into a company.

The view is headless. It holds the derived state a front end renders and
exposes the transitions triggered by user events (activation, keystroke,
selection, back).
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

from saas_atlas.core.models import Company, ResourceLink, ScoredCompany, ViewMode
from saas_atlas.links.resources import LinkBuilder
from saas_atlas.search.engine import SearchEngine, is_blank
from saas_atlas.search.grouping import distinct_categories, group_by_category, related_companies
from saas_atlas.search.history import RecentSearches
from saas_atlas.store.loader import DirectoryLoader


logger = logging.getLogger(__name__)

ALL_PRODUCTS = 'All Products'


@dataclass
class DirectoryOptions:
    """Behaviour switches shared by every directory variant."""
    ranking_enabled: bool = True
    group_by_category: bool = True
    intent_filters: bool = False
    related_limit: int = 5

    @classmethod
    def from_config(cls, directory_config: Dict) -> 'DirectoryOptions':
        """Build options from the ``directory`` configuration section."""
        return cls(
            ranking_enabled=directory_config.get('ranking_enabled', True),
            group_by_category=directory_config.get('group_by_category', True),
            intent_filters=directory_config.get('intent_filters', False),
            related_limit=directory_config.get('related_limit', 5),
        )


class DirectoryView:
    """
    View model of the company directory.

    Two mutually exclusive modes: LIST while nothing is selected, DETAIL
    while a company is selected.
    """

    def __init__(self, loader: DirectoryLoader, options: Optional[DirectoryOptions] = None,
                 engine: Optional[SearchEngine] = None, link_builder: Optional[LinkBuilder] = None,
                 history: Optional[RecentSearches] = None):
        """
        Initialize the view.

        Args:
            loader: Loads the full company list on activation
            options: Behaviour switches
            engine: Search strategy (defaults to options.ranking_enabled)
            link_builder: Builds logo and resource links
            history: Recent searches; None disables recording
        """
        self.loader = loader
        self.options = options or DirectoryOptions()
        self.engine = engine or SearchEngine(ranking_enabled=self.options.ranking_enabled)
        self.link_builder = link_builder or LinkBuilder()
        self.history = history

        self.companies: List[Company] = []
        self.categories: List[str] = []
        self.loading = True
        self.error: Optional[str] = None
        self.query = ''
        self.results: List[ScoredCompany] = []
        self.selected: Optional[Company] = None
        self.intent: Optional[str] = None
        self._activated = False

    # -- loading ---------------------------------------------------------

    def activate(self) -> List[Company]:
        """
        Load the directory. Only the first call fetches.

        Returns:
            The loaded companies (empty on failure)
        """
        if self._activated:
            return self.companies
        self._activated = True

        self.loading = True
        try:
            self.companies = self.loader.load()
        finally:
            self.loading = False
        self.error = self.loader.last_error
        self.categories = distinct_categories(self.companies)

        # A query typed before the load finished applies to the loaded list
        if not is_blank(self.query):
            self.results = self.engine.scored(self.companies, self.query)

        logger.info(f"Directory loaded with {len(self.companies)} companies "
                    f"in {len(self.categories)} categories")
        return self.companies

    @property
    def load_failed(self) -> bool:
        return self.error is not None

    # -- search ----------------------------------------------------------

    def search(self, query: str, remember: bool = False) -> List[Company]:
        """
        Recompute results for a query against the full list.

        Args:
            query: Current search box contents
            remember: Record the query in recent searches

        Returns:
            Companies visible after the search
        """
        self.query = query or ''
        if is_blank(self.query):
            self.results = []
        else:
            self.results = self.engine.scored(self.companies, self.query)

        if remember and self.history is not None:
            self.history.add(self.query)

        return self.visible_companies()

    @property
    def has_query(self) -> bool:
        return not is_blank(self.query)

    @property
    def title(self) -> str:
        """Heading of the list view."""
        return 'Results' if self.has_query else ALL_PRODUCTS

    def visible_companies(self) -> List[Company]:
        """Search results while a query is active, otherwise every company."""
        if self.has_query:
            return [r.company for r in self.results]
        return list(self.companies)

    def grouped(self) -> Dict[str, List[Company]]:
        """
        Visible companies grouped for display.

        Without category grouping everything falls under a single heading.
        """
        visible = self.visible_companies()
        if not self.options.group_by_category:
            return {self.title: visible} if visible else {}
        return group_by_category(visible)

    def recent_searches(self) -> List[str]:
        return self.history.list() if self.history is not None else []

    # -- selection -------------------------------------------------------

    @property
    def mode(self) -> ViewMode:
        return ViewMode.DETAIL if self.selected is not None else ViewMode.LIST

    def select(self, company: Company) -> None:
        """Show the detail view for a company."""
        self.selected = company

    def clear_selection(self) -> None:
        """Return to the list view."""
        self.selected = None

    def find(self, key: str) -> Optional[Company]:
        """
        Locate a company by id or by case-insensitive exact name.

        Args:
            key: Company id or name

        Returns:
            The matching company or None
        """
        key = (key or '').strip()
        if not key:
            return None
        for company in self.companies:
            if company.id == key:
                return company
        lowered = key.lower()
        for company in self.companies:
            if company.name.lower() == lowered:
                return company
        return None

    def related(self, limit: Optional[int] = None) -> List[Company]:
        """Companies in the selected company's category, excluding it."""
        if self.selected is None:
            return []
        if limit is None:
            limit = self.options.related_limit
        return related_companies(self.companies, self.selected, min(limit, self.options.related_limit))

    # -- resources -------------------------------------------------------

    def set_intent(self, intent: Optional[str]) -> None:
        """
        Restrict detail resources to one intent (None shows all).

        Raises:
            ValueError: If the intent is unknown
        """
        if intent is not None and intent not in self.link_builder.intents:
            raise ValueError(
                f"Unknown intent '{intent}'. Expected one of: {', '.join(self.link_builder.intents)}"
            )
        self.intent = intent

    def logo_url(self, company: Optional[Company] = None) -> Optional[str]:
        company = company or self.selected
        if company is None:
            return None
        return self.link_builder.logo_url(company.docs_url)

    def resources(self) -> List[ResourceLink]:
        """Derived resource links of the selected company."""
        if self.selected is None:
            return []
        intents = None
        if self.options.intent_filters and self.intent is not None:
            intents = [self.intent]
        return self.link_builder.resource_links(self.selected, intents)
