"""
Client-side search over the in-memory company list.

Matching is case-insensitive substring containment against name, category
and description. Ranked search scores each match by the highest-priority
field it hit.
"""

from typing import List, Optional, Sequence, Tuple

from saas_atlas.core.models import Company, ScoredCompany


# Field priority, highest first
FIELD_SCORES: Tuple[Tuple[str, int], ...] = (
    ('name', 100),
    ('category', 75),
    ('description', 50),
)

_SCORE_BY_FIELD = dict(FIELD_SCORES)


def is_blank(query: Optional[str]) -> bool:
    """Empty or whitespace-only queries mean "no filter"."""
    return query is None or not query.strip()


def match_field(company: Company, query: str) -> Optional[str]:
    """
    Return the highest-priority field containing the query, if any.

    Args:
        company: Company to test
        query: Non-blank search query

    Returns:
        'name', 'category', 'description' or None
    """
    needle = query.lower()
    for field, _ in FIELD_SCORES:
        value = getattr(company, field)
        if value and needle in value.lower():
            return field
    return None


def score_company(company: Company, query: str) -> int:
    """Relevance score of a company for a query (0 when it doesn't match or the query is blank)."""
    if is_blank(query):
        return 0
    field = match_field(company, query)
    return _SCORE_BY_FIELD[field] if field else 0


def filter_companies(companies: Sequence[Company], query: Optional[str]) -> List[Company]:
    """
    Unranked filter, keeping encounter order.

    A blank query returns the full list.
    """
    if is_blank(query):
        return list(companies)
    return [c for c in companies if match_field(c, query) is not None]


def rank_companies(companies: Sequence[Company], query: Optional[str]) -> List[ScoredCompany]:
    """
    Score and sort matches by relevance, highest first.

    Ties keep encounter order. A blank query returns every company with a
    score of 0 in original order.
    """
    if is_blank(query):
        return [ScoredCompany(company=c, score=0) for c in companies]

    scored = []
    for company in companies:
        field = match_field(company, query)
        if field is None:
            continue
        scored.append(ScoredCompany(company=company, score=_SCORE_BY_FIELD[field], matched_field=field))

    # sort() is stable, so equal scores keep list order
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored


class SearchEngine:
    """Search strategy selected by configuration."""

    def __init__(self, ranking_enabled: bool = True):
        self.ranking_enabled = ranking_enabled

    def search(self, companies: Sequence[Company], query: Optional[str]) -> List[Company]:
        """
        Filter (and optionally rank) companies for a query.

        Args:
            companies: Full in-memory list
            query: Free-text query

        Returns:
            Matching companies; the unfiltered list for a blank query
        """
        if self.ranking_enabled:
            return [s.company for s in rank_companies(companies, query)]
        return filter_companies(companies, query)

    def scored(self, companies: Sequence[Company], query: Optional[str]) -> List[ScoredCompany]:
        """Matches with scores, in the order search() returns them."""
        if self.ranking_enabled:
            return rank_companies(companies, query)
        if is_blank(query):
            return [ScoredCompany(company=c, score=0) for c in companies]
        results = []
        for company in companies:
            field = match_field(company, query)
            if field is not None:
                results.append(ScoredCompany(company=company, score=_SCORE_BY_FIELD[field], matched_field=field))
        return results
