"""Category grouping of company lists."""

from typing import Dict, List, Sequence

from saas_atlas.core.models import Company


MAX_RELATED = 5


def distinct_categories(companies: Sequence[Company]) -> List[str]:
    """Distinct category values in first-seen order."""
    return list(dict.fromkeys(c.category for c in companies))


def group_by_category(companies: Sequence[Company]) -> Dict[str, List[Company]]:
    """
    Partition companies by category.

    Groups appear in first-seen order and members keep their relative order
    from the input.
    """
    groups: Dict[str, List[Company]] = {}
    for company in companies:
        groups.setdefault(company.category, []).append(company)
    return groups


def related_companies(companies: Sequence[Company], selected: Company, limit: int = MAX_RELATED) -> List[Company]:
    """
    Other companies in the selected company's category, in list order.

    Args:
        companies: Full company list
        selected: Currently selected company (never included)
        limit: Maximum number of results

    Returns:
        At most ``limit`` companies sharing the selected category
    """
    limit = min(limit, MAX_RELATED)
    if limit <= 0:
        return []
    related = []
    for company in companies:
        if company.category != selected.category or company.same_as(selected):
            continue
        related.append(company)
        if len(related) >= limit:
            break
    return related
