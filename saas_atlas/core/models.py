"""Data models for SaaS Atlas."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Dict, Any


def _clean(value: Any) -> str:
    """Convert a raw cell value to a stripped string ('' for missing/NaN)."""
    if value is None:
        return ''
    # NaN is the only value not equal to itself
    if isinstance(value, float) and value != value:
        return ''
    return str(value).strip()


@dataclass(frozen=True)
class Company:
    """A single company entry in the directory."""
    id: str
    name: str
    category: str
    docs_url: str
    description: Optional[str] = None
    created_at: Optional[str] = None
    updated_at: Optional[str] = None

    def __post_init__(self):
        """Validate required fields."""
        if not self.id:
            raise ValueError("Company id must not be empty")
        if not self.name:
            raise ValueError("Company name must not be empty")
        if not self.category:
            raise ValueError("Company category must not be empty")

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> 'Company':
        """Create Company from a store or CSV row.

        Args:
            row: Dictionary representing a single row

        Returns:
            Company instance

        Raises:
            ValueError: If id, name or category is missing
        """
        description = _clean(row.get('description'))
        created_at = _clean(row.get('created_at'))
        updated_at = _clean(row.get('updated_at'))

        return cls(
            id=_clean(row.get('id')),
            name=_clean(row.get('name')),
            category=_clean(row.get('category')),
            docs_url=_clean(row.get('docs_url')),
            description=description or None,
            created_at=created_at or None,
            updated_at=updated_at or None,
        )

    def same_as(self, other: Optional['Company']) -> bool:
        """Identity check by id."""
        return other is not None and self.id == other.id


@dataclass
class ScoredCompany:
    """A search match with its relevance score."""
    company: Company
    score: int  # 0, 50, 75 or 100
    matched_field: Optional[str] = None

    def __post_init__(self):
        """Validate relevance score."""
        if not (0 <= self.score <= 100):
            raise ValueError("Relevance score must be between 0 and 100")


@dataclass(frozen=True)
class ResourceLink:
    """A derived (unverified) link to a category of support content."""
    intent: str
    label: str
    url: str


class ViewMode(Enum):
    """Mutually exclusive directory view modes."""
    LIST = 'list'
    DETAIL = 'detail'
