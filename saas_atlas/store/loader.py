"""
Directory loader: one read of the full company collection per view activation.
"""

import logging
from typing import List, Optional, Protocol

from saas_atlas.core.exceptions import StoreError, CSVProcessingError
from saas_atlas.core.models import Company


logger = logging.getLogger(__name__)


class CompanySource(Protocol):
    """Anything that can return the full, name-ordered company list."""

    def fetch_companies(self) -> List[Company]: ...


class DirectoryLoader:
    """
    Load the company directory from a source.

    Retrieval errors are logged and treated as an empty directory. The error
    is kept on ``last_error`` so a caller can tell "fetch failed" apart from
    "no companies".
    """

    def __init__(self, source: CompanySource):
        """
        Initialize the loader.

        Args:
            source: Store client or CSV snapshot reader
        """
        self.source = source
        self.last_error: Optional[str] = None

    @property
    def failed(self) -> bool:
        """Whether the last load ended in a retrieval error."""
        return self.last_error is not None

    def load(self) -> List[Company]:
        """
        Retrieve all companies.

        Returns:
            Companies ordered by name, or an empty list on failure
        """
        self.last_error = None
        try:
            companies = self.source.fetch_companies()
        except (StoreError, CSVProcessingError) as e:
            logger.error(f"Failed to load company directory: {e}")
            self.last_error = str(e)
            return []

        if not companies:
            logger.info("Company directory is empty")
            return []

        return list(companies)
