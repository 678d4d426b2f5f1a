"""CSV export of directory listings."""

import logging
import pandas as pd
from pathlib import Path
from typing import Dict, Optional, Sequence

from saas_atlas.core.exceptions import CSVProcessingError
from saas_atlas.core.models import Company
from saas_atlas.links.resources import LinkBuilder


logger = logging.getLogger(__name__)


class CompanyCSVWriter:
    """Write a (possibly filtered) company listing to CSV."""

    columns = [
        'id',
        'name',
        'category',
        'docs_url',
        'description',
        'logo_url',
        'score'
    ]

    def __init__(self, output_path: str, link_builder: Optional[LinkBuilder] = None):
        """Initialize CSV writer.

        Args:
            output_path: Path to the output CSV file
            link_builder: Used to derive the logo URL column
        """
        self.output_path = Path(output_path)
        self.link_builder = link_builder or LinkBuilder()

    def _company_to_dict(self, company: Company, score: Optional[int]) -> Dict[str, object]:
        return {
            'id': company.id,
            'name': company.name,
            'category': company.category,
            'docs_url': company.docs_url,
            'description': company.description or '',
            'logo_url': self.link_builder.logo_url(company.docs_url) or '',
            'score': '' if score is None else score
        }

    def write_companies(self, companies: Sequence[Company],
                        scores: Optional[Dict[str, int]] = None) -> int:
        """Write companies to the CSV file, replacing any existing file.

        Args:
            companies: Companies in the order they should appear
            scores: Optional relevance score per company id

        Returns:
            Number of rows written
        """
        scores = scores or {}
        rows = [self._company_to_dict(c, scores.get(c.id)) for c in companies]

        logger.info(f"Writing {len(rows)} companies to {self.output_path}")

        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            df = pd.DataFrame(rows, columns=self.columns)
            df.to_csv(self.output_path, mode='w', header=True, index=False)
        except OSError as e:
            logger.error(f"Error writing companies to CSV: {e}")
            raise CSVProcessingError(f"Error writing CSV file: {e}")

        return len(rows)
