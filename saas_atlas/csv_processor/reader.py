"""CSV snapshot reader for SaaS Atlas."""

import logging
import pandas as pd
from pathlib import Path
from typing import Iterator, Optional, Dict, Any, List

from saas_atlas.core.exceptions import CSVValidationError
from saas_atlas.core.models import Company


logger = logging.getLogger(__name__)


class CompanyCSVReader:
    """Read a directory snapshot from CSV, with validation and error handling."""

    def __init__(self, file_path: str):
        """Initialize CSV reader.

        Args:
            file_path: Path to the CSV file

        Raises:
            FileNotFoundError: If the file doesn't exist
        """
        self.file_path = Path(file_path)
        if not self.file_path.exists():
            raise FileNotFoundError(f"CSV file not found: {file_path}")

        self._required_columns = {'id', 'name', 'category', 'docs_url'}
        self._column_mapping = {
            'id': ['id', 'company_id'],
            'name': ['name', 'company_name', 'product'],
            'category': ['category', 'product_category'],
            'docs_url': ['docs_url', 'docsurl', 'documentation_url', 'url'],
            'description': ['description', 'summary'],
            'created_at': ['created_at', 'createdat'],
            'updated_at': ['updated_at', 'updatedat']
        }

    def _normalize_columns(self, df: pd.DataFrame) -> pd.DataFrame:
        """Normalize column names to lowercase and map variations.

        Args:
            df: DataFrame with original column names

        Returns:
            DataFrame with normalized column names
        """
        column_mapping = {}
        for col in df.columns:
            col_lower = str(col).lower().strip()
            for normalized_name, variations in self._column_mapping.items():
                if col_lower in variations:
                    column_mapping[col] = normalized_name
                    break

        return df.rename(columns=column_mapping)

    def _validate_csv(self, df: pd.DataFrame) -> None:
        """Validate CSV structure and required columns.

        Args:
            df: DataFrame to validate

        Raises:
            CSVValidationError: If validation fails
        """
        missing_columns = sorted(self._required_columns - set(df.columns))
        if missing_columns:
            raise CSVValidationError(f"Missing required columns: {missing_columns}")

    def _validate_row(self, row: pd.Series, row_index: int) -> Optional[Dict[str, Any]]:
        """Validate a single row and return data or None if invalid.

        Args:
            row: DataFrame row
            row_index: Row index for logging

        Returns:
            Dictionary with row data or None if invalid
        """
        row_data = {
            col: (str(row[col]).strip() if pd.notna(row[col]) else '')
            for col in self._column_mapping
            if col in row.index
        }

        for required in ('id', 'name', 'category'):
            if not row_data.get(required):
                logger.warning(f"Row {row_index + 2}: Missing {required}, skipping")
                return None

        return row_data

    def read_companies(self) -> Iterator[Company]:
        """Read companies from CSV file in file order.

        Yields:
            Company objects

        Raises:
            CSVValidationError: If CSV structure is invalid
        """
        logger.info(f"Reading companies from CSV: {self.file_path}")

        try:
            df = pd.read_csv(self.file_path, dtype=str)  # Read all as strings
        except pd.errors.EmptyDataError:
            logger.warning("CSV file is empty or contains no data")
            return
        except (pd.errors.ParserError, UnicodeDecodeError, OSError) as e:
            logger.error(f"Error reading CSV file: {e}")
            raise CSVValidationError(f"Error reading CSV file: {e}")

        if df.empty:
            logger.warning("CSV file is empty")
            return

        df = self._normalize_columns(df)
        self._validate_csv(df)

        total_rows = len(df)
        valid_count = 0
        seen_ids = set()

        for index, row in df.iterrows():
            row_data = self._validate_row(row, index)
            if row_data is None:
                continue

            if row_data['id'] in seen_ids:
                logger.warning(f"Row {index + 2}: Duplicate id {row_data['id']}, skipping")
                continue

            try:
                company = Company.from_row(row_data)
            except ValueError as e:
                logger.warning(f"Row {index + 2}: Error creating Company object: {e}, skipping")
                continue

            seen_ids.add(company.id)
            valid_count += 1
            yield company

        logger.info(f"Successfully read {valid_count} out of {total_rows} companies")

    def fetch_companies(self) -> List[Company]:
        """Return all companies ordered by name ascending (case-sensitive)."""
        return sorted(self.read_companies(), key=lambda company: company.name)
