"""
Supabase (PostgREST) client for the company directory table.
"""

import requests
import logging
from typing import List, Dict, Any

from saas_atlas.core.exceptions import StoreError
from saas_atlas.core.models import Company


class SupabaseClient:
    """
    Read-only client for the companies table of a Supabase project.

    Issues a single "select all rows ordered by name" query. There is no
    paging, projection or retry; any failure surfaces as StoreError.
    """

    def __init__(self, url: str, api_key: str, table: str = "companies", timeout: float = 30):
        """
        Initialize the Supabase client.

        Args:
            url: Project URL (e.g. https://xyz.supabase.co)
            api_key: Anon or service key sent as apikey and bearer token
            table: Name of the companies table
            timeout: Request timeout in seconds

        Raises:
            ValueError: If URL or API key is not provided
        """
        if not url or not url.strip():
            raise ValueError("Supabase URL is required")
        if not api_key or not api_key.strip():
            raise ValueError("Supabase API key is required")

        self.base_url = url.strip().rstrip('/')
        self.api_key = api_key.strip()
        self.table = table
        self.timeout = timeout
        self.logger = logging.getLogger('saas_atlas')

    @property
    def endpoint(self) -> str:
        """REST endpoint of the companies table."""
        return f"{self.base_url}/rest/v1/{self.table}"

    def _headers(self) -> Dict[str, str]:
        return {
            "apikey": self.api_key,
            "Authorization": f"Bearer {self.api_key}",
            "Accept": "application/json"
        }

    def fetch_companies(self) -> List[Company]:
        """
        Fetch every company, ordered by name ascending.

        Returns:
            List of Company objects (empty when the table is empty)

        Raises:
            StoreError: For HTTP errors, network issues or invalid responses
        """
        params = {
            "select": "*",
            "order": "name.asc"
        }

        try:
            response = requests.get(
                self.endpoint, headers=self._headers(), params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            raise StoreError(f"Network error while loading companies: {e}")

        if response.status_code != 200:
            raise StoreError(
                f"Store request failed with status {response.status_code}: {response.text}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise StoreError(f"Invalid JSON response: {e}")

        if data is None:
            return []
        if not isinstance(data, list):
            raise StoreError(f"Unexpected response payload: expected a list, got {type(data).__name__}")

        return self._parse_rows(data)

    def _parse_rows(self, rows: List[Any]) -> List[Company]:
        """Convert raw rows to Company objects, skipping malformed ones."""
        companies = []
        for index, row in enumerate(rows):
            if not isinstance(row, dict):
                self.logger.warning(f"Row {index}: not an object, skipping")
                continue
            try:
                companies.append(Company.from_row(row))
            except ValueError as e:
                self.logger.warning(f"Row {index}: {e}, skipping")
        self.logger.info(f"Loaded {len(companies)} companies from {self.table}")
        return companies
