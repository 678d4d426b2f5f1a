"""
Recent searches, persisted through an injected key-value storage.
"""

import json
import logging
from pathlib import Path
from typing import Dict, List, Optional, Protocol

from saas_atlas.core.exceptions import HistoryError


logger = logging.getLogger(__name__)


class KeyValueStorage(Protocol):
    """Minimal string key-value store (local storage equivalent)."""

    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStorage:
    """In-process storage, mostly for tests and one-shot sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStorage:
    """
    Persist key-value pairs to a JSON file across sessions.
    """

    def __init__(self, path: str = 'data/recent_searches.json'):
        """
        Initialize JSON file storage.

        Args:
            path: Path to the storage file
        """
        self.path = Path(path)
        self._data = self._load()

    def _load(self) -> Dict[str, str]:
        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.warning(f"Ignoring unreadable storage file {self.path}: {e}")
            return {}
        if not isinstance(data, dict):
            logger.warning(f"Ignoring malformed storage file: {self.path}")
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w') as f:
                json.dump(self._data, f, indent=2)
        except OSError as e:
            raise HistoryError(f"Could not save {self.path}: {e}")


class RecentSearches:
    """
    Most-recent-first list of distinct search queries, bounded in size.
    """

    def __init__(self, storage: KeyValueStorage, key: str = 'recent_searches', limit: int = 5):
        """
        Initialize recent searches.

        Args:
            storage: Injected key-value storage
            key: Storage key holding the JSON-encoded list
            limit: Maximum number of queries kept
        """
        if limit <= 0:
            raise ValueError("Recent searches limit must be positive")
        self.storage = storage
        self.key = key
        self.limit = limit

    def list(self) -> List[str]:
        """Stored queries, most recent first. Corrupt values read as empty."""
        raw = self.storage.get(self.key)
        if not raw:
            return []
        try:
            queries = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning(f"Discarding corrupt recent searches under '{self.key}'")
            return []
        if not isinstance(queries, list):
            return []
        return [q for q in queries if isinstance(q, str)][:self.limit]

    def add(self, query: str) -> List[str]:
        """
        Record a query as the most recent one.

        Blank queries are ignored; an existing identical query moves to the
        front instead of being duplicated.

        Returns:
            Updated list
        """
        query = (query or '').strip()
        if not query:
            return self.list()

        queries = [query] + [q for q in self.list() if q != query]
        queries = queries[:self.limit]
        self.storage.set(self.key, json.dumps(queries))
        return queries

    def clear(self) -> None:
        self.storage.set(self.key, json.dumps([]))
