"""Search history: newest first, deduplicated by exact query, persisted on change."""

from collections import Counter
from datetime import datetime
from typing import List

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from .models import PopularSearch, SearchHistoryItem
from .storage import HISTORY_KEY, KeyValueStore


_history_adapter = TypeAdapter(List[SearchHistoryItem])


class SearchHistory:
    """Recorded queries with their latest result count."""

    def __init__(self, store: KeyValueStore, max_size: int = 50):
        self.store = store
        self.max_size = max_size
        self._items: List[SearchHistoryItem] = self._load()

    def _load(self) -> List[SearchHistoryItem]:
        result = self.store.read(HISTORY_KEY)
        if not result.ok:
            logger.warning(f"Failed to load search history: {result.error}")
            return []
        if result.value is None:
            return []
        try:
            items = _history_adapter.validate_python(result.value)
        except ValidationError as e:
            logger.warning(f"Discarding malformed search history: {e.error_count()} errors")
            return []
        return items[:self.max_size]

    def _save(self) -> None:
        result = self.store.write(HISTORY_KEY, _history_adapter.dump_python(self._items, mode="json"))
        if not result.ok:
            logger.warning(f"Failed to save search history: {result.error}")

    def record(self, query: str, result_count: int) -> SearchHistoryItem:
        """Move query to the front with a fresh timestamp and count."""
        times = 1
        for i, item in enumerate(self._items):
            if item.query == query:
                times += self._items.pop(i).count
                break

        entry = SearchHistoryItem(
            query=query,
            timestamp=datetime.now(),
            result_count=result_count,
            count=times,
        )
        self._items.insert(0, entry)
        del self._items[self.max_size:]
        self._save()
        return entry

    def items(self) -> List[SearchHistoryItem]:
        return [item.model_copy() for item in self._items]

    def clear(self) -> None:
        self._items = []
        self._save()

    def remove(self, query: str) -> bool:
        before = len(self._items)
        self._items = [item for item in self._items if item.query != query]
        self._save()
        return len(self._items) != before

    def matching(self, text: str, limit: int = 5) -> List[SearchHistoryItem]:
        needle = text.lower()
        return [item for item in self._items if needle in item.query.lower()][:limit]

    def popular(self, limit: int = 5) -> List[PopularSearch]:
        counts: Counter = Counter()
        for item in self._items:
            counts[item.query] += item.count
        # Counter.most_common keeps first-seen order for ties, i.e. most recent first
        return [PopularSearch(query=q, count=c) for q, c in counts.most_common(limit)]

    def __len__(self) -> int:
        return len(self._items)
