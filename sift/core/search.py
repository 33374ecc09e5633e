"""Fuzzy search across all entity types, with history and suggestions."""

from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from loguru import logger

from .config import SearchConfig
from .filters import filter_results
from .highlight import DEFAULT_MARKER, highlight_matches
from .history import SearchHistory
from .index import FuzzyIndex
from .models import (
    Collections, Context, EntityType, FilterCriteria, PopularSearch, Project,
    SearchHistoryItem, SearchResult, SearchSuggestion,
)
from .storage import KeyValueStore


MAX_SUGGESTIONS = 10


class SearchEngine:
    """
    Holds one fuzzy index per entity type and runs ranked searches over them.

    The engine is not reactive: whoever mutates a collection must call
    update_index for the change to become searchable.
    """

    def __init__(self, store: KeyValueStore, config: Optional[SearchConfig] = None,
                 history_size: int = 50):
        self.config = config or SearchConfig()
        self.history = SearchHistory(store, max_size=history_size)
        self._indexes: Dict[EntityType, FuzzyIndex] = {}
        logger.info(f"Search engine ready ({len(self.history)} history entries)")

    def _build(self, entity_type: EntityType, items: Sequence) -> FuzzyIndex:
        return FuzzyIndex(
            entity_type,
            items,
            threshold=self.config.threshold,
            min_match_length=self.config.min_match_length,
        )

    def initialize_indexes(self, collections: Collections) -> None:
        """Build all five indexes from a snapshot."""
        for entity_type in EntityType:
            self._indexes[entity_type] = self._build(entity_type, collections.of_type(entity_type))

    def update_index(self, entity_type: EntityType, items: Sequence) -> None:
        """Rebuild exactly one index from a fresh collection."""
        entity_type = EntityType(entity_type)
        self._indexes[entity_type] = self._build(entity_type, items)

    def indexed_types(self) -> List[EntityType]:
        return list(self._indexes)

    def search(
        self,
        query: str,
        types: Optional[Iterable[EntityType]] = None,
        limit: Optional[int] = None,
        filters: Optional[FilterCriteria] = None,
    ) -> List[SearchResult]:
        """
        Search every selected index, rank hits best-first and narrow them.

        Empty or whitespace queries return [] and leave history untouched.
        Every other query is recorded with the number of results returned.
        """
        if not query.strip():
            return []

        if types is None:
            types = self.config.default_types
        selected = {EntityType(t) for t in types}
        if limit is None:
            limit = self.config.default_limit

        results: List[SearchResult] = []
        for entity_type in EntityType:
            if entity_type not in selected:
                continue
            index = self._indexes.get(entity_type)
            if index is None:
                continue
            for hit in index.search(query):
                results.append(SearchResult(
                    type=entity_type,
                    item=hit.item,
                    matches=hit.matches,
                    score=hit.score,
                ))

        results.sort(key=lambda r: r.score)

        if filters is not None:
            results = filter_results(results, filters)

        results = results[:limit]
        self.history.record(query, len(results))

        logger.debug(f"Search {query!r} returned {len(results)} results")
        return results

    def highlight_matches(self, text: str, query: str,
                          marker: Tuple[str, str] = DEFAULT_MARKER) -> str:
        return highlight_matches(text, query, marker)

    def get_suggestions(
        self,
        query: str,
        contexts: Sequence[Context] = (),
        projects: Sequence[Project] = (),
        tags: Sequence[str] = (),
    ) -> List[SearchSuggestion]:
        """History first, then @contexts, #projects and #tags."""
        needle = query.lower()
        suggestions: List[SearchSuggestion] = [
            SearchSuggestion(text=item.query, type="history", count=item.result_count)
            for item in self.history.matching(query, limit=5)
        ]

        suggestions.extend(
            SearchSuggestion(text=f"@{c.name}", type="context")
            for c in [c for c in contexts if needle in c.name.lower()][:3]
        )
        suggestions.extend(
            SearchSuggestion(text=f"#{p.title}", type="project")
            for p in [p for p in projects if needle in p.title.lower()][:3]
        )
        suggestions.extend(
            SearchSuggestion(text=f"#{t}", type="tag")
            for t in [t for t in tags if needle in t.lower()][:3]
        )
        return suggestions[:MAX_SUGGESTIONS]

    def get_search_history(self) -> List[SearchHistoryItem]:
        return self.history.items()

    def clear_search_history(self) -> None:
        self.history.clear()

    def remove_from_history(self, query: str) -> None:
        self.history.remove(query)

    def get_popular_searches(self, limit: int = 5) -> List[PopularSearch]:
        return self.history.popular(limit)
