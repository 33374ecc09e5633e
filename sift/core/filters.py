"""Filter criteria evaluation over snapshots and search results.

Both the smart-list path and the search post-filter go through the same
per-type predicates in ``sift.core.entities``; the mode selects the few
places where the two call sites differ.
"""

from typing import Any, Iterable, List, Optional

from .entities import FilterMode, kind_for
from .models import (
    Collections, EntityType, FilterCriteria, FilteredCollections, SearchResult
)


def matches(entity_type: EntityType, item: Any, criteria: Optional[FilterCriteria],
            mode: FilterMode = FilterMode.SMART_LIST) -> bool:
    """Return True when item satisfies every active dimension of criteria."""
    if criteria is None:
        return True
    return kind_for(entity_type).matches(item, criteria, mode)


def filter_items(entity_type: EntityType, items: Iterable[Any],
                 criteria: Optional[FilterCriteria],
                 mode: FilterMode = FilterMode.SMART_LIST) -> List[Any]:
    kind = kind_for(entity_type)
    if criteria is None:
        return list(items)
    return [item for item in items if kind.matches(item, criteria, mode)]


def apply_filters(collections: Collections, criteria: FilterCriteria) -> FilteredCollections:
    """Apply criteria to actions, projects, waiting and calendar items."""
    return FilteredCollections(
        actions=filter_items(EntityType.ACTION, collections.actions, criteria),
        projects=filter_items(EntityType.PROJECT, collections.projects, criteria),
        waiting_items=filter_items(EntityType.WAITING, collections.waiting_items, criteria),
        calendar_items=filter_items(EntityType.CALENDAR, collections.calendar_items, criteria),
    )


def filter_results(results: Iterable[SearchResult], criteria: FilterCriteria) -> List[SearchResult]:
    """Narrow ranked search hits, preserving their order."""
    return [
        r for r in results
        if matches(r.type, r.item, criteria, FilterMode.SEARCH)
    ]
