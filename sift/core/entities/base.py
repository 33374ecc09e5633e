"""Shared pieces of the per-type filter predicates."""

from abc import ABC, abstractmethod
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Sequence, Tuple, Union

from ..models import DateRange, EntityType, FilterCriteria


FieldValue = Union[str, List[str]]


class FilterMode(Enum):
    """Which call site is evaluating criteria.

    SMART_LIST is the canonical behaviour. SEARCH is used to narrow fuzzy
    search hits and differs only where a kind says so.
    """
    SMART_LIST = "smart_list"
    SEARCH = "search"


def as_naive(value: datetime) -> datetime:
    """Convert aware datetimes to naive local time so mixed inputs compare."""
    if value.tzinfo is not None:
        return value.astimezone().replace(tzinfo=None)
    return value


def in_range(value: datetime, date_range: DateRange) -> bool:
    value = as_naive(value)
    if date_range.start is not None and value < as_naive(date_range.start):
        return False
    if date_range.end is not None and value > as_naive(date_range.end):
        return False
    return True


def dates_match(candidates: Iterable[Optional[datetime]], date_range: Optional[DateRange]) -> bool:
    """
    True when any present candidate date lies in the range.

    An entity with no candidate dates at all is not excluded by the range.
    """
    if date_range is None:
        return True
    present = [d for d in candidates if d is not None]
    if not present:
        return True
    return any(in_range(d, date_range) for d in present)


def tags_overlap(item_tags: Optional[Sequence[str]], wanted: Optional[Sequence[str]]) -> bool:
    if not wanted:
        return True
    item_tags = item_tags or []
    return any(tag in item_tags for tag in wanted)


def text_contains(parts: Iterable[Optional[str]], needle: Optional[str]) -> bool:
    if not needle:
        return True
    haystack = " ".join(p for p in parts if p).lower()
    return needle.lower() in haystack


class EntityKind(ABC):
    """
    Behaviour of one entity type: which fields are fuzzy-indexed and how
    FilterCriteria apply to it.
    """

    entity_type: EntityType
    search_fields: Tuple[str, ...] = ()

    def field_values(self, item: Any) -> Dict[str, FieldValue]:
        values: Dict[str, FieldValue] = {}
        for name in self.search_fields:
            value = getattr(item, name, None)
            if value:
                values[name] = value
        return values

    @abstractmethod
    def matches(self, item: Any, criteria: FilterCriteria,
                mode: FilterMode = FilterMode.SMART_LIST) -> bool:
        """True when item satisfies every dimension of criteria that applies to this type."""
