"""
Weighted fuzzy index over one entity collection.

Each indexed field is scored with rapidfuzz partial matching and turned into
a distance (0 = exact, 1 = unrelated). Fields within the threshold count as
matches; the item score is the product of matched field distances, each
raised to its normalized weight, so hits in more and heavier fields rank
better. Lower scores are better.
"""

import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Sequence

from loguru import logger
from rapidfuzz import fuzz
from rapidfuzz.utils import default_process

from .entities import kind_for
from .models import EntityType


FIELD_WEIGHTS: Dict[str, float] = {
    "title": 0.4,
    "description": 0.3,
    "content": 0.4,
    "notes": 0.2,
    "tags": 0.1,
    "waiting_for": 0.3,
    "location": 0.1,
}
_TOTAL_WEIGHT = sum(FIELD_WEIGHTS.values())

# exact matches would zero the product and erase the other fields' weight
EPSILON = sys.float_info.epsilon


@dataclass
class _IndexedEntry:
    item: Any
    fields: Dict[str, List[str]]


@dataclass
class IndexHit:
    item: Any
    score: float
    matches: List[str]


def field_distance(pattern: str, value: str) -> float:
    """Distance between a processed pattern and a processed field value."""
    if not value:
        return 1.0
    if len(value) < len(pattern):
        # partial_ratio would align the short value inside the pattern
        ratio = fuzz.ratio(pattern, value)
    else:
        ratio = fuzz.partial_ratio(pattern, value)
    return 1.0 - ratio / 100.0


class FuzzyIndex:
    """Immutable index for a single entity type. Rebuild to reflect changes."""

    def __init__(
        self,
        entity_type: EntityType,
        items: Sequence[Any],
        threshold: float = 0.4,
        min_match_length: int = 2,
    ):
        self.entity_type = EntityType(entity_type)
        self.threshold = threshold
        self.min_match_length = min_match_length

        kind = kind_for(self.entity_type)
        self._entries: List[_IndexedEntry] = []
        for item in items:
            fields: Dict[str, List[str]] = {}
            for name, value in kind.field_values(item).items():
                values = value if isinstance(value, list) else [value]
                processed = [default_process(str(v)) for v in values]
                processed = [p for p in processed if p]
                if processed:
                    fields[name] = processed
            self._entries.append(_IndexedEntry(item=item, fields=fields))

        logger.debug(f"Built {self.entity_type.value} index with {len(self._entries)} entries")

    def __len__(self) -> int:
        return len(self._entries)

    def search(self, query: str) -> List[IndexHit]:
        pattern = default_process(query)
        if len(pattern) < self.min_match_length:
            return []

        hits: List[IndexHit] = []
        for entry in self._entries:
            score = 1.0
            matched: List[str] = []
            for name, values in entry.fields.items():
                distance = min(field_distance(pattern, v) for v in values)
                if distance > self.threshold:
                    continue
                matched.append(name)
                weight = FIELD_WEIGHTS.get(name, 0.1) / _TOTAL_WEIGHT
                score *= max(distance, EPSILON) ** weight
            if matched:
                hits.append(IndexHit(item=entry.item, score=score, matches=matched))

        hits.sort(key=lambda h: h.score)
        return hits
