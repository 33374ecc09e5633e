"""Inbox items are reachable through fuzzy search only.

Smart lists never filter them. When search hits are narrowed, an inbox item
has no tags, so any tag filter drops it; free text is matched on content.
"""

from ..models import EntityType, FilterCriteria, InboxItem
from .base import EntityKind, FilterMode, text_contains


class InboxKind(EntityKind):
    entity_type = EntityType.INBOX
    search_fields = ("content",)

    def matches(self, item: InboxItem, criteria: FilterCriteria,
                mode: FilterMode = FilterMode.SEARCH) -> bool:
        if criteria.tags:
            return False
        return text_contains([item.content], criteria.search_text)
