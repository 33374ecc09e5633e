from ..models import EntityType, FilterCriteria, WaitingItem
from .base import EntityKind, FilterMode, dates_match, text_contains


class WaitingKind(EntityKind):
    entity_type = EntityType.WAITING
    search_fields = ("title", "description", "notes", "waiting_for")

    def matches(self, item: WaitingItem, criteria: FilterCriteria,
                mode: FilterMode = FilterMode.SMART_LIST) -> bool:
        # contexts, priorities and statuses do not apply. Waiting items have
        # no tags: smart lists ignore a tag filter, search hits are dropped by it
        if criteria.tags and mode is FilterMode.SEARCH:
            return False

        if not dates_match([item.created_at, item.follow_up_date], criteria.date_range):
            return False

        return text_contains(
            [item.title, item.description, item.waiting_for, item.notes],
            criteria.search_text,
        )
