from ..models import CalendarItem, EntityType, FilterCriteria
from .base import EntityKind, FilterMode, dates_match, text_contains


class CalendarKind(EntityKind):
    entity_type = EntityType.CALENDAR
    search_fields = ("title", "description", "location")

    def matches(self, item: CalendarItem, criteria: FilterCriteria,
                mode: FilterMode = FilterMode.SMART_LIST) -> bool:
        # untagged, same rule as waiting items
        if criteria.tags and mode is FilterMode.SEARCH:
            return False

        if not dates_match([item.start_time], criteria.date_range):
            return False

        return text_contains(
            [item.title, item.description, item.location],
            criteria.search_text,
        )
