"""Actions: the only type every criteria dimension applies to."""

from ..models import Action, ActionStatus, EntityType, FilterCriteria
from .base import EntityKind, FilterMode, dates_match, tags_overlap, text_contains


class ActionKind(EntityKind):
    entity_type = EntityType.ACTION
    search_fields = ("title", "description", "notes", "tags")

    def matches(self, action: Action, criteria: FilterCriteria,
                mode: FilterMode = FilterMode.SMART_LIST) -> bool:
        if criteria.contexts and action.context_id not in criteria.contexts:
            return False

        if criteria.priorities and action.priority not in criteria.priorities:
            return False

        if criteria.statuses and action.status not in criteria.statuses:
            return False

        # due or finished inside the range
        candidates = [action.due_date]
        if action.status == ActionStatus.COMPLETED:
            candidates.append(action.completed_at)
        if not dates_match(candidates, criteria.date_range):
            return False

        if not tags_overlap(action.tags, criteria.tags):
            return False

        return text_contains(
            [action.title, action.description, action.notes, *(action.tags or [])],
            criteria.search_text,
        )
