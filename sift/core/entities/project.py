"""Projects are filtered on action statuses through a mapping table."""

from typing import Dict, List

from ..models import ActionStatus, EntityType, FilterCriteria, Project, ProjectStatus
from .base import EntityKind, FilterMode, dates_match, tags_overlap, text_contains


PROJECT_STATUS_MAP: Dict[ProjectStatus, List[ActionStatus]] = {
    ProjectStatus.ACTIVE: [ActionStatus.NEXT],
    ProjectStatus.ON_HOLD: [ActionStatus.WAITING],
    ProjectStatus.COMPLETED: [ActionStatus.COMPLETED],
    ProjectStatus.CANCELLED: [ActionStatus.CANCELLED],
}


class ProjectKind(EntityKind):
    entity_type = EntityType.PROJECT
    search_fields = ("title", "description", "notes", "tags")

    def matches(self, project: Project, criteria: FilterCriteria,
                mode: FilterMode = FilterMode.SMART_LIST) -> bool:
        if criteria.statuses:
            # Search results drop every project while a status filter is
            # active instead of mapping statuses. Kept as-is; see DESIGN.md.
            if mode is FilterMode.SEARCH:
                return False
            mapped = PROJECT_STATUS_MAP.get(ProjectStatus(project.status), [])
            if not any(status in mapped for status in criteria.statuses):
                return False

        candidates = [project.created_at]
        if project.status == ProjectStatus.COMPLETED:
            candidates.append(project.completed_at)
        if not dates_match(candidates, criteria.date_range):
            return False

        if not tags_overlap(project.tags, criteria.tags):
            return False

        return text_contains(
            [project.title, project.description, project.notes, *(project.tags or [])],
            criteria.search_text,
        )
