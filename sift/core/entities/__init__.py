"""Per-type indexing fields and filter predicates."""

from typing import Dict

from ..models import EntityType
from .base import EntityKind, FilterMode
from .action import ActionKind
from .project import ProjectKind, PROJECT_STATUS_MAP
from .waiting import WaitingKind
from .calendar import CalendarKind
from .inbox import InboxKind


KINDS: Dict[EntityType, EntityKind] = {
    EntityType.ACTION: ActionKind(),
    EntityType.PROJECT: ProjectKind(),
    EntityType.WAITING: WaitingKind(),
    EntityType.CALENDAR: CalendarKind(),
    EntityType.INBOX: InboxKind(),
}


def kind_for(entity_type) -> EntityKind:
    """Look up the behaviour for an entity type (enum or its string value)."""
    return KINDS[EntityType(entity_type)]


__all__ = [
    "EntityKind",
    "FilterMode",
    "KINDS",
    "PROJECT_STATUS_MAP",
    "kind_for",
]
