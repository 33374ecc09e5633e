"""Data models for Sift.

Entities are plain dataclasses owned by the external entity store; the engine
only reads them. Values that are persisted (filter criteria, smart lists,
history entries) are pydantic models so they round-trip through JSON with
their datetimes intact.
"""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, Field


class Priority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    URGENT = "urgent"


class ActionStatus(str, Enum):
    NEXT = "next"
    WAITING = "waiting"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ProjectStatus(str, Enum):
    ACTIVE = "active"
    ON_HOLD = "on_hold"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class InputType(str, Enum):
    TEXT = "text"
    VOICE = "voice"
    IMAGE = "image"


class EntityType(str, Enum):
    """Discriminator for search results and per-type behaviour."""
    ACTION = "action"
    PROJECT = "project"
    WAITING = "waiting"
    CALENDAR = "calendar"
    INBOX = "inbox"


@dataclass
class Context:
    id: str
    name: str
    color: str = "#6B7280"
    description: Optional[str] = None
    icon: Optional[str] = None
    is_active: bool = True


@dataclass
class Action:
    id: str
    title: str
    context_id: str
    priority: Priority
    status: ActionStatus
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    project_id: Optional[str] = None
    estimated_time: Optional[int] = None  # minutes
    due_date: Optional[datetime] = None
    completed_at: Optional[datetime] = None
    progress: Optional[int] = None  # 0-100
    notes: Optional[str] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class Project:
    id: str
    title: str
    status: ProjectStatus
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    completed_at: Optional[datetime] = None
    notes: Optional[str] = None
    tags: List[str] = field(default_factory=list)


@dataclass
class WaitingItem:
    id: str
    title: str
    waiting_for: str
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    follow_up_date: Optional[datetime] = None
    action_id: Optional[str] = None
    project_id: Optional[str] = None
    notes: Optional[str] = None


@dataclass
class CalendarItem:
    id: str
    title: str
    start_time: datetime
    created_at: datetime
    updated_at: datetime
    description: Optional[str] = None
    end_time: Optional[datetime] = None
    location: Optional[str] = None
    action_id: Optional[str] = None
    project_id: Optional[str] = None
    is_all_day: bool = False
    reminders: List[datetime] = field(default_factory=list)


@dataclass
class InboxItem:
    id: str
    content: str
    created_at: datetime
    updated_at: datetime
    type: InputType = InputType.TEXT
    processed: bool = False
    metadata: Dict[str, Any] = field(default_factory=dict)


Entity = Union[Action, Project, WaitingItem, CalendarItem, InboxItem]


@dataclass
class Collections:
    """Snapshot of the five typed collections handed over by the entity store."""
    actions: List[Action] = field(default_factory=list)
    projects: List[Project] = field(default_factory=list)
    waiting_items: List[WaitingItem] = field(default_factory=list)
    calendar_items: List[CalendarItem] = field(default_factory=list)
    inbox_items: List[InboxItem] = field(default_factory=list)

    def of_type(self, entity_type: EntityType) -> List[Any]:
        return {
            EntityType.ACTION: self.actions,
            EntityType.PROJECT: self.projects,
            EntityType.WAITING: self.waiting_items,
            EntityType.CALENDAR: self.calendar_items,
            EntityType.INBOX: self.inbox_items,
        }[EntityType(entity_type)]


@dataclass
class FilteredCollections:
    """Result of applying criteria to a snapshot. Inbox items are never filtered."""
    actions: List[Action]
    projects: List[Project]
    waiting_items: List[WaitingItem]
    calendar_items: List[CalendarItem]

    def total(self) -> int:
        return (
            len(self.actions) + len(self.projects)
            + len(self.waiting_items) + len(self.calendar_items)
        )


class DateRange(BaseModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class FilterCriteria(BaseModel):
    """
    Multi-dimensional filter.

    A dimension that is None or an empty list does not filter at all.
    """
    contexts: Optional[List[str]] = None
    priorities: Optional[List[Priority]] = None
    statuses: Optional[List[ActionStatus]] = None
    date_range: Optional[DateRange] = None
    tags: Optional[List[str]] = None
    search_text: Optional[str] = None

    def is_empty(self) -> bool:
        return not (
            self.contexts or self.priorities or self.statuses
            or self.date_range or self.tags or self.search_text
        )


class SmartListData(BaseModel):
    """User-supplied fields for a new smart list."""
    name: str
    description: Optional[str] = None
    filters: FilterCriteria = Field(default_factory=FilterCriteria)
    color: Optional[str] = None
    icon: Optional[str] = None


class SmartList(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    filters: FilterCriteria = Field(default_factory=FilterCriteria)
    color: Optional[str] = None
    icon: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    is_system: bool = False


class SearchHistoryItem(BaseModel):
    query: str
    timestamp: datetime
    result_count: int
    # times this query was recorded; entries written without it count once
    count: int = 1


@dataclass
class SearchResult:
    """Single fuzzy-search hit. Lower score means more relevant."""
    type: EntityType
    item: Entity
    matches: List[str]
    score: float


SuggestionType = Literal["history", "tag", "context", "project"]


@dataclass
class SearchSuggestion:
    text: str
    type: SuggestionType
    count: Optional[int] = None


@dataclass
class PopularSearch:
    query: str
    count: int


@dataclass
class FilterOption:
    id: str
    label: str
    value: Any
    count: Optional[int] = None
    color: Optional[str] = None


FilterGroupType = Literal["single", "multiple", "range", "date"]


@dataclass
class FilterGroup:
    id: str
    label: str
    type: FilterGroupType
    options: List[FilterOption] = field(default_factory=list)
