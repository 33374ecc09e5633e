"""Registry of saved filters ("smart lists").

System lists are rebuilt from fixed templates every time a registry is
constructed and are never persisted. Ranges relative to "now" are computed
at that instant, so in a long-lived process they go stale until the registry
is rebuilt.
"""

from datetime import datetime, timedelta
from typing import Any, Dict, List, Mapping, Optional, Union

import ulid
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from .filters import apply_filters
from .models import (
    ActionStatus, Collections, DateRange, FilterCriteria, FilteredCollections,
    Priority, SmartList, SmartListData,
)
from .storage import SMART_LISTS_KEY, KeyValueStore


_lists_adapter = TypeAdapter(List[SmartList])

# fields a caller may never change through update_smart_list
_PROTECTED_FIELDS = {"id", "created_at", "updated_at", "is_system"}

COPY_SUFFIX = " (copy)"


def create_system_lists(now: datetime) -> List[SmartList]:
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    tomorrow = today + timedelta(days=1)

    def system(id: str, name: str, description: str, filters: FilterCriteria,
               color: str, icon: str) -> SmartList:
        return SmartList(
            id=id, name=name, description=description, filters=filters,
            color=color, icon=icon, created_at=now, updated_at=now, is_system=True,
        )

    return [
        system(
            "today", "Today", "Everything due today",
            FilterCriteria(
                statuses=[ActionStatus.NEXT],
                date_range=DateRange(start=today, end=tomorrow),
            ),
            "#3B82F6", "calendar",
        ),
        system(
            "high-priority", "High priority", "All high priority and urgent actions",
            FilterCriteria(
                priorities=[Priority.HIGH, Priority.URGENT],
                statuses=[ActionStatus.NEXT],
            ),
            "#EF4444", "exclamation",
        ),
        system(
            "overdue", "Overdue", "Past due and not yet done",
            FilterCriteria(statuses=[ActionStatus.NEXT], date_range=DateRange(end=now)),
            "#F59E0B", "clock",
        ),
        system(
            "waiting", "Waiting", "Waiting on someone else",
            FilterCriteria(statuses=[ActionStatus.WAITING]),
            "#8B5CF6", "clock",
        ),
        # contexts=[] means "no filter", so this list does not narrow by context
        system(
            "no-context", "No context", "Actions without a context",
            FilterCriteria(statuses=[ActionStatus.NEXT], contexts=[]),
            "#6B7280", "question",
        ),
        system(
            "completed-today", "Completed today", "Finished today",
            FilterCriteria(
                statuses=[ActionStatus.COMPLETED],
                date_range=DateRange(start=today, end=tomorrow),
            ),
            "#10B981", "check",
        ),
    ]


class SmartListRegistry:
    """CRUD over user smart lists layered on top of the system lists."""

    def __init__(self, store: KeyValueStore, now: Optional[datetime] = None):
        self.store = store
        self._lists: List[SmartList] = create_system_lists(now or datetime.now())
        system_ids = {s.id for s in self._lists}

        for user_list in self._load():
            if user_list.id in system_ids:
                logger.warning(f"Ignoring stored smart list with reserved id: {user_list.id}")
                continue
            self._lists.append(user_list.model_copy(update={"is_system": False}))

        logger.info(
            f"Smart list registry ready: {len(system_ids)} system, "
            f"{len(self._lists) - len(system_ids)} user lists"
        )

    def _load(self) -> List[SmartList]:
        result = self.store.read(SMART_LISTS_KEY)
        if not result.ok:
            logger.warning(f"Failed to load smart lists: {result.error}")
            return []
        if result.value is None:
            return []
        try:
            return _lists_adapter.validate_python(result.value)
        except ValidationError as e:
            logger.warning(f"Discarding malformed smart lists: {e.error_count()} errors")
            return []

    def _save(self) -> None:
        payload = _lists_adapter.dump_python(self.get_user_lists(), mode="json")
        result = self.store.write(SMART_LISTS_KEY, payload)
        if not result.ok:
            logger.warning(f"Failed to save smart lists: {result.error}")

    def _index_of(self, list_id: str) -> Optional[int]:
        for i, smart_list in enumerate(self._lists):
            if smart_list.id == list_id:
                return i
        return None

    def get_smart_lists(self) -> List[SmartList]:
        return list(self._lists)

    def get_system_lists(self) -> List[SmartList]:
        return [s for s in self._lists if s.is_system]

    def get_user_lists(self) -> List[SmartList]:
        return [s for s in self._lists if not s.is_system]

    def get_smart_list_by_id(self, list_id: str) -> Optional[SmartList]:
        index = self._index_of(list_id)
        return None if index is None else self._lists[index]

    def create_smart_list(self, data: Union[SmartListData, Mapping[str, Any]]) -> SmartList:
        if not isinstance(data, SmartListData):
            data = SmartListData.model_validate(data)

        now = datetime.now()
        smart_list = SmartList(
            id=str(ulid.ULID()),
            name=data.name,
            description=data.description,
            filters=data.filters.model_copy(deep=True),
            color=data.color,
            icon=data.icon,
            created_at=now,
            updated_at=now,
            is_system=False,
        )
        self._lists.append(smart_list)
        self._save()

        logger.debug(f"Created smart list {smart_list.id}: {smart_list.name}")
        return smart_list

    def update_smart_list(self, list_id: str, updates: Mapping[str, Any]) -> Optional[SmartList]:
        """Merge updates into a user list. Returns None for system or unknown ids."""
        index = self._index_of(list_id)
        if index is None:
            return None

        current = self._lists[index]
        if current.is_system:
            logger.warning(f"Refusing to update system smart list: {list_id}")
            return None

        changes: Dict[str, Any] = {
            k: v for k, v in updates.items() if k not in _PROTECTED_FIELDS
        }
        merged = {**current.model_dump(), **changes, "updated_at": datetime.now()}
        updated = SmartList.model_validate(merged)

        self._lists[index] = updated
        self._save()
        return updated

    def delete_smart_list(self, list_id: str) -> bool:
        index = self._index_of(list_id)
        if index is None:
            return False

        if self._lists[index].is_system:
            logger.warning(f"Refusing to delete system smart list: {list_id}")
            return False

        del self._lists[index]
        self._save()
        return True

    def duplicate_smart_list(self, list_id: str, name: Optional[str] = None) -> Optional[SmartList]:
        """Copy any list, system lists included, into a new user list."""
        original = self.get_smart_list_by_id(list_id)
        if original is None:
            return None

        return self.create_smart_list(SmartListData(
            name=name or f"{original.name}{COPY_SUFFIX}",
            description=original.description,
            filters=original.filters,
            color=original.color,
            icon=original.icon,
        ))

    def apply_smart_list(self, list_id: str, collections: Collections) -> Optional[FilteredCollections]:
        smart_list = self.get_smart_list_by_id(list_id)
        if smart_list is None:
            return None
        return apply_filters(collections, smart_list.filters)
