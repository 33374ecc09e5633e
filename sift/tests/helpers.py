"""Entity builders shared by the test modules."""

from datetime import datetime, timedelta

from sift.core.models import (
    Action, ActionStatus, CalendarItem, InboxItem, Priority, Project,
    ProjectStatus, WaitingItem,
)


NOW = datetime(2024, 3, 13, 10, 30)  # a Wednesday


def make_action(id, title, **kwargs):
    defaults = dict(
        context_id="office",
        priority=Priority.MEDIUM,
        status=ActionStatus.NEXT,
        created_at=NOW - timedelta(days=10),
        updated_at=NOW - timedelta(days=10),
    )
    defaults.update(kwargs)
    return Action(id=id, title=title, **defaults)


def make_project(id, title, **kwargs):
    defaults = dict(
        status=ProjectStatus.ACTIVE,
        created_at=NOW - timedelta(days=30),
        updated_at=NOW - timedelta(days=30),
    )
    defaults.update(kwargs)
    return Project(id=id, title=title, **defaults)


def make_waiting(id, title, waiting_for="Alice", **kwargs):
    defaults = dict(
        created_at=NOW - timedelta(days=5),
        updated_at=NOW - timedelta(days=5),
    )
    defaults.update(kwargs)
    return WaitingItem(id=id, title=title, waiting_for=waiting_for, **defaults)


def make_calendar(id, title, start_time, **kwargs):
    defaults = dict(
        created_at=NOW - timedelta(days=3),
        updated_at=NOW - timedelta(days=3),
    )
    defaults.update(kwargs)
    return CalendarItem(id=id, title=title, start_time=start_time, **defaults)


def make_inbox(id, content, **kwargs):
    defaults = dict(
        created_at=NOW - timedelta(hours=2),
        updated_at=NOW - timedelta(hours=2),
    )
    defaults.update(kwargs)
    return InboxItem(id=id, content=content, **defaults)
