"""Shared fixtures: an in-memory store and a small GTD snapshot."""

from datetime import timedelta

import pytest

from sift.core.models import (
    ActionStatus, Collections, Context, Priority, ProjectStatus,
)
from sift.core.storage import MemoryStore

from .helpers import (
    NOW, make_action, make_calendar, make_inbox, make_project, make_waiting,
)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def store():
    """Fresh in-memory key/value store."""
    return MemoryStore()


@pytest.fixture
def contexts():
    return [
        Context(id="office", name="Office", color="#3B82F6"),
        Context(id="home", name="Home", color="#10B981"),
        Context(id="errands", name="Errands", color="#F59E0B"),
    ]


@pytest.fixture
def collections():
    """A snapshot touching every entity type."""
    return Collections(
        actions=[
            make_action(
                "a1", "Write quarterly report",
                description="Summarize Q1 project results",
                priority=Priority.HIGH,
                tags=["work", "report"],
                notes="Include the data analysis",
                due_date=NOW + timedelta(days=2),
            ),
            make_action(
                "a2", "Buy birthday present",
                description="Pick a gift for mom",
                context_id="errands",
                priority=Priority.MEDIUM,
                due_date=NOW - timedelta(days=1),
                tags=["family"],
            ),
            make_action(
                "a3", "Learn pattern matching",
                description="Read the tutorial",
                context_id="home",
                priority=Priority.LOW,
                status=ActionStatus.COMPLETED,
                completed_at=NOW - timedelta(hours=3),
                tags=["learning"],
            ),
        ],
        projects=[
            make_project(
                "p1", "Website redesign",
                description="New marketing site",
                tags=["work"],
            ),
            make_project(
                "p2", "Kitchen renovation",
                status=ProjectStatus.ON_HOLD,
                tags=["home"],
            ),
        ],
        waiting_items=[
            make_waiting(
                "w1", "Contract review",
                waiting_for="Legal team",
                follow_up_date=NOW + timedelta(days=7),
            ),
        ],
        calendar_items=[
            make_calendar(
                "c1", "Report review meeting", NOW + timedelta(days=1),
                location="Room 4",
            ),
        ],
        inbox_items=[
            make_inbox("i1", "Idea: quarterly report template"),
        ],
    )
