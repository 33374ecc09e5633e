"""Facets for filter panels: available values with usage counts."""

from collections import Counter
from datetime import datetime, timedelta
from typing import Dict, List, Optional, Sequence

from .models import (
    Action, ActionStatus, Context, DateRange, FilterGroup, FilterOption, Priority
)


MAX_TAG_OPTIONS = 20

PRIORITY_LABELS: Dict[Priority, str] = {
    Priority.LOW: "Low",
    Priority.MEDIUM: "Medium",
    Priority.HIGH: "High",
    Priority.URGENT: "Urgent",
}

PRIORITY_COLORS: Dict[Priority, str] = {
    Priority.LOW: "#10B981",
    Priority.MEDIUM: "#F59E0B",
    Priority.HIGH: "#EF4444",
    Priority.URGENT: "#DC2626",
}

STATUS_LABELS: Dict[ActionStatus, str] = {
    ActionStatus.NEXT: "Next",
    ActionStatus.WAITING: "Waiting",
    ActionStatus.SCHEDULED: "Scheduled",
    ActionStatus.COMPLETED: "Completed",
    ActionStatus.CANCELLED: "Cancelled",
}

STATUS_COLORS: Dict[ActionStatus, str] = {
    ActionStatus.NEXT: "#3B82F6",
    ActionStatus.WAITING: "#F59E0B",
    ActionStatus.SCHEDULED: "#8B5CF6",
    ActionStatus.COMPLETED: "#10B981",
    ActionStatus.CANCELLED: "#6B7280",
}

DATE_BUCKETS = [
    ("today", "Today"),
    ("tomorrow", "Tomorrow"),
    ("this-week", "This week"),
    ("next-week", "Next week"),
    ("this-month", "This month"),
    ("custom", "Custom"),
]


def generate_filter_options(actions: Sequence[Action], contexts: Sequence[Context]) -> List[FilterGroup]:
    """
    Count how often each context, priority, status and tag is used.

    Date buckets carry no count; they are resolved to concrete ranges only
    when selected (see resolve_date_bucket).
    """
    context_counts: Counter = Counter()
    priority_counts: Counter = Counter()
    status_counts: Counter = Counter()
    tag_counts: Counter = Counter()

    for action in actions:
        context_counts[action.context_id] += 1
        priority_counts[Priority(action.priority)] += 1
        status_counts[ActionStatus(action.status)] += 1
        for tag in action.tags or []:
            tag_counts[tag] += 1

    return [
        FilterGroup(
            id="contexts",
            label="Contexts",
            type="multiple",
            options=[
                FilterOption(
                    id=c.id, label=c.name, value=c.id,
                    count=context_counts.get(c.id, 0), color=c.color,
                )
                for c in contexts
            ],
        ),
        FilterGroup(
            id="priorities",
            label="Priority",
            type="multiple",
            options=[
                FilterOption(
                    id=p.value, label=PRIORITY_LABELS[p], value=p,
                    count=priority_counts.get(p, 0), color=PRIORITY_COLORS[p],
                )
                for p in Priority
            ],
        ),
        FilterGroup(
            id="statuses",
            label="Status",
            type="multiple",
            options=[
                FilterOption(
                    id=s.value, label=STATUS_LABELS[s], value=s,
                    count=status_counts.get(s, 0), color=STATUS_COLORS[s],
                )
                for s in ActionStatus
            ],
        ),
        FilterGroup(
            id="tags",
            label="Tags",
            type="multiple",
            options=[
                FilterOption(id=tag, label=tag, value=tag, count=count)
                for tag, count in tag_counts.most_common(MAX_TAG_OPTIONS)
            ],
        ),
        FilterGroup(
            id="dateRange",
            label="Date range",
            type="date",
            options=[FilterOption(id=b, label=label, value=b) for b, label in DATE_BUCKETS],
        ),
    ]


def resolve_date_bucket(bucket: str, now: Optional[datetime] = None) -> Optional[DateRange]:
    """Turn a relative bucket into a concrete range. Weeks start on Monday.

    Returns None for "custom", which the caller fills in by hand.
    """
    now = now or datetime.now()
    today = now.replace(hour=0, minute=0, second=0, microsecond=0)
    week_start = today - timedelta(days=today.weekday())

    if bucket == "today":
        return DateRange(start=today, end=today + timedelta(days=1))
    if bucket == "tomorrow":
        return DateRange(start=today + timedelta(days=1), end=today + timedelta(days=2))
    if bucket == "this-week":
        return DateRange(start=week_start, end=week_start + timedelta(days=7))
    if bucket == "next-week":
        return DateRange(start=week_start + timedelta(days=7), end=week_start + timedelta(days=14))
    if bucket == "this-month":
        month_start = today.replace(day=1)
        if month_start.month == 12:
            next_month = month_start.replace(year=month_start.year + 1, month=1)
        else:
            next_month = month_start.replace(month=month_start.month + 1)
        return DateRange(start=month_start, end=next_month)
    if bucket == "custom":
        return None
    raise ValueError(f"Unknown date bucket: {bucket}")
