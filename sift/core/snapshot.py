"""Load entity-store snapshots from JSON or YAML files."""

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List

import yaml
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from .models import (
    Action, CalendarItem, Collections, Context, InboxItem, Project, WaitingItem
)


class SnapshotError(Exception):
    """Raised when a snapshot file cannot be read or does not validate."""


_ADAPTERS = {
    "actions": TypeAdapter(List[Action]),
    "projects": TypeAdapter(List[Project]),
    "waiting_items": TypeAdapter(List[WaitingItem]),
    "calendar_items": TypeAdapter(List[CalendarItem]),
    "inbox_items": TypeAdapter(List[InboxItem]),
}
_contexts_adapter = TypeAdapter(List[Context])


@dataclass
class Snapshot:
    collections: Collections = field(default_factory=Collections)
    contexts: List[Context] = field(default_factory=list)

    def tags(self) -> List[str]:
        """Distinct action and project tags in first-seen order."""
        seen: Dict[str, None] = {}
        for item in [*self.collections.actions, *self.collections.projects]:
            for tag in item.tags or []:
                seen.setdefault(tag, None)
        return list(seen)


def parse_snapshot(data: Dict[str, Any]) -> Snapshot:
    if not isinstance(data, dict):
        raise SnapshotError("snapshot must be a mapping of collections")

    parsed: Dict[str, list] = {}
    try:
        for key, adapter in _ADAPTERS.items():
            parsed[key] = adapter.validate_python(data.get(key) or [])
        contexts = _contexts_adapter.validate_python(data.get("contexts") or [])
    except ValidationError as e:
        raise SnapshotError(f"invalid snapshot: {e}") from e

    return Snapshot(collections=Collections(**parsed), contexts=contexts)


def load_snapshot(path: Path) -> Snapshot:
    """Read a snapshot file. ``.yaml``/``.yml`` are parsed as YAML, anything else as JSON."""
    path = Path(path)
    if not path.exists():
        raise SnapshotError(f"snapshot not found: {path}")

    try:
        with open(path, 'r', encoding='utf-8') as f:
            if path.suffix in (".yaml", ".yml"):
                data = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
        raise SnapshotError(f"cannot parse {path}: {e}") from e
    except OSError as e:
        raise SnapshotError(f"cannot read {path}: {e}") from e

    snapshot = parse_snapshot(data or {})
    c = snapshot.collections
    logger.debug(
        f"Loaded snapshot {path}: {len(c.actions)} actions, {len(c.projects)} projects, "
        f"{len(c.waiting_items)} waiting, {len(c.calendar_items)} calendar, "
        f"{len(c.inbox_items)} inbox"
    )
    return snapshot
