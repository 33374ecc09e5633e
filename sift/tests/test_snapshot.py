"""Tests for snapshot loading."""

import json
from datetime import datetime

import pytest

from sift.core.models import ActionStatus, InputType, Priority, ProjectStatus
from sift.core.snapshot import SnapshotError, load_snapshot, parse_snapshot


SNAPSHOT = {
    "contexts": [{"id": "office", "name": "Office", "color": "#3B82F6"}],
    "actions": [{
        "id": "a1",
        "title": "Write report",
        "context_id": "office",
        "priority": "high",
        "status": "next",
        "created_at": "2024-03-01T09:00:00",
        "updated_at": "2024-03-01T09:00:00",
        "due_date": "2024-03-15T17:00:00",
        "tags": ["work"],
    }],
    "projects": [{
        "id": "p1",
        "title": "Website",
        "status": "on_hold",
        "created_at": "2024-01-01T00:00:00",
        "updated_at": "2024-01-01T00:00:00",
        "tags": ["work", "web"],
    }],
    "inbox_items": [{
        "id": "i1",
        "content": "Voice memo",
        "type": "voice",
        "created_at": "2024-03-02T08:00:00",
        "updated_at": "2024-03-02T08:00:00",
    }],
}


def test_parse_snapshot():
    snapshot = parse_snapshot(SNAPSHOT)
    action = snapshot.collections.actions[0]
    assert action.priority is Priority.HIGH
    assert action.status is ActionStatus.NEXT
    assert action.due_date == datetime(2024, 3, 15, 17, 0)
    assert snapshot.collections.projects[0].status is ProjectStatus.ON_HOLD
    assert snapshot.collections.inbox_items[0].type is InputType.VOICE
    assert snapshot.collections.waiting_items == []
    assert snapshot.contexts[0].name == "Office"


def test_tags_distinct_in_order():
    assert parse_snapshot(SNAPSHOT).tags() == ["work", "web"]


def test_load_json_and_yaml(tmp_path):
    import yaml

    json_path = tmp_path / "snap.json"
    json_path.write_text(json.dumps(SNAPSHOT))
    yaml_path = tmp_path / "snap.yaml"
    yaml_path.write_text(yaml.safe_dump(SNAPSHOT))

    assert load_snapshot(json_path).collections.actions[0].id == "a1"
    assert load_snapshot(yaml_path).collections.projects[0].id == "p1"


def test_missing_file(tmp_path):
    with pytest.raises(SnapshotError):
        load_snapshot(tmp_path / "missing.json")


def test_unparseable_file(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{")
    with pytest.raises(SnapshotError):
        load_snapshot(path)


def test_invalid_records():
    with pytest.raises(SnapshotError):
        parse_snapshot({"actions": [{"id": "a1", "title": "No status"}]})


def test_not_a_mapping():
    with pytest.raises(SnapshotError):
        parse_snapshot(["actions"])


def test_undecodable_file(tmp_path):
    path = tmp_path / "snap.json"
    path.write_bytes(b'{"actions": "\xff"}')
    with pytest.raises(SnapshotError):
        load_snapshot(path)


def test_unreadable_path(tmp_path):
    # a directory exists but cannot be opened as a file
    with pytest.raises(SnapshotError):
        load_snapshot(tmp_path)
