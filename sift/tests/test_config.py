"""Tests for configuration loading."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from sift.core.config import Config, SearchConfig


def test_defaults():
    config = Config()
    assert config.search.threshold == 0.4
    assert config.search.min_match_length == 2
    assert config.search.default_limit == 50
    assert config.search.default_types == ["action", "project", "waiting", "calendar"]
    assert config.history.max_size == 50


def test_load_yaml(tmp_path):
    path = tmp_path / "sift.yaml"
    path.write_text(
        "state_path: ~/sift-state\n"
        "search:\n"
        "  threshold: 0.25\n"
        "  default_types: [action, inbox]\n"
        "history:\n"
        "  max_size: 10\n"
    )
    config = Config.load(path)
    assert config.search.threshold == 0.25
    assert config.search.default_types == ["action", "inbox"]
    assert config.history.max_size == 10
    assert config.state_path == Path.home() / "sift-state"


def test_missing_explicit_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        Config.load(tmp_path / "absent.yaml")


def test_no_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("HOME", str(tmp_path))
    assert Config.load() == Config()


def test_threshold_validated():
    with pytest.raises(ValidationError):
        SearchConfig(threshold=1.5)


def test_unknown_type_rejected():
    with pytest.raises(ValidationError):
        SearchConfig(default_types=["note"])


def test_save_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.yaml"
    config = Config(state_path=tmp_path / "state")
    config.save(path)
    assert Config.load(path) == config
