"""Local key/value persistence for history and user smart lists.

Store operations never raise. They return a StoreResult and leave it to the
caller to log the failure and fall back to a default.
"""

import json
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from loguru import logger


HISTORY_KEY = "search-history"
SMART_LISTS_KEY = "smart-lists"


@dataclass
class StoreResult:
    """Outcome of a store operation."""
    ok: bool
    value: Any = None
    error: Optional[str] = None

    @classmethod
    def success(cls, value: Any = None) -> "StoreResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, error: str) -> "StoreResult":
        return cls(ok=False, error=error)


class KeyValueStore(ABC):
    """Durable store holding one JSON document per key."""

    @abstractmethod
    def read(self, key: str) -> StoreResult:
        """Return the decoded document, or a successful None when the key is absent."""

    @abstractmethod
    def write(self, key: str, value: Any) -> StoreResult:
        """Replace the document stored under key."""


class MemoryStore(KeyValueStore):
    """In-process store. Values are kept JSON-encoded so reads see what a file would hold."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def read(self, key: str) -> StoreResult:
        raw = self._data.get(key)
        if raw is None:
            return StoreResult.success(None)
        try:
            return StoreResult.success(json.loads(raw))
        except json.JSONDecodeError as e:
            return StoreResult.failure(f"invalid JSON under {key!r}: {e}")

    def write(self, key: str, value: Any) -> StoreResult:
        try:
            self._data[key] = json.dumps(value)
        except (TypeError, ValueError) as e:
            return StoreResult.failure(f"cannot encode {key!r}: {e}")
        return StoreResult.success()

    def raw(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set_raw(self, key: str, raw: str) -> None:
        self._data[key] = raw


class JsonFileStore(KeyValueStore):
    """
    One ``<key>.json`` file per key under a state directory.

    Writes go to a temporary file, are fsynced and then renamed over the
    target, so a crash leaves either the old or the new document.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def _path(self, key: str) -> Path:
        return self.root / f"{key}.json"

    def read(self, key: str) -> StoreResult:
        path = self._path(key)
        if not path.exists():
            return StoreResult.success(None)
        try:
            with open(path, 'r', encoding='utf-8') as f:
                return StoreResult.success(json.load(f))
        except json.JSONDecodeError as e:
            return StoreResult.failure(f"invalid JSON in {path}: {e}")
        except UnicodeDecodeError as e:
            return StoreResult.failure(f"invalid UTF-8 in {path}: {e}")
        except OSError as e:
            return StoreResult.failure(f"cannot read {path}: {e}")

    def write(self, key: str, value: Any) -> StoreResult:
        path = self._path(key)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            payload = json.dumps(value, ensure_ascii=False, indent=2)
        except (TypeError, ValueError) as e:
            return StoreResult.failure(f"cannot encode {key!r}: {e}")

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(tmp_path, 'w', encoding='utf-8') as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, path)
        except OSError as e:
            if tmp_path.exists():
                tmp_path.unlink()
            return StoreResult.failure(f"cannot write {path}: {e}")

        logger.debug(f"Wrote {key} to {path}")
        return StoreResult.success()
