"""Query and saved-filter engine."""

from .app import Sift
from .config import Config
from .facets import generate_filter_options, resolve_date_bucket
from .filters import apply_filters, filter_results, matches
from .highlight import highlight_matches, match_spans
from .search import SearchEngine
from .smart_lists import SmartListRegistry
from .snapshot import Snapshot, SnapshotError, load_snapshot
from .storage import JsonFileStore, KeyValueStore, MemoryStore, StoreResult

__all__ = [
    "Config",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "SearchEngine",
    "Sift",
    "SmartListRegistry",
    "Snapshot",
    "SnapshotError",
    "StoreResult",
    "apply_filters",
    "filter_results",
    "generate_filter_options",
    "highlight_matches",
    "match_spans",
    "load_snapshot",
    "matches",
    "resolve_date_bucket",
]
