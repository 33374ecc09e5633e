"""Composition root: builds the engine and registry once and hands them out."""

from datetime import datetime
from typing import Optional

from loguru import logger

from .config import Config
from .facets import generate_filter_options
from .filters import apply_filters
from .models import FilterCriteria, FilteredCollections
from .search import SearchEngine
from .smart_lists import SmartListRegistry
from .snapshot import Snapshot
from .storage import JsonFileStore, KeyValueStore


class Sift:
    """
    Owns one SearchEngine and one SmartListRegistry sharing a store.

    Consumers receive these by handle; nothing here is a module-level global,
    so tests can build as many isolated instances as they need.
    """

    def __init__(self, config: Config, store: Optional[KeyValueStore] = None,
                 now: Optional[datetime] = None):
        self.config = config
        self.store = store or JsonFileStore(config.state_path)
        self.search_engine = SearchEngine(
            self.store,
            config=config.search,
            history_size=config.history.max_size,
        )
        self.smart_lists = SmartListRegistry(self.store, now=now)
        self.snapshot = Snapshot()

    def load(self, snapshot: Snapshot) -> None:
        """Take a new snapshot from the entity store and reindex everything."""
        self.snapshot = snapshot
        self.search_engine.initialize_indexes(snapshot.collections)
        logger.info("Indexes rebuilt from snapshot")

    def apply_filters(self, criteria: FilterCriteria) -> FilteredCollections:
        return apply_filters(self.snapshot.collections, criteria)

    def filter_options(self):
        return generate_filter_options(self.snapshot.collections.actions, self.snapshot.contexts)
