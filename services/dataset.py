"""Orchestrates loading, linking and summarizing the in-memory dataset."""

from __future__ import annotations

import logging
import time
from functools import lru_cache
from typing import Optional, Sequence

from datastore.dataset_store import DatasetStore, build_default_store
from services.aggregator import Aggregator, DatasetSummary
from services.errors import DatasetNotLoadedError
from services.ingestor import PathLike, load_sources
from services.loader import ParallelEventLoader
from services.query import EventQueryService
from settings import get_settings

logger = logging.getLogger(__name__)


class DatasetService:
    """Coordinates the file loaders, the store and the query layer."""

    def __init__(
        self,
        store: DatasetStore,
        loader: ParallelEventLoader,
        aggregator: Aggregator,
    ) -> None:
        self.store = store
        self.loader = loader
        self.aggregator = aggregator
        self.queries = EventQueryService(store)

    def load(self, sources_path: PathLike, event_paths: Sequence[PathLike]) -> DatasetSummary:
        """Load sources, then all event files in parallel, then link them.

        Sources-file read errors and ``LoadError`` propagate, leaving the store
        as it was before the call.
        """
        start_time = time.perf_counter()

        sources = load_sources(sources_path)
        events = self.loader.load(event_paths)

        self.store.set_sources(sources)
        self.store.set_events(events)

        linked = self.store.link_events_with_sources()
        logger.info(
            "Dataset loaded",
            extra={
                "file_count": len(event_paths),
                "record_count": len(events),
                "linked_count": linked,
                "load_ms": int((time.perf_counter() - start_time) * 1000),
            },
        )
        return self.summary()

    def summary(self) -> DatasetSummary:
        events = self.store.get_events()
        if events is None:
            raise DatasetNotLoadedError("No events have been loaded into the dataset store.")
        return self.aggregator.summarize(self.store.get_sources() or [], events)

    def clear(self) -> None:
        self.store.clear()
        logger.info("Dataset cleared")


@lru_cache
def build_default_dataset_service(
    max_workers: Optional[int] = None,
) -> DatasetService:
    """Factory that wires the service with the shared default store."""
    settings = get_settings()
    worker_cap = max_workers or settings.loader_max_workers
    return DatasetService(
        store=build_default_store(),
        loader=ParallelEventLoader(max_workers=worker_cap),
        aggregator=Aggregator(),
    )
