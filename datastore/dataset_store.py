from __future__ import annotations

import logging
from functools import lru_cache
from typing import Dict, List, Optional

from models.records import Event, Source

logger = logging.getLogger(__name__)


class DatasetStore:
    """Holds the loaded sources and events and joins them by source id.

    The store is not synchronized: load and link everything first, then run
    queries. Collections are ``None`` until set, which is distinct from an
    empty load.
    """

    def __init__(self) -> None:
        self._sources: Optional[List[Source]] = None
        self._events: Optional[List[Event]] = None

    @property
    def is_loaded(self) -> bool:
        return self._events is not None

    def set_sources(self, sources: List[Source]) -> None:
        self._sources = sources

    def set_events(self, events: List[Event]) -> None:
        self._events = events

    def get_sources(self) -> Optional[List[Source]]:
        return self._sources

    def get_events(self) -> Optional[List[Event]]:
        return self._events

    def link_events_with_sources(self) -> int:
        """Attach each event's source; returns how many events end up linked.

        When ids repeat in the sources list the last one wins. Events whose
        ``source_id`` is unknown are left unlinked.
        """
        if self._sources is None or self._events is None:
            return 0

        by_id: Dict[int, Source] = {source.id: source for source in self._sources}
        linked = 0
        for event in self._events:
            source = by_id.get(event.source_id)
            if source is not None:
                event.source = source
            if event.source is not None:
                linked += 1

        logger.info(
            "Linked events with sources",
            extra={"record_count": len(self._events), "linked_count": linked},
        )
        return linked

    def get_event_by_id(self, event_id: int) -> Optional[Event]:
        if self._events is None:
            return None
        for event in self._events:
            if event.id == event_id:
                return event
        return None

    def get_source_by_id(self, source_id: int) -> Optional[Source]:
        if self._sources is None:
            return None
        for source in self._sources:
            if source.id == source_id:
                return source
        return None

    def clear(self) -> None:
        self._sources = None
        self._events = None


@lru_cache
def build_default_store() -> DatasetStore:
    return DatasetStore()
