"""Filter queries over the events held by a dataset store."""

from __future__ import annotations

from datetime import datetime
from typing import List

from datastore.dataset_store import DatasetStore
from models.records import Event
from services.errors import DatasetNotLoadedError


class EventQueryService:
    """Stateless filters; results keep the store's event order."""

    def __init__(self, store: DatasetStore) -> None:
        self.store = store

    def find_by_source_name(self, name_part: str) -> List[Event]:
        """Events whose linked source name contains ``name_part``, ignoring case."""
        needle = name_part.casefold()
        return [
            event
            for event in self._events()
            if event.source is not None and needle in event.source.name.casefold()
        ]

    def find_by_date_range(self, start: datetime, end: datetime) -> List[Event]:
        """Events with ``start <= timestamp <= end``."""
        return [event for event in self._events() if start <= event.timestamp <= end]

    def find_by_value_range(self, minimum: float, maximum: float) -> List[Event]:
        """Events with ``minimum <= value <= maximum``."""
        return [event for event in self._events() if minimum <= event.value <= maximum]

    def _events(self) -> List[Event]:
        events = self.store.get_events()
        if events is None:
            raise DatasetNotLoadedError("No events have been loaded into the dataset store.")
        return events
