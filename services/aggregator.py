"""Summary statistics for a loaded dataset."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, Iterable, Optional

from models.records import Event, Source

UNLINKED_KEY = "<unlinked>"


@dataclass
class DatasetSummary:
    """Counts and value statistics describing the held dataset."""

    source_count: int = 0
    event_count: int = 0
    linked_count: int = 0
    unlinked_count: int = 0
    min_value: float | None = None
    max_value: float | None = None
    mean_value: float | None = None
    first_timestamp: Optional[datetime] = None
    last_timestamp: Optional[datetime] = None
    per_source_count: Dict[str, int] = field(default_factory=dict)


class Aggregator:
    """Pure aggregation component that can be unit tested in isolation."""

    def summarize(
        self, sources: Iterable[Source], events: Iterable[Event]
    ) -> DatasetSummary:
        summary = DatasetSummary(source_count=sum(1 for _ in sources))
        total = 0.0

        for event in events:
            summary.event_count += 1
            value = event.value
            total += value

            if summary.min_value is None or value < summary.min_value:
                summary.min_value = value
            if summary.max_value is None or value > summary.max_value:
                summary.max_value = value

            if summary.first_timestamp is None or event.timestamp < summary.first_timestamp:
                summary.first_timestamp = event.timestamp
            if summary.last_timestamp is None or event.timestamp > summary.last_timestamp:
                summary.last_timestamp = event.timestamp

            if event.source is not None:
                summary.linked_count += 1
                key = event.source.name
            else:
                summary.unlinked_count += 1
                key = UNLINKED_KEY
            summary.per_source_count[key] = summary.per_source_count.get(key, 0) + 1

        if summary.event_count:
            summary.mean_value = total / summary.event_count

        return summary
