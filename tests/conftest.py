from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Callable, List, Tuple

import pytest

from datastore.dataset_store import DatasetStore
from models.records import Event, Source


@pytest.fixture()
def write_csv(tmp_path: Path) -> Callable[[str, str], Path]:
    def _write(name: str, body: str) -> Path:
        path = tmp_path / name
        path.write_text(body, encoding="utf-8")
        return path

    return _write


@pytest.fixture()
def sources() -> List[Source]:
    return [Source(id=1, name="Sensor A"), Source(id=2, name="Sensor B")]


@pytest.fixture()
def events() -> List[Event]:
    return [
        Event(id=1001, source_id=1, timestamp=datetime(2025, 1, 10, 10, 0, 0), value=45.0),
        Event(id=1002, source_id=2, timestamp=datetime(2025, 1, 15, 12, 0, 0), value=60.5),
        Event(id=1003, source_id=1, timestamp=datetime(2025, 2, 1, 8, 0, 0), value=75.2),
    ]


@pytest.fixture()
def linked_store(sources: List[Source], events: List[Event]) -> DatasetStore:
    store = DatasetStore()
    store.set_sources(sources)
    store.set_events(events)
    store.link_events_with_sources()
    return store


@pytest.fixture()
def dataset_files(write_csv) -> Tuple[Path, List[Path]]:
    """Scenario data split over two event files plus a file of garbage lines."""
    sources_path = write_csv("sources.csv", "1,Sensor A\n2, Sensor B \n")
    event_paths = [
        write_csv(
            "events_1.csv",
            "1001,1,2025-01-10T10:00:00,45.0\n1002,2,2025-01-15T12:00:00,60.5\n",
        ),
        write_csv("events_2.csv", "not,an,event,line\n1003,1,2025-02-01T08:00:00,75.2\n"),
        write_csv("events_3.csv", "x\n,,,\n"),
    ]
    return sources_path, event_paths
