from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Tuple

import pytest

from datastore.dataset_store import DatasetStore
from models.records import Event
from services.aggregator import Aggregator
from services.dataset import DatasetService, build_default_dataset_service
from services.errors import DatasetNotLoadedError, WorkerExecutionError
from services.loader import ParallelEventLoader


def _service(loader: ParallelEventLoader | None = None) -> DatasetService:
    return DatasetService(
        store=DatasetStore(),
        loader=loader or ParallelEventLoader(),
        aggregator=Aggregator(),
    )


def test_load_links_and_summarizes(dataset_files: Tuple[Path, List[Path]]) -> None:
    sources_path, event_paths = dataset_files
    service = _service()

    summary = service.load(sources_path, event_paths)

    assert summary.source_count == 2
    assert summary.event_count == 3
    assert summary.linked_count == 3
    events = service.store.get_events()
    assert events is not None
    assert [event.id for event in events] == [1001, 1002, 1003]
    assert [event.source_name for event in events] == ["Sensor A", "Sensor B", "Sensor A"]
    assert [event.id for event in service.queries.find_by_source_name("a")] == [1001, 1003]


def test_load_logs_timing(dataset_files: Tuple[Path, List[Path]], caplog) -> None:
    sources_path, event_paths = dataset_files

    with caplog.at_level(logging.INFO):
        _service().load(sources_path, event_paths)

    records = [record for record in caplog.records if record.name == "services.dataset"]
    assert records
    assert isinstance(getattr(records[-1], "load_ms", None), int)
    assert getattr(records[-1], "linked_count", None) == 3


def test_missing_sources_file_propagates_and_leaves_store(
    dataset_files: Tuple[Path, List[Path]], tmp_path: Path
) -> None:
    sources_path, event_paths = dataset_files
    service = _service()
    service.load(sources_path, event_paths)

    with pytest.raises(FileNotFoundError):
        service.load(tmp_path / "missing.csv", event_paths)

    assert service.summary().event_count == 3


def test_load_failure_leaves_store_untouched(dataset_files: Tuple[Path, List[Path]]) -> None:
    sources_path, event_paths = dataset_files

    def exploding_loader(path: Path) -> List[Event]:
        raise RuntimeError("boom")

    service = _service(ParallelEventLoader(file_loader=exploding_loader))

    with pytest.raises(WorkerExecutionError):
        service.load(sources_path, event_paths)

    assert service.store.get_sources() is None
    assert service.store.get_events() is None


def test_summary_and_clear(dataset_files: Tuple[Path, List[Path]]) -> None:
    sources_path, event_paths = dataset_files
    service = _service()
    service.load(sources_path, event_paths)

    service.clear()

    with pytest.raises(DatasetNotLoadedError):
        service.summary()


def test_default_service_uses_shared_store() -> None:
    build_default_dataset_service.cache_clear()
    try:
        first = build_default_dataset_service()
        assert build_default_dataset_service() is first
        assert isinstance(first.loader, ParallelEventLoader)
    finally:
        build_default_dataset_service.cache_clear()
