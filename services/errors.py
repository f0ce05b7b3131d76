"""Exceptions surfaced by the loading pipeline and the query layer."""

from __future__ import annotations

from pathlib import Path
from typing import Optional


class LoadError(RuntimeError):
    """A parallel event load failed as a whole; no partial result is returned."""


class InterruptedWaitError(LoadError):
    """The coordinator stopped waiting because a worker was cancelled."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        super().__init__(message)
        self.path = path


class WorkerExecutionError(LoadError):
    """A worker raised while loading one event file."""

    def __init__(self, message: str, path: Path) -> None:
        super().__init__(message)
        self.path = path


class DatasetNotLoadedError(RuntimeError):
    """A query ran before any events were placed in the store."""
