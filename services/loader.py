"""Concurrent loading of event files."""

from __future__ import annotations

import logging
import time
from concurrent.futures import CancelledError, Executor, Future, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple

from models.records import Event
from services.errors import InterruptedWaitError, WorkerExecutionError
from services.ingestor import PathLike, load_events_from_file

logger = logging.getLogger(__name__)

FileLoader = Callable[[Path], List[Event]]
ExecutorFactory = Callable[[int], Executor]


def _thread_pool(max_workers: int) -> Executor:
    return ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="event-loader")


class ParallelEventLoader:
    """Fans event-file loading out to one worker per path and merges the results.

    Results are concatenated in the order the paths were submitted, so the
    merged list is stable regardless of which worker finishes first.
    """

    def __init__(
        self,
        file_loader: FileLoader = load_events_from_file,
        max_workers: Optional[int] = None,
        executor_factory: ExecutorFactory = _thread_pool,
    ) -> None:
        self.file_loader = file_loader
        self.max_workers = max_workers
        self.executor_factory = executor_factory

    def load(self, paths: Sequence[PathLike]) -> List[Event]:
        file_paths = [Path(path) for path in paths]
        if not file_paths:
            return []

        worker_count = len(file_paths)
        if self.max_workers is not None:
            worker_count = min(worker_count, self.max_workers)

        start_time = time.perf_counter()
        executor = self.executor_factory(worker_count)
        submitted: List[Tuple[Path, Future[List[Event]]]] = []
        try:
            for path in file_paths:
                submitted.append((path, executor.submit(self.file_loader, path)))
            events = self._collect(submitted)
        except BaseException:
            executor.shutdown(wait=True, cancel_futures=True)
            raise
        executor.shutdown(wait=True)

        logger.info(
            "Loaded events in parallel",
            extra={
                "file_count": len(file_paths),
                "record_count": len(events),
                "load_ms": int((time.perf_counter() - start_time) * 1000),
            },
        )
        return events

    @staticmethod
    def _collect(submitted: Sequence[Tuple[Path, Future[List[Event]]]]) -> List[Event]:
        events: List[Event] = []
        for path, future in submitted:
            try:
                events.extend(future.result())
            except CancelledError as exc:
                logger.error("Event load was interrupted", extra={"path": str(path)})
                raise InterruptedWaitError(
                    f"Interrupted while waiting for events file {str(path)!r}.", path=path
                ) from exc
            except Exception as exc:
                logger.error(
                    "Event load worker failed",
                    extra={"path": str(path), "reason": type(exc).__name__},
                )
                raise WorkerExecutionError(
                    f"Loading events file {str(path)!r} failed: {exc}", path=path
                ) from exc
        return events


def load_events_in_parallel(
    paths: Sequence[PathLike], max_workers: Optional[int] = None
) -> List[Event]:
    """Load every events file concurrently with the default file loader."""
    return ParallelEventLoader(max_workers=max_workers).load(paths)
