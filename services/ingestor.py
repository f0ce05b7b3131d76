"""Read record files line by line and keep the lines that parse."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable, Iterator, List, TypeVar, Union

from models.records import Event, Source
from services.parser import ParseResult, parse_event_line, parse_source_line

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT")
PathLike = Union[str, Path]


def load_sources(path: PathLike) -> List[Source]:
    """Load sources from ``path``.

    Malformed lines are skipped. A file that cannot be opened or decoded is
    fatal for the sources load and the error is re-raised to the caller.
    """
    file_path = Path(path)
    try:
        sources = _read_records(file_path, parse_source_line)
    except (OSError, UnicodeDecodeError):
        logger.error("Unable to read sources file", extra={"path": str(file_path)})
        raise

    logger.info(
        "Loaded sources",
        extra={"path": str(file_path), "record_count": len(sources)},
    )
    return sources


def load_events_from_file(path: PathLike) -> List[Event]:
    """Load events from one file, returning an empty list if it cannot be read."""
    file_path = Path(path)
    try:
        events = _read_records(file_path, parse_event_line)
    except (OSError, UnicodeDecodeError):
        logger.exception("Unable to read events file", extra={"path": str(file_path)})
        return []

    logger.debug(
        "Loaded events file",
        extra={"path": str(file_path), "record_count": len(events)},
    )
    return events


def _read_records(
    path: Path, parse: Callable[[str], ParseResult[RecordT]]
) -> List[RecordT]:
    records: List[RecordT] = []
    for line_number, line in _iter_lines(path):
        if not line.strip():
            continue

        result = parse(line)
        if result.record is None:
            logger.warning(
                "Skipping line: %s",
                result.reason,
                extra={"path": str(path), "line_number": line_number, "reason": result.reason},
            )
            continue

        records.append(result.record)
    return records


def _iter_lines(path: Path) -> Iterator[tuple[int, str]]:
    with path.open("r", encoding="utf-8", newline="") as handle:
        for line_number, line in enumerate(handle, start=1):
            yield line_number, line.rstrip("\r\n")
