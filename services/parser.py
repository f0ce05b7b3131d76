"""Line-level parsing of source and event records.

Malformed input is expected, so parse attempts return a ``ParseResult``
instead of raising; the ingestor decides what to do with failures.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import datetime
from typing import Generic, Optional, TypeVar

from models.records import Event, Source

RecordT = TypeVar("RecordT")

DELIMITER = ","
SOURCE_FIELD_COUNT = 2
EVENT_FIELD_COUNT = 4
INT_MIN = -(2**31)
INT_MAX = 2**31 - 1

_LOCAL_DATETIME = re.compile(
    r"(\d{4})-(\d{2})-(\d{2})T(\d{2}):(\d{2})(?::(\d{2})(?:\.(\d{1,9}))?)?",
    re.ASCII,
)


@dataclass(frozen=True, slots=True)
class ParseResult(Generic[RecordT]):
    """Outcome of parsing a single line: either a record or a failure reason."""

    record: Optional[RecordT] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.record is not None

    @classmethod
    def success(cls, record: RecordT) -> "ParseResult[RecordT]":
        return cls(record=record)

    @classmethod
    def failure(cls, reason: str) -> "ParseResult[RecordT]":
        return cls(reason=reason)


def parse_source_line(line: str) -> ParseResult[Source]:
    """Parse ``id,name[,...]``; extra fields are ignored and the name is trimmed."""
    parts = _split_fields(line)
    if len(parts) < SOURCE_FIELD_COUNT:
        return ParseResult.failure("too few fields")

    try:
        source_id = _parse_int(parts[0])
    except ValueError:
        return ParseResult.failure("invalid id")

    return ParseResult.success(Source(id=source_id, name=parts[1].strip()))


def parse_event_line(line: str) -> ParseResult[Event]:
    """Parse ``id,sourceId,timestamp,value[,...]``."""
    parts = _split_fields(line)
    if len(parts) < EVENT_FIELD_COUNT:
        return ParseResult.failure("too few fields")

    id_raw, source_raw, timestamp_raw, value_raw = parts[:EVENT_FIELD_COUNT]

    try:
        event_id = _parse_int(id_raw)
    except ValueError:
        return ParseResult.failure("invalid id")

    try:
        source_id = _parse_int(source_raw)
    except ValueError:
        return ParseResult.failure("invalid source_id")

    try:
        timestamp = parse_timestamp(timestamp_raw)
    except ValueError:
        return ParseResult.failure("invalid timestamp")

    try:
        value = _parse_float(value_raw)
    except ValueError:
        return ParseResult.failure("invalid numeric value")

    return ParseResult.success(
        Event(id=event_id, source_id=source_id, timestamp=timestamp, value=value)
    )


def parse_timestamp(value: str) -> datetime:
    """Parse a local ISO-8601 date-time such as ``2025-01-10T10:00:00``.

    Accepts ``YYYY-MM-DDTHH:MM[:SS[.fraction]]`` only; fractions beyond
    microseconds are truncated. Offsets and other ISO-8601 forms are rejected.
    """
    candidate = value.strip()
    match = _LOCAL_DATETIME.fullmatch(candidate)
    if match is None:
        raise ValueError(f"Timestamp {candidate!r} is not a local date-time.")

    year, month, day, hour, minute, second, fraction = match.groups()
    microsecond = int((fraction or "0")[:6].ljust(6, "0"))
    try:
        return datetime(
            int(year),
            int(month),
            int(day),
            int(hour),
            int(minute),
            int(second or 0),
            microsecond,
        )
    except ValueError as exc:
        raise ValueError(f"Invalid timestamp: {candidate!r}") from exc


def _split_fields(line: str) -> list[str]:
    parts = line.split(DELIMITER)
    # Trailing empty fields do not count towards the field total.
    while parts and not parts[-1]:
        parts.pop()
    return parts


def _parse_int(value: str) -> int:
    candidate = value.strip()
    if not candidate or "_" in candidate:
        raise ValueError(f"Invalid integer: {value!r}")
    parsed = int(candidate)
    if not INT_MIN <= parsed <= INT_MAX:
        raise ValueError(f"Integer out of range: {value!r}")
    return parsed


def _parse_float(value: str) -> float:
    candidate = value.strip()
    if not candidate or "_" in candidate:
        raise ValueError(f"Invalid number: {value!r}")
    return float(candidate)
