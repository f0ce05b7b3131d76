from __future__ import annotations

from datetime import datetime

import pytest

from models.records import Event, Source
from services.parser import parse_event_line, parse_source_line, parse_timestamp


@pytest.mark.parametrize(
    "line, expected",
    [
        ("1,Sensor A", Source(id=1, name="Sensor A")),
        (" 7 ,  Boiler room  ", Source(id=7, name="Boiler room")),
        ("3,Roof,ignored,fields", Source(id=3, name="Roof")),
        ("-4,Basement", Source(id=-4, name="Basement")),
    ],
)
def test_parse_source_line_keeps_id_and_trimmed_name(line: str, expected: Source) -> None:
    result = parse_source_line(line)

    assert result.ok
    assert result.record == expected
    assert result.reason is None


@pytest.mark.parametrize(
    "line, reason",
    [
        ("1", "too few fields"),
        ("", "too few fields"),
        ("abc,Sensor", "invalid id"),
        ("1.5,Sensor", "invalid id"),
        ("1_000,Sensor", "invalid id"),
        (",Sensor", "invalid id"),
        ("1,", "too few fields"),
        ("1,,,", "too few fields"),
        ("2147483648,Sensor", "invalid id"),
        ("99999999999,Sensor", "invalid id"),
    ],
)
def test_parse_source_line_failures(line: str, reason: str) -> None:
    result = parse_source_line(line)

    assert not result.ok
    assert result.record is None
    assert result.reason == reason


def test_parse_event_line_success() -> None:
    result = parse_event_line("1001, 1 ,2025-01-10T10:00:00, 45.0,extra")

    assert result.ok
    assert result.record == Event(
        id=1001,
        source_id=1,
        timestamp=datetime(2025, 1, 10, 10, 0, 0),
        value=45.0,
    )
    assert result.record.source is None


@pytest.mark.parametrize(
    "line, reason",
    [
        ("1001,1,2025-01-10T10:00:00", "too few fields"),
        ("x,1,2025-01-10T10:00:00,45.0", "invalid id"),
        ("1001,one,2025-01-10T10:00:00,45.0", "invalid source_id"),
        ("1001,1,not-a-timestamp,45.0", "invalid timestamp"),
        ("1001,1,2025-01-10,45.0", "invalid timestamp"),
        ("1001,1,2025-01-10 10:00:00,45.0", "invalid timestamp"),
        ("1001,1,2025-01-10T10:00:00+02:00,45.0", "invalid timestamp"),
        ("1001,1,2025-13-10T10:00:00,45.0", "invalid timestamp"),
        ("1001,1,2025-01-10T10:00:00,not-a-number", "invalid numeric value"),
        ("1001,1,2025-01-10T10:00:00,", "too few fields"),
        ("1001,1,2025-01-10T10:00:00, ", "invalid numeric value"),
        ("1001,99999999999,2025-01-10T10:00:00,45.0", "invalid source_id"),
        ("1001,1,2025-01-10T10,45.0", "invalid timestamp"),
        ("1001,1,20250110T100000,45.0", "invalid timestamp"),
        ("1001,1,2025-W02-5T10:00:00,45.0", "invalid timestamp"),
        ("1001,1,2025-01-10T1000,45.0", "invalid timestamp"),
        ("1001,1,2025-01-10T24:00:00,45.0", "invalid timestamp"),
    ],
)
def test_parse_event_line_failures_never_raise(line: str, reason: str) -> None:
    result = parse_event_line(line)

    assert result.record is None
    assert result.reason == reason


def test_parse_timestamp_accepts_minutes_and_fractions() -> None:
    assert parse_timestamp("2025-01-10T10:00") == datetime(2025, 1, 10, 10, 0)
    assert parse_timestamp(" 2025-01-10T10:00:00.250 ") == datetime(
        2025, 1, 10, 10, 0, 0, 250000
    )
    assert parse_timestamp("2025-01-10T10:00:00.123456789") == datetime(
        2025, 1, 10, 10, 0, 0, 123456
    )


def test_parse_source_line_accepts_int_bounds() -> None:
    assert parse_source_line("2147483647,Max").record == Source(id=2147483647, name="Max")
    assert parse_source_line("-2147483648,Min").record == Source(id=-2147483648, name="Min")
