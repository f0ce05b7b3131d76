from __future__ import annotations

from typing import Any, Iterable, Optional, Sequence

import typer

from models.records import Event, Source
from services.aggregator import DatasetSummary


def echo_heading(text: str) -> None:
    typer.secho(text, bold=True)


def echo_key_values(pairs: Iterable[tuple[str, Any]]) -> None:
    for key, value in pairs:
        typer.echo(f"{key}: {value}")


def format_event(event: Event) -> str:
    source = event.source_name or "-"
    return (
        f"Event(id={event.id}, source_id={event.source_id}, "
        f"timestamp={event.timestamp.isoformat()}, value={event.value}, source={source})"
    )


def render_summary(summary: DatasetSummary) -> None:
    echo_heading("Dataset")
    echo_key_values(
        [
            ("sources", summary.source_count),
            ("events", summary.event_count),
            ("linked", summary.linked_count),
            ("unlinked", summary.unlinked_count),
            ("min_value", summary.min_value),
            ("max_value", summary.max_value),
            ("mean_value", summary.mean_value),
            ("first_timestamp", summary.first_timestamp),
            ("last_timestamp", summary.last_timestamp),
        ]
    )
    if summary.per_source_count:
        typer.echo("per_source_count:")
        for name, count in sorted(summary.per_source_count.items()):
            typer.echo(f"  - {name}: {count}")


def render_events(title: str, events: Sequence[Event]) -> None:
    echo_heading(title)
    if events:
        for event in events:
            typer.echo(f"  - {format_event(event)}")
    else:
        typer.echo("No matching events.")
    typer.echo()
    typer.echo(f"Total: {len(events)}")


def render_event(event: Optional[Event], event_id: int) -> None:
    if event is None:
        typer.echo(f"Event {event_id} not found.")
        return
    typer.echo(format_event(event))


def render_source(source: Optional[Source], source_id: int) -> None:
    if source is None:
        typer.echo(f"Source {source_id} not found.")
        return
    echo_key_values([("id", source.id), ("name", source.name)])
