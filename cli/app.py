from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import List, Optional

import typer

from cli.render import render_event, render_events, render_source, render_summary
from datastore.dataset_store import DatasetStore
from logging_config import configure_logging
from services.aggregator import Aggregator
from services.dataset import DatasetService
from services.errors import LoadError
from services.loader import ParallelEventLoader
from settings import get_settings

TIMESTAMP_FORMATS = ["%Y-%m-%dT%H:%M:%S", "%Y-%m-%dT%H:%M"]


@dataclass
class CLIState:
    service: DatasetService
    sources_path: Path
    event_paths: List[Path]
    loaded: bool = False


app = typer.Typer(
    help="Load source and event CSV files and run filter queries over them.",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def _get_state(ctx: typer.Context) -> CLIState:
    """Return the CLI state, loading the dataset on first use."""
    state = ctx.obj
    if not isinstance(state, CLIState):
        raise typer.Exit(code=1)
    if state.loaded:
        return state

    try:
        state.service.load(state.sources_path, state.event_paths)
    except (OSError, UnicodeDecodeError) as exc:
        typer.secho(
            f"Unable to read sources file {state.sources_path}: {exc}",
            fg=typer.colors.RED,
            err=True,
        )
        raise typer.Exit(code=1) from exc
    except LoadError as exc:
        typer.secho(f"Loading events failed: {exc}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1) from exc

    state.loaded = True
    return state


def build_service(max_workers: Optional[int]) -> DatasetService:
    return DatasetService(
        store=DatasetStore(),
        loader=ParallelEventLoader(max_workers=max_workers),
        aggregator=Aggregator(),
    )


@app.callback()
def main(
    ctx: typer.Context,
    sources: Optional[Path] = typer.Option(
        None,
        "--sources",
        "-s",
        help="Sources CSV (defaults to EVENTS_SOURCES_PATH env or resources/sources.csv).",
    ),
    events: Optional[List[Path]] = typer.Option(
        None,
        "--events",
        "-e",
        help="Events CSV; repeat for several files (defaults to EVENTS_FILE_PATHS env).",
    ),
    workers: Optional[int] = typer.Option(
        None,
        "--workers",
        min=1,
        help="Upper bound on loader threads (defaults to one per events file).",
    ),
    log_level: Optional[str] = typer.Option(
        None,
        "--log-level",
        help="Logging level for diagnostics written to stderr.",
    ),
) -> None:
    """Resolve the input files; the dataset is loaded when a command runs."""
    if ctx.resilient_parsing:
        return
    configure_logging(log_level.upper() if log_level else None)
    settings = get_settings()
    sources_path = sources or Path(settings.sources_path)
    event_paths = list(events) if events else [Path(path) for path in settings.event_paths]

    service = build_service(workers or settings.loader_max_workers)
    ctx.obj = CLIState(service=service, sources_path=sources_path, event_paths=event_paths)
    ctx.call_on_close(service.clear)


@app.command("summary")
def summary_command(ctx: typer.Context) -> None:
    """Print counts and value statistics for the loaded dataset."""
    state = _get_state(ctx)
    render_summary(state.service.summary())


@app.command("by-source")
def by_source_command(
    ctx: typer.Context,
    name: str = typer.Argument(..., help="Case-insensitive substring of the source name."),
) -> None:
    """List events whose source name contains NAME."""
    state = _get_state(ctx)
    events = state.service.queries.find_by_source_name(name)
    render_events(f"Events whose source contains {name!r}", events)


@app.command("by-date")
def by_date_command(
    ctx: typer.Context,
    start: datetime = typer.Argument(..., formats=TIMESTAMP_FORMATS, help="Inclusive start."),
    end: datetime = typer.Argument(..., formats=TIMESTAMP_FORMATS, help="Inclusive end."),
) -> None:
    """List events with START <= timestamp <= END."""
    state = _get_state(ctx)
    events = state.service.queries.find_by_date_range(start, end)
    render_events(f"Events between {start.isoformat()} and {end.isoformat()}", events)


@app.command("by-value")
def by_value_command(
    ctx: typer.Context,
    minimum: float = typer.Argument(..., metavar="MIN", help="Inclusive lower bound."),
    maximum: float = typer.Argument(..., metavar="MAX", help="Inclusive upper bound."),
) -> None:
    """List events with MIN <= value <= MAX."""
    state = _get_state(ctx)
    events = state.service.queries.find_by_value_range(minimum, maximum)
    render_events(f"Events with value between {minimum} and {maximum}", events)


@app.command("event")
def event_command(
    ctx: typer.Context,
    event_id: int = typer.Argument(..., help="Event identifier."),
) -> None:
    """Show one event by id."""
    state = _get_state(ctx)
    render_event(state.service.store.get_event_by_id(event_id), event_id)


@app.command("source")
def source_command(
    ctx: typer.Context,
    source_id: int = typer.Argument(..., help="Source identifier."),
) -> None:
    """Show one source by id."""
    state = _get_state(ctx)
    render_source(state.service.store.get_source_by_id(source_id), source_id)
