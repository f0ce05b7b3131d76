"""HTTP route definitions for the service."""

from __future__ import annotations

from datetime import datetime

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from app.schemas import DatasetSummaryOut, EventListOut, EventOut, LoadRequest, SourceOut
from services.dataset import DatasetService, build_default_dataset_service
from services.errors import DatasetNotLoadedError, LoadError

router = APIRouter()


def get_dataset_service() -> DatasetService:
    return build_default_dataset_service()


def _not_loaded(exc: DatasetNotLoadedError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))


def _require_local(value: datetime, name: str) -> datetime:
    if value.tzinfo is not None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"{name} must be a local date-time without a timezone offset.",
        )
    return value


@router.post(
    "/dataset",
    response_model=DatasetSummaryOut,
    summary="Load sources and event files into memory and link them.",
)
async def load_dataset(
    request: LoadRequest,
    service: DatasetService = Depends(get_dataset_service),
) -> DatasetSummaryOut:
    try:
        summary = service.load(request.sources_path, request.event_paths)
    except (OSError, UnicodeDecodeError) as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Unable to read sources file {request.sources_path!r}: {exc}",
        ) from exc
    except LoadError as exc:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=str(exc),
        ) from exc
    return DatasetSummaryOut.model_validate(summary)


@router.get(
    "/dataset",
    response_model=DatasetSummaryOut,
    summary="Summarize the currently loaded dataset.",
)
async def get_dataset_summary(
    service: DatasetService = Depends(get_dataset_service),
) -> DatasetSummaryOut:
    try:
        summary = service.summary()
    except DatasetNotLoadedError as exc:
        raise _not_loaded(exc) from exc
    return DatasetSummaryOut.model_validate(summary)


@router.delete(
    "/dataset",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Release all loaded sources and events.",
)
async def clear_dataset(
    service: DatasetService = Depends(get_dataset_service),
) -> Response:
    service.clear()
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/events/by-source",
    response_model=EventListOut,
    summary="Events whose source name contains the given text (case-insensitive).",
)
async def events_by_source(
    name: str = Query(..., description="Substring of the source name."),
    service: DatasetService = Depends(get_dataset_service),
) -> EventListOut:
    try:
        events = service.queries.find_by_source_name(name)
    except DatasetNotLoadedError as exc:
        raise _not_loaded(exc) from exc
    return EventListOut.from_events(events)


@router.get(
    "/events/by-date",
    response_model=EventListOut,
    summary="Events with a timestamp inside the inclusive range.",
)
async def events_by_date(
    start: datetime = Query(..., description="Inclusive lower bound."),
    end: datetime = Query(..., description="Inclusive upper bound."),
    service: DatasetService = Depends(get_dataset_service),
) -> EventListOut:
    start = _require_local(start, "start")
    end = _require_local(end, "end")
    try:
        events = service.queries.find_by_date_range(start, end)
    except DatasetNotLoadedError as exc:
        raise _not_loaded(exc) from exc
    return EventListOut.from_events(events)


@router.get(
    "/events/by-value",
    response_model=EventListOut,
    summary="Events with a value inside the inclusive range.",
)
async def events_by_value(
    minimum: float = Query(..., alias="min", description="Inclusive lower bound."),
    maximum: float = Query(..., alias="max", description="Inclusive upper bound."),
    service: DatasetService = Depends(get_dataset_service),
) -> EventListOut:
    try:
        events = service.queries.find_by_value_range(minimum, maximum)
    except DatasetNotLoadedError as exc:
        raise _not_loaded(exc) from exc
    return EventListOut.from_events(events)


@router.get(
    "/events/{event_id}",
    response_model=EventOut,
    summary="Fetch a single event by id.",
)
async def get_event(
    event_id: int,
    service: DatasetService = Depends(get_dataset_service),
) -> EventOut:
    event = service.store.get_event_by_id(event_id)
    if event is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Event {event_id} not found.",
        )
    return EventOut.model_validate(event)


@router.get(
    "/sources/{source_id}",
    response_model=SourceOut,
    summary="Fetch a single source by id.",
)
async def get_source(
    source_id: int,
    service: DatasetService = Depends(get_dataset_service),
) -> SourceOut:
    source = service.store.get_source_by_id(source_id)
    if source is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Source {source_id} not found.",
        )
    return SourceOut.model_validate(source)


@router.get(
    "/health",
    summary="Health check endpoint.",
    status_code=status.HTTP_200_OK,
)
async def healthcheck() -> dict[str, str]:
    return {"status": "ok"}
