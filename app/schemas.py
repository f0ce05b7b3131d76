"""Pydantic schemas for the HTTP API layer."""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class SourceOut(BaseModel):
    """A source as exposed over HTTP."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class EventOut(BaseModel):
    """An event with its linked source, if any."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    source_id: int
    timestamp: datetime
    value: float
    source: Optional[SourceOut] = None


class LoadRequest(BaseModel):
    """Server-side paths to load the dataset from."""

    sources_path: str = Field(..., min_length=1, description="Path to the sources CSV file.")
    event_paths: List[str] = Field(
        default_factory=list, description="Event CSV files, loaded concurrently."
    )


class DatasetSummaryOut(BaseModel):
    """Counts and value statistics for the loaded dataset."""

    model_config = ConfigDict(from_attributes=True)

    source_count: int = Field(..., ge=0)
    event_count: int = Field(..., ge=0)
    linked_count: int = Field(..., ge=0)
    unlinked_count: int = Field(..., ge=0)
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    mean_value: Optional[float] = None
    first_timestamp: Optional[datetime] = None
    last_timestamp: Optional[datetime] = None
    per_source_count: Dict[str, int] = Field(default_factory=dict)


class EventListOut(BaseModel):
    """Result of a filter query."""

    count: int = Field(..., ge=0)
    events: List[EventOut] = Field(default_factory=list)

    @classmethod
    def from_events(cls, events) -> "EventListOut":
        items = [EventOut.model_validate(event) for event in events]
        return cls(count=len(items), events=items)
