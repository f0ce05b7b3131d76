"""Domain models shared across services."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True, slots=True)
class Source:
    """A named origin of events, parsed from the sources file."""

    id: int
    name: str


@dataclass(slots=True)
class Event:
    """A single timestamped reading tied to a source by ``source_id``.

    ``source`` is filled in by the dataset store's join step and points at the
    ``Source`` instance the store holds; it is excluded from equality so that
    linking does not change event identity.
    """

    id: int
    source_id: int
    timestamp: datetime
    value: float
    source: Optional[Source] = field(default=None, compare=False)

    @property
    def source_name(self) -> Optional[str]:
        return self.source.name if self.source is not None else None
