from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from typing import Optional, Tuple


_SOURCES_PATH_ENV = "EVENTS_SOURCES_PATH"
_EVENT_PATHS_ENV = "EVENTS_FILE_PATHS"
_MAX_WORKERS_ENV = "LOADER_MAX_WORKERS"
_LOG_LEVEL_ENV = "LOG_LEVEL"


@dataclass(frozen=True)
class Settings:
    sources_path: str
    event_paths: Tuple[str, ...]
    loader_max_workers: Optional[int]
    log_level: str


def _read_str_env(name: str, default: str) -> str:
    value = os.getenv(name)
    if value is None:
        return default
    candidate = value.strip()
    return candidate or default


def _read_path_list(name: str, default: Tuple[str, ...]) -> Tuple[str, ...]:
    value = os.getenv(name)
    if value is None:
        return default
    parts = tuple(part.strip() for part in value.split(","))
    return tuple(part for part in parts if part)


def _read_max_workers(default: Optional[int]) -> Optional[int]:
    value = os.getenv(_MAX_WORKERS_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    try:
        parsed = int(candidate)
    except ValueError:
        return default
    return parsed if parsed > 0 else default


def _read_log_level(default: str) -> str:
    value = os.getenv(_LOG_LEVEL_ENV)
    if value is None:
        return default
    candidate = value.strip()
    if not candidate:
        return default
    return candidate.upper()


@lru_cache
def get_settings() -> Settings:
    return Settings(
        sources_path=_read_str_env(_SOURCES_PATH_ENV, "resources/sources.csv"),
        event_paths=_read_path_list(_EVENT_PATHS_ENV, ()),
        loader_max_workers=_read_max_workers(None),
        log_level=_read_log_level("INFO"),
    )
