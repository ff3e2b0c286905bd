"""Per-session side channel for reasoning annotations and chart payloads."""
from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Iterable, Optional

from src.core.entities import ChartData, SessionSnapshot
from src.utils.logger import logger


@dataclass
class _SessionEntry:
    thoughts: list[str] = field(default_factory=list)
    charts: list[ChartData] = field(default_factory=list)
    queried_tables: list[str] = field(default_factory=list)
    summary: Optional[str] = None
    involves_data_query: bool = False

    def freeze(self) -> SessionSnapshot:
        return SessionSnapshot(
            thoughts=tuple(self.thoughts),
            charts=tuple(self.charts),
            queried_tables=tuple(self.queried_tables),
            summary=self.summary,
            involves_data_query=self.involves_data_query,
        )


class InMemoryThoughtSink:
    """Thread-safe store keyed by session id with read-and-clear semantics.

    Writers may append from several steps of the same request concurrently; the
    first ``consume_and_clear`` call takes the entry and later reads get an
    empty snapshot.
    """

    def __init__(self) -> None:
        self._entries: dict[str, _SessionEntry] = {}
        self._lock = threading.Lock()

    def append_thought(self, session_id: str, text: str) -> None:
        if text is None:
            return
        with self._lock:
            self._entry(session_id).thoughts.append(text)

    def attach_charts(self, session_id: str, charts: Iterable[ChartData]) -> None:
        charts = list(charts or ())
        with self._lock:
            entry = self._entry(session_id)
            entry.charts.extend(charts)
            if charts:
                entry.involves_data_query = True

    def add_queried_tables(self, session_id: str, tables: Iterable[str]) -> None:
        tables = list(tables or ())
        with self._lock:
            entry = self._entry(session_id)
            entry.queried_tables.extend(tables)
            if tables:
                entry.involves_data_query = True

    def set_summary(self, session_id: str, text: Optional[str]) -> None:
        with self._lock:
            self._entry(session_id).summary = text

    def consume_and_clear(self, session_id: str) -> SessionSnapshot:
        with self._lock:
            entry = self._entries.pop(session_id, None)
        if entry is None:
            logger.debug("No side-channel data for session {}", session_id)
            return SessionSnapshot()
        return entry.freeze()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _entry(self, session_id: str) -> _SessionEntry:
        entry = self._entries.get(session_id)
        if entry is None:
            entry = self._entries[session_id] = _SessionEntry()
        return entry


__all__ = ["InMemoryThoughtSink"]
