"""
In-memory history of past fits.

Each entry holds the plain-data record of a fit exactly as it was
produced, so a past fit can be shown again without refitting.
"""

from __future__ import annotations

import copy
import uuid
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

from pyols.regression.solution import LinearSolution

MAX_HISTORY = 50


@dataclass(frozen=True)
class HistoryEntry:
    """One stored fit: an id, when it was stored, and its record."""
    id: str
    timestamp: datetime
    record: dict[str, Any]

    @property
    def y_column(self) -> str:
        return self.record['yColumn']

    @property
    def x_columns(self) -> list[str]:
        return self.record['xColumns']

    @property
    def r_squared(self) -> float:
        return self.record['rSquared']


class FitHistory:
    """
    Most-recent-first list of fit records, capped at `max_entries`.

    Not thread-safe; each caller owns its history.
    """

    def __init__(self, max_entries: int = MAX_HISTORY):
        if max_entries < 1:
            raise ValueError(f"max_entries must be >= 1, got {max_entries}")
        self._max_entries = max_entries
        self._entries: list[HistoryEntry] = []

    def add(self, solution: LinearSolution | dict[str, Any]) -> HistoryEntry:
        """Store a fit (or an already-rendered record) and return its entry."""
        if isinstance(solution, LinearSolution):
            record = solution.to_dict()
        else:
            record = copy.deepcopy(dict(solution))
        entry = HistoryEntry(
            id=uuid.uuid4().hex,
            timestamp=datetime.now(timezone.utc),
            record=record,
        )
        self._entries.insert(0, entry)
        del self._entries[self._max_entries:]
        return entry

    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def get(self, entry_id: str) -> HistoryEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def last(self) -> HistoryEntry | None:
        return self._entries[0] if self._entries else None

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
