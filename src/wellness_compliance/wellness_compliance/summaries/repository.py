from __future__ import annotations

from datetime import date
from typing import Protocol, Sequence

from ..compliance.daily import DailySummary


class DailySummaryRepository(Protocol):
    def upsert(self, summary: DailySummary) -> None:
        """Insert or overwrite the row for (team_id, date)."""

        raise NotImplementedError

    def list_range(self, *, team_id: str, start: date, end: date) -> Sequence[DailySummary]:
        raise NotImplementedError
