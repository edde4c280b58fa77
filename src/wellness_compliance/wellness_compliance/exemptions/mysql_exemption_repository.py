from __future__ import annotations

from datetime import date
from typing import Any, Dict, Optional, Sequence

from ..core.enums import ExemptionStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Exemption
from .repository import ExemptionRepository

_SELECT = """
    SELECT e.exemption_id, e.member_id, e.exemption_type, e.status,
           e.start_date, e.end_date, e.reviewed_by, e.review_note,
           m.team_id, m.organization_id
    FROM exemptions e
    JOIN members m ON m.member_id = e.member_id
"""


def exemption_from_row(r: Dict[str, Any]) -> Exemption:
    return Exemption(
        exemption_id=str(r["exemption_id"]),
        member_id=str(r["member_id"]),
        exemption_type=r["exemption_type"],
        status=ExemptionStatus(r["status"]),
        start_date=r["start_date"],
        end_date=r.get("end_date"),
        team_id=r.get("team_id"),
        organization_id=r.get("organization_id"),
        reviewed_by=r.get("reviewed_by"),
        review_note=r.get("review_note"),
    )


class MySQLExemptionRepository(ExemptionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get(self, *, exemption_id: str) -> Optional[Exemption]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_SELECT + " WHERE e.exemption_id=%s", (exemption_id,))
            r = fetchone(cur)
            return exemption_from_row(r) if r else None

    def list_for_team(self, *, team_id: str, start: date, end: date) -> Sequence[Exemption]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                _SELECT
                + """
                WHERE m.team_id=%s
                  AND e.start_date <= %s
                  AND (e.end_date IS NULL OR e.end_date >= %s)
                ORDER BY e.start_date
                """,
                (team_id, end, start),
            )
            return [exemption_from_row(r) for r in fetchall(cur)]

    def save_review(
        self,
        *,
        exemption_id: str,
        status: ExemptionStatus,
        reviewed_by: str,
        review_note: Optional[str],
        end_date: Optional[date],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE exemptions
                SET status=%s, reviewed_by=%s, review_note=%s, end_date=%s, reviewed_at=UTC_TIMESTAMP()
                WHERE exemption_id=%s
                """,
                (status.value, reviewed_by, review_note, end_date, exemption_id),
            )
            return cur.rowcount > 0
