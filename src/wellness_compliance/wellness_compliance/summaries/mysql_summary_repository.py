from __future__ import annotations

from datetime import date
from typing import Any, Dict, Sequence

from ..compliance.daily import DailySummary
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .repository import DailySummaryRepository

_COLUMNS = """
    team_id, organization_id, summary_date, is_work_day, is_holiday,
    total_members, on_leave_count, expected_count, checked_in_count,
    not_checked_in_count, green_count, yellow_count, red_count,
    avg_readiness, compliance_rate
"""


def _summary(r: Dict[str, Any]) -> DailySummary:
    return DailySummary(
        team_id=str(r["team_id"]),
        organization_id=str(r["organization_id"]),
        date=r["summary_date"],
        is_work_day=bool(r["is_work_day"]),
        is_holiday=bool(r["is_holiday"]),
        total_members=int(r["total_members"]),
        on_leave_count=int(r["on_leave_count"]),
        expected_count=int(r["expected_count"]),
        checked_in_count=int(r["checked_in_count"]),
        not_checked_in_count=int(r["not_checked_in_count"]),
        green_count=int(r["green_count"]),
        yellow_count=int(r["yellow_count"]),
        red_count=int(r["red_count"]),
        avg_readiness=float(r["avg_readiness"]) if r.get("avg_readiness") is not None else None,
        compliance_rate=int(r["compliance_rate"]) if r.get("compliance_rate") is not None else None,
    )


class MySQLDailySummaryRepository(DailySummaryRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, summary: DailySummary) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO daily_team_summaries({_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    organization_id=VALUES(organization_id),
                    is_work_day=VALUES(is_work_day),
                    is_holiday=VALUES(is_holiday),
                    total_members=VALUES(total_members),
                    on_leave_count=VALUES(on_leave_count),
                    expected_count=VALUES(expected_count),
                    checked_in_count=VALUES(checked_in_count),
                    not_checked_in_count=VALUES(not_checked_in_count),
                    green_count=VALUES(green_count),
                    yellow_count=VALUES(yellow_count),
                    red_count=VALUES(red_count),
                    avg_readiness=VALUES(avg_readiness),
                    compliance_rate=VALUES(compliance_rate)
                """,
                (
                    summary.team_id,
                    summary.organization_id,
                    summary.date,
                    int(summary.is_work_day),
                    int(summary.is_holiday),
                    summary.total_members,
                    summary.on_leave_count,
                    summary.expected_count,
                    summary.checked_in_count,
                    summary.not_checked_in_count,
                    summary.green_count,
                    summary.yellow_count,
                    summary.red_count,
                    summary.avg_readiness,
                    summary.compliance_rate,
                ),
            )

    def list_range(self, *, team_id: str, start: date, end: date) -> Sequence[DailySummary]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS} FROM daily_team_summaries
                WHERE team_id=%s AND summary_date BETWEEN %s AND %s
                ORDER BY summary_date
                """,
                (team_id, start, end),
            )
            return [_summary(r) for r in fetchall(cur)]
