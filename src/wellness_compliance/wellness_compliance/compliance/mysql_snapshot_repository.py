from __future__ import annotations

from datetime import date
from typing import Any, Dict, List, Optional, Sequence, Tuple

from ..checkins.model import CheckIn
from ..core.enums import ReadinessStatus, Role
from ..core.exceptions import NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause, normalize_mysql_time, to_db_utc
from ..dates.resolver import end_of_day, parse_work_days, resolve_timezone, start_of_day
from ..exemptions.model import EFFECTIVE_STATUSES, Exemption
from ..exemptions.mysql_exemption_repository import exemption_from_row
from ..teams.model import Holiday, Member, Organization, Team
from .snapshot import Snapshot, SnapshotSource

_TEAM_COLUMNS = """
    team_id, organization_id, name, work_days, shift_start, shift_end,
    grace_minutes, is_active, deactivated_at, leader_id, created_at
"""


def _organization(r: Dict[str, Any]) -> Organization:
    return Organization(organization_id=str(r["organization_id"]), name=r.get("name") or "", timezone=r.get("timezone"))


def _team(r: Dict[str, Any]) -> Team:
    return Team(
        team_id=str(r["team_id"]),
        organization_id=str(r["organization_id"]),
        name=r["name"],
        work_days=parse_work_days(r.get("work_days")),
        shift_start=normalize_mysql_time(r["shift_start"]),
        shift_end=normalize_mysql_time(r["shift_end"]),
        grace_minutes=int(r.get("grace_minutes") or 0),
        is_active=bool(r["is_active"]),
        deactivated_at=r.get("deactivated_at"),
        leader_id=r.get("leader_id"),
        created_at=r["created_at"],
    )


def _member(r: Dict[str, Any]) -> Member:
    return Member(
        member_id=str(r["member_id"]),
        team_id=r.get("team_id"),
        role=Role(r["role"]),
        created_at=r["created_at"],
        team_joined_at=r.get("team_joined_at"),
        is_active=bool(r["is_active"]),
        total_checkins=int(r.get("total_checkins") or 0),
        full_name=r.get("full_name") or "",
    )


def _checkin(r: Dict[str, Any]) -> CheckIn:
    return CheckIn(
        checkin_id=str(r["checkin_id"]),
        member_id=str(r["member_id"]),
        organization_id=str(r["organization_id"]),
        created_at=r["created_at"],
        mood=float(r["mood"]),
        stress=float(r["stress"]),
        sleep=float(r["sleep"]),
        physical_health=float(r["physical_health"]),
        readiness_score=int(r["readiness_score"]),
        readiness_status=ReadinessStatus(r["readiness_status"]),
    )


class MySQLSnapshotRepository(SnapshotSource):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _fetch_organization(cur, organization_id: str) -> Organization:
        cur.execute(
            "SELECT organization_id, name, timezone FROM organizations WHERE organization_id=%s",
            (organization_id,),
        )
        r = fetchone(cur)
        if not r:
            raise NotFoundError(f"Organization {organization_id} not found")
        return _organization(r)

    def list_organization_ids(self) -> List[str]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT organization_id FROM organizations ORDER BY organization_id")
            return [str(r["organization_id"]) for r in fetchall(cur)]

    def organization(self, *, organization_id: str) -> Organization:
        with db_cursor(self._conn_factory) as (_, cur):
            return self._fetch_organization(cur, organization_id)

    def team_context(self, *, organization_id: str, team_id: str) -> Tuple[Organization, Team]:
        with db_cursor(self._conn_factory, read_only=True) as (_, cur):
            organization = self._fetch_organization(cur, organization_id)
            cur.execute(
                f"SELECT {_TEAM_COLUMNS} FROM teams WHERE team_id=%s AND organization_id=%s",
                (team_id, organization_id),
            )
            r = fetchone(cur)
            if not r:
                raise NotFoundError(f"Team {team_id} not found")
            return organization, _team(r)

    def load(
        self,
        *,
        organization_id: str,
        start: date,
        end: date,
        team_ids: Optional[Sequence[str]] = None,
        include_inactive: bool = False,
    ) -> Snapshot:
        # All reads share one REPEATABLE READ transaction.
        with db_cursor(self._conn_factory, read_only=True) as (_, cur):
            organization = self._fetch_organization(cur, organization_id)
            tz = resolve_timezone(organization.timezone)

            sql = f"SELECT {_TEAM_COLUMNS} FROM teams WHERE organization_id=%s"
            params: List[Any] = [organization_id]
            if team_ids:
                placeholders, values = in_clause(team_ids)
                sql += f" AND team_id IN ({placeholders})"
                params.extend(values)
            if not include_inactive:
                sql += " AND is_active=1"
            cur.execute(sql, tuple(params))
            teams = [_team(r) for r in fetchall(cur)]

            members: List[Member] = []
            checkins: List[CheckIn] = []
            exemptions: List[Exemption] = []
            if teams:
                placeholders, values = in_clause([t.team_id for t in teams])
                cur.execute(
                    f"""
                    SELECT member_id, team_id, role, full_name, team_joined_at,
                           is_active, total_checkins, created_at
                    FROM members
                    WHERE team_id IN ({placeholders})
                    """,
                    values,
                )
                members = [_member(r) for r in fetchall(cur)]

            if members:
                placeholders, values = in_clause([m.member_id for m in members])
                cur.execute(
                    f"""
                    SELECT checkin_id, member_id, organization_id, mood, stress, sleep,
                           physical_health, readiness_score, readiness_status, created_at
                    FROM checkins
                    WHERE member_id IN ({placeholders})
                      AND created_at BETWEEN %s AND %s
                    """,
                    values + (to_db_utc(start_of_day(start, tz)), to_db_utc(end_of_day(end, tz))),
                )
                checkins = [_checkin(r) for r in fetchall(cur)]

                status_placeholders, statuses = in_clause([s.value for s in EFFECTIVE_STATUSES])
                cur.execute(
                    f"""
                    SELECT e.exemption_id, e.member_id, e.exemption_type, e.status,
                           e.start_date, e.end_date, e.reviewed_by, e.review_note,
                           m.team_id, m.organization_id
                    FROM exemptions e
                    JOIN members m ON m.member_id = e.member_id
                    WHERE e.member_id IN ({placeholders})
                      AND e.status IN ({status_placeholders})
                      AND e.start_date <= %s
                      AND (e.end_date IS NULL OR e.end_date >= %s)
                    """,
                    values + statuses + (end, start),
                )
                exemptions = [exemption_from_row(r) for r in fetchall(cur)]

            cur.execute(
                """
                SELECT organization_id, holiday_date, name
                FROM holidays
                WHERE organization_id=%s AND holiday_date BETWEEN %s AND %s
                """,
                (organization_id, start, end),
            )
            holidays = [
                Holiday(organization_id=str(r["organization_id"]), date=r["holiday_date"], name=r.get("name") or "")
                for r in fetchall(cur)
            ]

        return Snapshot.build(
            organization=organization,
            teams=teams,
            members=members,
            checkins=checkins,
            exemptions=exemptions,
            holidays=holidays,
        )
