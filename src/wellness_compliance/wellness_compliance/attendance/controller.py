from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import utc_now
from ..container import Container
from ..dates.periods import parse_days


def register(app: Flask, container: Container) -> None:
    @app.get(
        "/api/organizations/<organization_id>/teams/<team_id>/members/<member_id>/attendance",
        endpoint="member_attendance",
    )
    def member_attendance(organization_id: str, team_id: str, member_id: str):
        report = container.attendance_service.build_member_report(
            organization_id,
            team_id,
            member_id,
            days=parse_days(request.args.get("days")),
            status=request.args.get("status"),
            now=utc_now(),
        )
        return jsonify(report.to_dict())
