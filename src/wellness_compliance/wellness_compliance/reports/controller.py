from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import parse_iso_date, try_parse_iso_date, utc_now
from ..container import Container
from ..core.exceptions import ValidationError
from ..dates.periods import parse_days
from ..dates.resolver import resolve_timezone, today as local_today


def register(app: Flask, container: Container) -> None:
    @app.get("/api/organizations/<organization_id>/teams/<team_id>/report", endpoint="team_report")
    def team_report(organization_id: str, team_id: str):
        report = container.team_report_service.build_team_report(
            organization_id,
            team_id,
            period=request.args.get("period", "today"),
            custom_start=request.args.get("start"),
            custom_end=request.args.get("end"),
            now=utc_now(),
        )
        return jsonify(report.to_dict())

    @app.get("/api/organizations/<organization_id>/overview", endpoint="teams_overview")
    def teams_overview(organization_id: str):
        days = parse_days(request.args.get("days"))
        include_inactive = request.args.get("include_inactive", "").lower() in {"1", "true", "yes"}
        team_ids = [t for t in request.args.get("team_ids", "").split(",") if t.strip()] or None
        report = container.overview_service.build_overview(
            organization_id,
            days=days,
            now=utc_now(),
            team_ids=team_ids,
            include_inactive=include_inactive,
        )
        return jsonify(report.to_dict())

    @app.post(
        "/api/organizations/<organization_id>/teams/<team_id>/summaries/recalculate",
        endpoint="recalculate_summaries",
    )
    def recalculate_summaries(organization_id: str, team_id: str):
        try:
            start = parse_iso_date(request.args.get("start", ""))
            end = parse_iso_date(request.args.get("end", ""))
        except ValueError:
            raise ValidationError("start and end must be YYYY-MM-DD")
        if start > end:
            raise ValidationError("start must not be after end")

        container.summary_service.schedule_recalculation(
            organization_id=organization_id, team_id=team_id, start=start, end=end
        )
        return jsonify({"status": "scheduled", "start": start.isoformat(), "end": end.isoformat()}), 202

    @app.get("/api/organizations/<organization_id>/teams/<team_id>/summaries", endpoint="cached_summaries")
    def cached_summaries(organization_id: str, team_id: str):
        organization, _ = container.snapshot_repo.team_context(organization_id=organization_id, team_id=team_id)
        today = local_today(resolve_timezone(organization.timezone), utc_now())
        start = try_parse_iso_date(request.args.get("start"))
        end = try_parse_iso_date(request.args.get("end"))
        if start is None or end is None or start > end:
            start = end = today
        rows = container.summary_service.cached_range(team_id, start=start, end=end)
        return jsonify(
            {
                "team_id": team_id,
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "summaries": [row.to_dict() for row in rows],
            }
        )
