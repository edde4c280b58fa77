from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import try_parse_iso_date, utc_now
from ..common.validators import require_non_empty
from ..container import Container
from ..core.enums import ExemptionStatus
from ..core.exceptions import ValidationError
from ..dates.resolver import resolve_timezone, today as local_today


def register(app: Flask, container: Container) -> None:
    def _payload() -> dict:
        return request.get_json(silent=True) or {}

    def _today(organization_id: str):
        organization = container.snapshot_repo.organization(organization_id=organization_id)
        return local_today(resolve_timezone(organization.timezone), utc_now())

    def _status(value):
        try:
            return ExemptionStatus(value.strip().upper()) if value else None
        except ValueError:
            return None

    @app.post("/api/organizations/<organization_id>/exemptions/<exemption_id>/approve", endpoint="approve_exemption")
    def approve_exemption(organization_id: str, exemption_id: str):
        data = _payload()
        end_date = None
        if data.get("end_date"):
            end_date = try_parse_iso_date(data["end_date"])
            if end_date is None:
                raise ValidationError("end_date must be YYYY-MM-DD")
        exemption = container.exemption_service.approve(
            exemption_id,
            reviewer_id=require_non_empty(data.get("reviewer_id", ""), "reviewer_id"),
            today=_today(organization_id),
            end_date=end_date,
            note=data.get("note", ""),
        )
        return jsonify({"exemption_id": exemption.exemption_id, "status": exemption.status.value})

    @app.post("/api/organizations/<organization_id>/exemptions/<exemption_id>/reject", endpoint="reject_exemption")
    def reject_exemption(organization_id: str, exemption_id: str):
        data = _payload()
        exemption = container.exemption_service.reject(
            exemption_id,
            reviewer_id=require_non_empty(data.get("reviewer_id", ""), "reviewer_id"),
            today=_today(organization_id),
            note=data.get("note", ""),
        )
        return jsonify({"exemption_id": exemption.exemption_id, "status": exemption.status.value})

    @app.post("/api/organizations/<organization_id>/exemptions/<exemption_id>/end-early", endpoint="end_exemption_early")
    def end_exemption_early(organization_id: str, exemption_id: str):
        data = _payload()
        exemption = container.exemption_service.end_early(
            exemption_id,
            reviewer_id=require_non_empty(data.get("reviewer_id", ""), "reviewer_id"),
            today=_today(organization_id),
            note=data.get("note", ""),
        )
        return jsonify(
            {
                "exemption_id": exemption.exemption_id,
                "status": exemption.status.value,
                "end_date": exemption.end_date.isoformat() if exemption.end_date else None,
            }
        )

    @app.get("/api/organizations/<organization_id>/teams/<team_id>/exemptions", endpoint="team_exemptions")
    def team_exemptions(organization_id: str, team_id: str):
        container.snapshot_repo.team_context(organization_id=organization_id, team_id=team_id)
        today = _today(organization_id)
        start = try_parse_iso_date(request.args.get("start"))
        end = try_parse_iso_date(request.args.get("end"))
        if start is None or end is None or start > end:
            # Garbage or missing dates: the exemptions active today.
            start = end = today
        status = _status(request.args.get("status"))
        exemptions = container.exemption_service.list_for_team(team_id, start=start, end=end, status=status)
        return jsonify(
            {
                "team_id": team_id,
                "start_date": start.isoformat(),
                "end_date": end.isoformat(),
                "exemptions": [e.to_dict() for e in exemptions],
            }
        )
