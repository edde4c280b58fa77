"""
Celery tasks for the DailySummary cache.

Failures are logged and swallowed here; the next triggering event
recomputes the same rows.
"""
from __future__ import annotations

import importlib
import logging
from datetime import date, timedelta
from typing import Optional

from ..common.datetime_utils import parse_iso_date
from ..dates.resolver import resolve_timezone, today as local_today
from .celery_app import celery_app

logger = logging.getLogger(__name__)

_container = None


def _get_container():
    global _container
    if _container is None:
        from config import get_settings_module

        from ..container import build_container

        settings = importlib.import_module(get_settings_module())
        _container = build_container(db_config=getattr(settings, "DB_CONFIG"), dispatch_inline=True)
    return _container


@celery_app.task(name="summaries.recalculate_team")
def recalculate_team_summaries(organization_id: str, team_id: str, start: str, end: str) -> dict:
    service = _get_container().summary_service
    try:
        written = service.recalculate_range(
            organization_id, team_id, start=parse_iso_date(start), end=parse_iso_date(end)
        )
    except Exception:
        logger.exception(
            "Summary recompute task failed for team %s (%s..%s)",
            team_id,
            start,
            end,
            extra={"team_id": team_id, "organization_id": organization_id},
        )
        return {"status": "failed", "team_id": team_id}
    return {"status": "success", "team_id": team_id, "days": written}


@celery_app.task(name="summaries.recalculate_recent")
def recalculate_recent(organization_ids: Optional[list] = None, day: Optional[str] = None) -> dict:
    """Nightly pass: rebuild one day (default yesterday) for every active team."""
    container = _get_container()
    ids = organization_ids or container.snapshot_repo.list_organization_ids()
    results = {}
    for organization_id in ids:
        target = parse_iso_date(day) if day else None
        try:
            if target is None:
                organization = container.snapshot_repo.organization(organization_id=organization_id)
                target = local_today(resolve_timezone(organization.timezone)) - timedelta(days=1)
            results[organization_id] = container.summary_service.recalculate_all_teams_for_date(organization_id, target)
        except Exception:
            logger.exception(
                "Nightly recompute failed for organization %s",
                organization_id,
                extra={"organization_id": organization_id, "work_date": target},
            )
            results[organization_id] = None
    return {"teams": results}


class CeleryDispatcher:
    """Queues recomputes on the Celery broker."""

    def dispatch(self, *, organization_id: str, team_id: str, start: date, end: date) -> None:
        recalculate_team_summaries.delay(organization_id, team_id, start.isoformat(), end.isoformat())
