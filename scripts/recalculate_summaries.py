"""Rebuild the DailySummary cache for one team, or for every active team on one day.

Usage:
    python scripts/recalculate_summaries.py ORG_ID --team TEAM_ID --start 2026-01-01 --end 2026-01-31
    python scripts/recalculate_summaries.py ORG_ID --day 2026-01-31
"""
from __future__ import annotations

import argparse
import importlib
import logging

from config import get_settings_module

from wellness_compliance.common.datetime_utils import parse_iso_date
from wellness_compliance.common.log import setup_logging
from wellness_compliance.container import build_container

logger = logging.getLogger(__name__)


def main() -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("organization_id")
    parser.add_argument("--team")
    parser.add_argument("--start", type=parse_iso_date)
    parser.add_argument("--end", type=parse_iso_date)
    parser.add_argument("--day", type=parse_iso_date)
    args = parser.parse_args()

    settings = importlib.import_module(get_settings_module())
    setup_logging(level=getattr(settings, "LOG_LEVEL", "INFO"), json_output=False)
    container = build_container(db_config=settings.DB_CONFIG, dispatch_inline=True)

    if args.team:
        if not args.start or not args.end:
            parser.error("--team needs --start and --end")
        written = container.summary_service.recalculate_range(
            args.organization_id, args.team, start=args.start, end=args.end
        )
        logger.info("Rebuilt %d rows for team %s", written, args.team)
    elif args.day:
        written = container.summary_service.recalculate_all_teams_for_date(args.organization_id, args.day)
        logger.info("Rebuilt %s for %d teams", args.day, written)
    else:
        parser.error("pass --team with --start/--end, or --day")


if __name__ == "__main__":
    main()
