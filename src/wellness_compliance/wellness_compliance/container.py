from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.service import MemberAttendanceService
from .compliance.mysql_snapshot_repository import MySQLSnapshotRepository
from .compliance.snapshot import SnapshotSource
from .core.constants import MAX_REPORT_DAYS
from .database.connection import DBConfig, DatabaseConnection
from .exemptions.mysql_exemption_repository import MySQLExemptionRepository
from .exemptions.repository import ExemptionRepository
from .exemptions.service import ExemptionService
from .grading.calculator.weighted_calculator import WeightedGradeCalculator
from .reports.service import OverviewService, TeamReportService
from .summaries.mysql_summary_repository import MySQLDailySummaryRepository
from .summaries.repository import DailySummaryRepository
from .summaries.service import DailySummaryService


@dataclass(frozen=True)
class Container:
    snapshot_repo: SnapshotSource
    summaries_repo: DailySummaryRepository
    exemptions_repo: ExemptionRepository

    summary_service: DailySummaryService
    exemption_service: ExemptionService
    team_report_service: TeamReportService
    overview_service: OverviewService
    attendance_service: MemberAttendanceService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    snapshot_repo: SnapshotSource,
    summaries_repo: DailySummaryRepository,
    exemptions_repo: ExemptionRepository,
    max_report_days: int = MAX_REPORT_DAYS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services over any repository implementations (MySQL or in-memory)."""
    calculator = WeightedGradeCalculator()
    summary_service = DailySummaryService(snapshot_repo, summaries_repo, max_days=max_report_days)
    return Container(
        snapshot_repo=snapshot_repo,
        summaries_repo=summaries_repo,
        exemptions_repo=exemptions_repo,
        summary_service=summary_service,
        exemption_service=ExemptionService(exemptions_repo, summary_service),
        team_report_service=TeamReportService(snapshot_repo, calculator=calculator, max_days=max_report_days),
        overview_service=OverviewService(snapshot_repo, calculator=calculator, max_days=max_report_days),
        attendance_service=MemberAttendanceService(snapshot_repo, max_days=max_report_days),
        conn=conn,
    )


def build_container(
    *,
    db_config: dict,
    max_report_days: int = MAX_REPORT_DAYS,
    dispatch_inline: bool = False,
) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    container = wire(
        snapshot_repo=MySQLSnapshotRepository(conn),
        summaries_repo=MySQLDailySummaryRepository(conn),
        exemptions_repo=MySQLExemptionRepository(conn),
        max_report_days=max_report_days,
        conn=conn,
    )
    if not dispatch_inline:
        from .workers.tasks import CeleryDispatcher

        container.summary_service.set_dispatcher(CeleryDispatcher())
    return container
