from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.settings import AttendanceSettings
from .core.constants import DEFAULT_CIVIL_UTC_OFFSET
from .database.bootstrap import as_db_config
from .database.connection import DatabaseConnection
from .payroll.service import PayoutService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    attendance_repo: Optional[MySQLAttendanceRepository]

    attendance_service: AttendanceService
    payout_service: PayoutService


def build_container(
    *,
    db_config: Optional[dict],
    utc_offset: str = DEFAULT_CIVIL_UTC_OFFSET,
    default_settings: Optional[AttendanceSettings] = None,
) -> Container:
    """Wire services. Without db_config only the stateless endpoints work."""
    conn = None
    attendance_repo = None
    if db_config:
        conn = DatabaseConnection(as_db_config(db_config))
        attendance_repo = MySQLAttendanceRepository(conn)

    attendance_service = AttendanceService(
        attendance_repo,
        utc_offset=utc_offset,
        default_settings=default_settings,
    )
    payout_service = PayoutService()

    return Container(
        conn=conn,
        attendance_repo=attendance_repo,
        attendance_service=attendance_service,
        payout_service=payout_service,
    )
