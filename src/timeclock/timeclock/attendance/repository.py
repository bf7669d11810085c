from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Mapping, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from ..directory.model import Employee
from ..punches.model import PunchEvent
from .model import DailyAttendanceRecord


@dataclass(frozen=True)
class StoredDay:
    """Materialized daily row as persisted (flags are derived on read)."""

    employee_id: int
    work_date: date
    status: AttendanceStatus
    first_in: Optional[str]
    last_out: Optional[str]
    total_minutes: int
    punch_count: int


class AttendanceRepository(Protocol):
    def list_employees(self) -> Sequence[Employee]:
        raise NotImplementedError

    def get_employee(self, biometric_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def upsert_employee_names(self, names: Mapping[int, str]) -> tuple[int, int]:
        """Returns (created, updated)."""

        raise NotImplementedError

    def ensure_employee(self, biometric_id: int) -> bool:
        """Create a nameless employee if missing; True when created."""

        raise NotImplementedError

    def insert_punch(self, punch: PunchEvent) -> bool:
        """False when the same employee already has a punch at that instant."""

        raise NotImplementedError

    def delete_punch(self, *, employee_id: int, punch_time: datetime) -> bool:
        raise NotImplementedError

    def get_punches(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[int] = None,
    ) -> Sequence[PunchEvent]:
        """Punches with start <= timestamp < end."""

        raise NotImplementedError

    def get_comp_dates(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Mapping[int, set[date]]:
        raise NotImplementedError

    def get_stored_day(self, *, employee_id: int, work_date: date) -> Optional[StoredDay]:
        raise NotImplementedError

    def save_daily_records(self, records: Sequence[DailyAttendanceRecord]) -> None:
        """Upsert by (employee_id, date); last writer wins."""

        raise NotImplementedError
