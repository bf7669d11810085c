from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Mapping, Optional, Sequence

import pytest

from src.timeclock.timeclock.attendance.model import DailyAttendanceRecord
from src.timeclock.timeclock.attendance.repository import StoredDay
from src.timeclock.timeclock.attendance.service import AttendanceService
from src.timeclock.timeclock.core.enums import AttendanceStatus
from src.timeclock.timeclock.directory.model import Employee
from src.timeclock.timeclock.punches.model import PunchEvent

IST = timezone(timedelta(hours=5, minutes=30))


def ist_punch(employee_id: int, stamp: str, *, verify: int = 1, edited: bool = False) -> PunchEvent:
    """Punch at a wall-clock 'YYYY-MM-DD HH:MM[:SS]' in IST."""
    return PunchEvent(
        employee_id=employee_id,
        timestamp=datetime.fromisoformat(stamp).replace(tzinfo=IST),
        verification_method=verify,
        is_edited=edited,
    )


def directory_record(size: int, name: str, id_text: Optional[str] = None, *, index: int = 0, id_offset: Optional[int] = None) -> bytes:
    """Fixed-size directory record: name at byte 11, ASCII id near the end."""
    rec = bytearray(size)
    rec[0] = index + 1
    rec[3] = 0x0E
    rec[11 : 11 + len(name)] = name.encode("ascii")
    if id_text is not None:
        offset = id_offset if id_offset is not None else size - 16
        rec[offset : offset + len(id_text)] = id_text.encode("ascii")
    return bytes(rec)


class InMemoryAttendanceRepo:
    def __init__(self):
        self.employees: dict[int, Employee] = {}
        self.punches: dict[tuple[int, datetime], PunchEvent] = {}
        self.days: dict[tuple[int, date], DailyAttendanceRecord] = {}

    def list_employees(self) -> Sequence[Employee]:
        return [self.employees[k] for k in sorted(self.employees)]

    def get_employee(self, biometric_id: int) -> Optional[Employee]:
        return self.employees.get(biometric_id)

    def upsert_employee_names(self, names: Mapping[int, str]) -> tuple[int, int]:
        created = updated = 0
        for biometric_id, name in names.items():
            existing = self.employees.get(biometric_id)
            if existing is None:
                created += 1
            elif existing.name != name:
                updated += 1
            else:
                continue
            self.employees[biometric_id] = Employee(biometric_id=biometric_id, name=name)
        return created, updated

    def ensure_employee(self, biometric_id: int) -> bool:
        if biometric_id in self.employees:
            return False
        self.employees[biometric_id] = Employee(biometric_id=biometric_id)
        return True

    def insert_punch(self, punch: PunchEvent) -> bool:
        key = (punch.employee_id, punch.timestamp.astimezone(timezone.utc))
        if key in self.punches:
            return False
        self.punches[key] = punch
        return True

    def delete_punch(self, *, employee_id: int, punch_time: datetime) -> bool:
        return self.punches.pop((employee_id, punch_time.astimezone(timezone.utc)), None) is not None

    def get_punches(self, *, start: datetime, end: datetime, employee_id: Optional[int] = None):
        items = [
            p
            for (emp, ts), p in self.punches.items()
            if start <= ts < end and (employee_id is None or emp == employee_id)
        ]
        items.sort(key=lambda p: (p.employee_id, p.timestamp))
        return items

    def get_comp_dates(self, *, start_date: date, end_date: date, employee_id: Optional[int] = None):
        result: dict[int, set[date]] = {}
        for (emp, day), rec in self.days.items():
            if rec.status != AttendanceStatus.COMP or not (start_date <= day <= end_date):
                continue
            if employee_id is not None and emp != employee_id:
                continue
            result.setdefault(emp, set()).add(day)
        return result

    def get_stored_day(self, *, employee_id: int, work_date: date) -> Optional[StoredDay]:
        rec = self.days.get((employee_id, work_date))
        if rec is None:
            return None
        return StoredDay(
            employee_id=rec.employee_id,
            work_date=rec.date,
            status=rec.status,
            first_in=rec.first_in,
            last_out=rec.last_out,
            total_minutes=rec.worked_minutes,
            punch_count=len(rec.punches),
        )

    def save_daily_records(self, records: Sequence[DailyAttendanceRecord]) -> None:
        for rec in records:
            self.days[(rec.employee_id, rec.date)] = rec


@pytest.fixture
def repo() -> InMemoryAttendanceRepo:
    return InMemoryAttendanceRepo()


@pytest.fixture
def service(repo) -> AttendanceService:
    return AttendanceService(repo)
