from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional

from ..attendance.model import DailyAttendanceRecord
from ..attendance.settings import AttendanceSettings


@dataclass(frozen=True)
class UserAttendanceSummary:
    """Read-model: per-employee totals over a contiguous date range."""

    employee_id: int
    total_days: int = 0
    present_days: int = 0
    absent_days: int = 0
    incomplete_days: int = 0
    comp_days: int = 0
    total_working_hours: int = 0
    total_working_minutes: int = 0
    average_hours_per_day: float = 0.0
    late_days: int = 0
    early_out_days: int = 0
    overtime_minutes: int = 0
    daily_records: tuple[DailyAttendanceRecord, ...] = ()
    user_name: Optional[str] = None

    def to_dict(self) -> dict:
        data = {
            "userId": self.employee_id,
            "totalDays": self.total_days,
            "presentDays": self.present_days,
            "absentDays": self.absent_days,
            "incompleteDays": self.incomplete_days,
            "compDays": self.comp_days,
            "totalWorkingHours": self.total_working_hours,
            "totalWorkingMinutes": self.total_working_minutes,
            "averageHoursPerDay": self.average_hours_per_day,
            "lateDays": self.late_days,
            "earlyOutDays": self.early_out_days,
            "overtimeMinutes": self.overtime_minutes,
            "dailyRecords": [r.to_dict() for r in self.daily_records],
        }
        if self.user_name is not None:
            data["userName"] = self.user_name
        return data


@dataclass(frozen=True)
class AttendanceReport:
    file_name: str
    processed_at: datetime
    date_from: date
    date_to: date
    total_records: int
    settings: AttendanceSettings
    users: list[UserAttendanceSummary] = field(default_factory=list)

    @property
    def unique_users(self) -> int:
        return len(self.users)

    def to_dict(self) -> dict:
        return {
            "fileName": self.file_name,
            "processedAt": self.processed_at.isoformat(),
            "dateRange": {
                "from": self.date_from.strftime("%Y-%m-%d"),
                "to": self.date_to.strftime("%Y-%m-%d"),
            },
            "totalRecords": self.total_records,
            "uniqueUsers": self.unique_users,
            "users": [u.to_dict() for u in self.users],
            "settings": self.settings.to_dict(),
        }
