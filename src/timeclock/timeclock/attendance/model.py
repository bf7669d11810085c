from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import AttendanceStatus, PunchType


@dataclass(frozen=True)
class PunchView:
    """A punch as shown on a day: civil time, inferred role and pairing."""

    time: str
    type: PunchType
    verification_label: str
    is_paired: bool
    is_edited: bool = False

    def to_dict(self) -> dict:
        return {
            "time": self.time,
            "type": self.type.value,
            "verificationType": self.verification_label,
            "isPaired": self.is_paired,
            "isEdited": self.is_edited,
        }


@dataclass(frozen=True)
class DailyAttendanceRecord:
    """Domain entity: one calendar day for one employee."""

    employee_id: int
    date: date
    day_code: str
    status: AttendanceStatus
    first_in: Optional[str] = None
    last_out: Optional[str] = None
    total_hours: int = 0
    total_minutes: int = 0
    punches: tuple[PunchView, ...] = ()
    is_late: bool = False
    is_early_out: bool = False
    overtime_minutes: int = 0

    @property
    def worked_minutes(self) -> int:
        return self.total_hours * 60 + self.total_minutes

    def to_dict(self) -> dict:
        return {
            "userId": self.employee_id,
            "date": self.date.strftime("%Y-%m-%d"),
            "dayCode": self.day_code,
            "firstIn": self.first_in,
            "lastOut": self.last_out,
            "totalHours": self.total_hours,
            "totalMinutes": self.total_minutes,
            "punches": [p.to_dict() for p in self.punches],
            "status": self.status.value,
            "isLate": self.is_late,
            "isEarlyOut": self.is_early_out,
            "overtime": self.overtime_minutes,
        }
