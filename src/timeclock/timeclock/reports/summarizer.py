from __future__ import annotations

import math
from typing import Optional, Sequence

from ..attendance.model import DailyAttendanceRecord
from ..core.enums import AttendanceStatus
from .model import UserAttendanceSummary


class AggregationSummarizer:
    """Roll daily records up into one summary per employee.

    Working minutes, late/early counts and overtime only come from PRESENT
    days, and the average is taken over present days only.
    """

    def summarize(
        self,
        employee_id: int,
        records: Sequence[DailyAttendanceRecord],
        *,
        user_name: Optional[str] = None,
    ) -> UserAttendanceSummary:
        counts = {status: 0 for status in AttendanceStatus}
        worked_minutes = 0
        late_days = 0
        early_out_days = 0
        overtime_minutes = 0

        for r in records:
            counts[r.status] += 1
            if r.status != AttendanceStatus.PRESENT:
                continue
            worked_minutes += r.worked_minutes
            if r.is_late:
                late_days += 1
            if r.is_early_out:
                early_out_days += 1
            if r.overtime_minutes > 0:
                overtime_minutes += r.overtime_minutes

        present_days = counts[AttendanceStatus.PRESENT]
        average = worked_minutes / 60 / present_days if present_days > 0 else 0

        return UserAttendanceSummary(
            employee_id=employee_id,
            total_days=len(records),
            present_days=present_days,
            absent_days=counts[AttendanceStatus.ABSENT],
            incomplete_days=counts[AttendanceStatus.INCOMPLETE],
            comp_days=counts[AttendanceStatus.COMP],
            total_working_hours=int(worked_minutes // 60),
            total_working_minutes=int(round(worked_minutes % 60)),
            average_hours_per_day=_round_half_up(average),
            late_days=late_days,
            early_out_days=early_out_days,
            overtime_minutes=overtime_minutes,
            daily_records=tuple(records),
            user_name=user_name,
        )


def _round_half_up(value: float, places: int = 2) -> float:
    scale = 10**places
    return math.floor(value * scale + 0.5) / scale
