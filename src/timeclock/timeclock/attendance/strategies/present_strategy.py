from __future__ import annotations

from typing import Optional

from ...common.datetime_utils import time_to_minutes
from ...core.enums import AttendanceStatus
from ..settings import AttendanceSettings
from .base import DayStatusStrategy, StatusDecision


class PresentStrategy(DayStatusStrategy):
    """Even punch count: the only status that gets late/early/overtime flags."""

    def decide(
        self,
        *,
        first_in: Optional[str],
        last_out: Optional[str],
        worked_minutes: int,
        settings: AttendanceSettings,
    ) -> StatusDecision:
        is_late = first_in is not None and time_to_minutes(first_in) > (
            settings.work_start_minutes + settings.late_threshold_minutes
        )
        is_early_out = last_out is not None and time_to_minutes(last_out) < (
            settings.work_end_minutes - settings.early_out_threshold_minutes
        )
        # Overtime is measured against the nominal shift length, not the actual end time.
        overtime = max(0, worked_minutes - settings.shift_minutes)
        return StatusDecision(
            status=AttendanceStatus.PRESENT,
            is_late=is_late,
            is_early_out=is_early_out,
            overtime_minutes=overtime,
        )
