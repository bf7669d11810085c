from __future__ import annotations

from typing import Optional

from ...core.enums import AttendanceStatus
from ..settings import AttendanceSettings
from .base import DayStatusStrategy, StatusDecision


class CompStrategy(DayStatusStrategy):
    """Administratively granted day off; punch data is ignored."""

    def decide(
        self,
        *,
        first_in: Optional[str],
        last_out: Optional[str],
        worked_minutes: int,
        settings: AttendanceSettings,
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.COMP)
