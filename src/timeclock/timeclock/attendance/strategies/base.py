from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from ...core.enums import AttendanceStatus
from ..settings import AttendanceSettings


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    is_late: bool = False
    is_early_out: bool = False
    overtime_minutes: int = 0


class DayStatusStrategy(ABC):
    """Strategy Pattern: encapsulate how we classify one calendar day."""

    @abstractmethod
    def decide(
        self,
        *,
        first_in: Optional[str],
        last_out: Optional[str],
        worked_minutes: int,
        settings: AttendanceSettings,
    ) -> StatusDecision:
        raise NotImplementedError
