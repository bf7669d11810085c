from __future__ import annotations

from abc import ABC, abstractmethod

from ...reports.model import UserAttendanceSummary
from ..model import PayoutBreakdown, PayoutRates


class PayoutCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, summary: UserAttendanceSummary, rates: PayoutRates) -> PayoutBreakdown:
        raise NotImplementedError
