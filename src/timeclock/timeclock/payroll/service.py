from __future__ import annotations

from typing import Any, Mapping, Optional

from ..common.validators import require_non_negative_amount
from ..core.exceptions import ValidationError
from ..reports.model import UserAttendanceSummary
from .calculator.base import PayoutCalculator
from .calculator.standard_calculator import StandardPayoutCalculator
from .model import PayoutBreakdown, PayoutRates


class PayoutService:
    def __init__(self, *, calculator: Optional[PayoutCalculator] = None):
        self._calculator = calculator or StandardPayoutCalculator()

    def calculate(self, summary: UserAttendanceSummary, rates: PayoutRates) -> PayoutBreakdown:
        return self._calculator.calculate(summary, rates)

    def calculate_from_payload(self, payload: Mapping[str, Any]) -> PayoutBreakdown:
        """Payout for a summary already serialized by the report endpoints."""
        data = payload.get("summary")
        if not isinstance(data, Mapping):
            raise ValidationError("summary is required")

        try:
            summary = UserAttendanceSummary(
                employee_id=int(data.get("userId", 0)),
                total_working_hours=int(data.get("totalWorkingHours", 0)),
                total_working_minutes=int(data.get("totalWorkingMinutes", 0)),
                comp_days=int(data.get("compDays", 0)),
            )
        except (TypeError, ValueError):
            raise ValidationError("summary contains non-numeric totals")

        rates = PayoutRates(
            hourly_rate=require_non_negative_amount(payload.get("hourlyRate"), "hourlyRate"),
            comp_day_rate=require_non_negative_amount(payload.get("compDayRate"), "compDayRate"),
            bonus=require_non_negative_amount(payload.get("bonus"), "bonus"),
            dues=require_non_negative_amount(payload.get("dues"), "dues"),
        )
        return self.calculate(summary, rates)
