from __future__ import annotations

from ...reports.model import UserAttendanceSummary
from ..model import PayoutBreakdown, PayoutRates
from .base import PayoutCalculator


class StandardPayoutCalculator(PayoutCalculator):
    """Standard rule: worked hours x hourly rate + comp days x day rate + bonus - dues."""

    def calculate(self, summary: UserAttendanceSummary, rates: PayoutRates) -> PayoutBreakdown:
        total_hours = summary.total_working_hours + summary.total_working_minutes / 60
        hours_earning = total_hours * rates.hourly_rate
        comp_earning = summary.comp_days * rates.comp_day_rate
        total = hours_earning + comp_earning + rates.bonus - rates.dues
        return PayoutBreakdown(
            total_hours=round(total_hours, 2),
            hours_earning=round(hours_earning, 2),
            comp_days=summary.comp_days,
            comp_earning=round(comp_earning, 2),
            bonus=round(rates.bonus, 2),
            dues=round(rates.dues, 2),
            total_payout=round(total, 2),
        )
