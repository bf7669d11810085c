from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PayoutRates:
    hourly_rate: float = 0.0
    comp_day_rate: float = 0.0
    bonus: float = 0.0
    dues: float = 0.0


@dataclass(frozen=True)
class PayoutBreakdown:
    total_hours: float
    hours_earning: float
    comp_days: int
    comp_earning: float
    bonus: float
    dues: float
    total_payout: float

    def to_dict(self) -> dict:
        return {
            "totalHours": self.total_hours,
            "hoursEarning": self.hours_earning,
            "compDays": self.comp_days,
            "compEarning": self.comp_earning,
            "bonus": self.bonus,
            "dues": self.dues,
            "totalPayout": self.total_payout,
        }
