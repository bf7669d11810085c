"""Calendar attendance derivation.

Turns the unordered punches of one employee into one record per calendar
day, covering whole months from the month of the first punch through the
month of the last one. Days without punches are materialized as ABSENT.

Pairing: after sorting a day's punches, even positions are IN and odd
positions are OUT. Worked time is the sum of the (IN, OUT) pairs; an odd
trailing punch is unpaired and adds nothing.
"""

from __future__ import annotations

from collections import defaultdict
from datetime import date, tzinfo
from typing import AbstractSet, Iterable, Optional, Sequence

from ..common.datetime_utils import (
    civil_date,
    day_code,
    format_time,
    iter_dates,
    month_end,
    month_start,
    parse_utc_offset,
    time_to_minutes,
)
from ..core.constants import DEFAULT_CIVIL_UTC_OFFSET
from ..core.enums import PunchType
from ..punches.model import PunchEvent
from .factory import DayStatusStrategyFactory
from .model import DailyAttendanceRecord, PunchView
from .settings import AttendanceSettings


class CalendarAttendanceEngine:
    def __init__(
        self,
        *,
        tz: Optional[tzinfo] = None,
        strategy_factory: Optional[DayStatusStrategyFactory] = None,
    ):
        self._tz = tz or parse_utc_offset(DEFAULT_CIVIL_UTC_OFFSET)
        self._factory = strategy_factory or DayStatusStrategyFactory()

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def group_by_date(self, punches: Iterable[PunchEvent]) -> dict[date, list[PunchEvent]]:
        by_date: dict[date, list[PunchEvent]] = defaultdict(list)
        for punch in punches:
            by_date[civil_date(punch.timestamp, self._tz)].append(punch)
        return dict(by_date)

    def build_calendar(
        self,
        employee_id: int,
        punches: Iterable[PunchEvent],
        settings: AttendanceSettings,
        *,
        comp_dates: AbstractSet[date] = frozenset(),
    ) -> list[DailyAttendanceRecord]:
        """Whole-month calendar spanning every observed punch."""
        by_date = self.group_by_date(punches)
        if not by_date:
            return []
        start = month_start(min(by_date))
        end = month_end(max(by_date))
        return self._build(employee_id, by_date, settings, start=start, end=end, comp_dates=comp_dates)

    def build_range(
        self,
        employee_id: int,
        punches: Iterable[PunchEvent],
        settings: AttendanceSettings,
        *,
        start: date,
        end: date,
        comp_dates: AbstractSet[date] = frozenset(),
    ) -> list[DailyAttendanceRecord]:
        """Calendar for an explicit date range; punches outside it are ignored."""
        by_date = self.group_by_date(punches)
        return self._build(employee_id, by_date, settings, start=start, end=end, comp_dates=comp_dates)

    def build_day(
        self,
        employee_id: int,
        day: date,
        punches: Sequence[PunchEvent],
        settings: AttendanceSettings,
        *,
        is_comp: bool = False,
    ) -> DailyAttendanceRecord:
        if is_comp:
            # COMP zeroes the day whatever punches are on file.
            punches = ()
        ordered = sorted(punches, key=PunchEvent.sort_key)
        count = len(ordered)
        times = [format_time(p.timestamp, self._tz) for p in ordered]

        views = tuple(
            PunchView(
                time=times[i],
                type=PunchType.IN if i % 2 == 0 else PunchType.OUT,
                verification_label=p.verification_label,
                is_paired=(i % 2 == 1) or (i + 1 < count),
                is_edited=p.is_edited,
            )
            for i, p in enumerate(ordered)
        )

        worked = 0
        for i in range(0, count - 1, 2):
            worked += max(0, time_to_minutes(times[i + 1]) - time_to_minutes(times[i]))

        first_in = times[0] if count > 0 else None
        last_out = times[-1] if count > 1 else None

        strategy = self._factory.for_day(punch_count=count, is_comp=is_comp)
        decision = strategy.decide(first_in=first_in, last_out=last_out, worked_minutes=worked, settings=settings)

        return DailyAttendanceRecord(
            employee_id=employee_id,
            date=day,
            day_code=day_code(day),
            status=decision.status,
            first_in=first_in,
            last_out=last_out,
            total_hours=worked // 60,
            total_minutes=worked % 60,
            punches=views,
            is_late=decision.is_late,
            is_early_out=decision.is_early_out,
            overtime_minutes=decision.overtime_minutes,
        )

    def _build(
        self,
        employee_id: int,
        by_date: dict[date, list[PunchEvent]],
        settings: AttendanceSettings,
        *,
        start: date,
        end: date,
        comp_dates: AbstractSet[date],
    ) -> list[DailyAttendanceRecord]:
        return [
            self.build_day(
                employee_id,
                day,
                by_date.get(day, ()),
                settings,
                is_comp=day in comp_dates,
            )
            for day in iter_dates(start, end)
        ]
