from __future__ import annotations

from datetime import date, timedelta

from src.timeclock.timeclock.attendance.model import DailyAttendanceRecord
from src.timeclock.timeclock.core.enums import AttendanceStatus
from src.timeclock.timeclock.reports.summarizer import AggregationSummarizer

START = date(2025, 12, 1)


def _rec(offset, status, worked=0, *, late=False, early=False, overtime=0):
    return DailyAttendanceRecord(
        employee_id=5,
        date=START + timedelta(days=offset),
        day_code="Mon",
        status=status,
        total_hours=worked // 60,
        total_minutes=worked % 60,
        is_late=late,
        is_early_out=early,
        overtime_minutes=overtime,
    )


def test_totals_and_average_over_present_days():
    records = [
        _rec(0, AttendanceStatus.PRESENT, 8 * 60 + 30, late=True),
        _rec(1, AttendanceStatus.PRESENT, 9 * 60, early=True, overtime=0),
        _rec(2, AttendanceStatus.ABSENT),
        _rec(3, AttendanceStatus.INCOMPLETE, 120),
        _rec(4, AttendanceStatus.COMP),
    ]

    s = AggregationSummarizer().summarize(5, records, user_name="ALICE")

    assert s.total_days == 5
    assert (s.present_days, s.absent_days, s.incomplete_days, s.comp_days) == (2, 1, 1, 1)
    assert (s.total_working_hours, s.total_working_minutes) == (17, 30)
    assert s.average_hours_per_day == 8.75
    assert (s.late_days, s.early_out_days) == (1, 1)
    assert s.to_dict()["userName"] == "ALICE"


def test_only_present_days_count_towards_flags_and_overtime():
    records = [
        _rec(0, AttendanceStatus.PRESENT, 600, overtime=60),
        _rec(1, AttendanceStatus.INCOMPLETE, 600, late=True, overtime=60),
    ]

    s = AggregationSummarizer().summarize(5, records)

    assert s.overtime_minutes == 60
    assert s.late_days == 0
    assert s.total_working_hours == 10


def test_average_is_rounded_to_two_decimals():
    records = [_rec(i, AttendanceStatus.PRESENT, w) for i, w in enumerate((500, 500, 1))]

    assert AggregationSummarizer().summarize(5, records).average_hours_per_day == 5.56


def test_no_present_days_gives_zero_average():
    records = [_rec(0, AttendanceStatus.ABSENT), _rec(1, AttendanceStatus.INCOMPLETE)]

    s = AggregationSummarizer().summarize(5, records)

    assert s.average_hours_per_day == 0
    assert (s.total_working_hours, s.total_working_minutes) == (0, 0)


def test_empty_record_list():
    s = AggregationSummarizer().summarize(5, [])

    assert s.total_days == 0
    assert s.daily_records == ()
    assert "userName" not in s.to_dict()
