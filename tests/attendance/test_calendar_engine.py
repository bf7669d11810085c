from __future__ import annotations

import random
from datetime import date, datetime, timezone

import pytest

from conftest import IST, ist_punch
from src.timeclock.timeclock.attendance.engine import CalendarAttendanceEngine
from src.timeclock.timeclock.attendance.settings import AttendanceSettings
from src.timeclock.timeclock.core.enums import AttendanceStatus, PunchType
from src.timeclock.timeclock.punches.model import PunchEvent

SETTINGS = AttendanceSettings()


@pytest.fixture
def engine() -> CalendarAttendanceEngine:
    return CalendarAttendanceEngine(tz=IST)


def _day(records, day):
    return next(r for r in records if r.date == day)


def test_full_day_is_present_and_month_is_filled(engine):
    punches = [
        ist_punch(5, "2025-12-01 09:00:00"),
        ist_punch(5, "2025-12-01 13:00:00"),
        ist_punch(5, "2025-12-01 14:00:00"),
        ist_punch(5, "2025-12-01 18:30:00"),
    ]

    records = engine.build_calendar(5, punches, SETTINGS)

    assert len(records) == 31
    assert records[0].date == date(2025, 12, 1)
    assert records[-1].date == date(2025, 12, 31)

    first = records[0]
    assert first.status == AttendanceStatus.PRESENT
    assert first.day_code == "Mon"
    assert (first.first_in, first.last_out) == ("09:00:00", "18:30:00")
    assert (first.total_hours, first.total_minutes) == (8, 30)
    assert not first.is_late
    assert not first.is_early_out
    assert first.overtime_minutes == 0
    assert [p.type for p in first.punches] == [PunchType.IN, PunchType.OUT, PunchType.IN, PunchType.OUT]
    assert all(p.is_paired for p in first.punches)

    assert all(r.status == AttendanceStatus.ABSENT for r in records[1:])


def test_single_punch_is_incomplete(engine):
    records = engine.build_calendar(5, [ist_punch(5, "2025-12-02 09:05:00")], SETTINGS)

    day = _day(records, date(2025, 12, 2))
    assert day.status == AttendanceStatus.INCOMPLETE
    assert day.first_in == "09:05:00"
    assert day.last_out is None
    assert (day.total_hours, day.total_minutes) == (0, 0)
    assert [(p.type, p.is_paired) for p in day.punches] == [(PunchType.IN, False)]
    assert not day.is_late
    assert day.overtime_minutes == 0


def test_day_without_punches_is_absent(engine):
    records = engine.build_calendar(5, [ist_punch(5, "2025-12-02 09:00:00")], SETTINGS)

    day = _day(records, date(2025, 12, 3))
    assert day.status == AttendanceStatus.ABSENT
    assert day.first_in is None
    assert day.last_out is None
    assert day.punches == ()
    assert day.day_code == "Wed"


def test_calendar_spans_whole_months_without_gaps(engine):
    punches = [ist_punch(5, "2025-10-15 09:00:00"), ist_punch(5, "2025-12-20 09:00:00")]

    records = engine.build_calendar(5, punches, SETTINGS)

    assert len(records) == 31 + 30 + 31
    assert records[0].date == date(2025, 10, 1)
    assert records[-1].date == date(2025, 12, 31)
    dates = [r.date for r in records]
    assert dates == sorted(set(dates))


def test_no_punches_gives_empty_calendar(engine):
    assert engine.build_calendar(5, [], SETTINGS) == []


def test_utc_instant_is_grouped_by_civil_date(engine):
    punch = PunchEvent(employee_id=5, timestamp=datetime(2025, 11, 30, 18, 40, tzinfo=timezone.utc))

    records = engine.build_calendar(5, [punch], SETTINGS)

    assert records[0].date == date(2025, 12, 1)
    assert records[0].first_in == "00:10:00"
    assert len(records) == 31


def test_input_order_does_not_matter(engine):
    punches = [
        ist_punch(5, "2025-12-01 09:00:00"),
        ist_punch(5, "2025-12-01 12:00:00"),
        ist_punch(5, "2025-12-01 13:00:00"),
        ist_punch(5, "2025-12-01 18:00:00"),
        ist_punch(5, "2025-12-04 10:00:00"),
    ]
    shuffled = list(punches)
    random.Random(7).shuffle(shuffled)

    assert engine.build_calendar(5, shuffled, SETTINGS) == engine.build_calendar(5, punches, SETTINGS)


@pytest.mark.parametrize(
    "first_in, expected",
    [("09:45:00", False), ("09:45:59", False), ("09:46:00", True)],
)
def test_late_flag_uses_grace_window(engine, first_in, expected):
    punches = [ist_punch(5, f"2025-12-01 {first_in}"), ist_punch(5, "2025-12-01 18:30:00")]

    day = engine.build_calendar(5, punches, SETTINGS)[0]

    assert day.is_late is expected


@pytest.mark.parametrize("last_out, expected", [("18:15:00", False), ("18:14:00", True)])
def test_early_out_flag_uses_grace_window(engine, last_out, expected):
    punches = [ist_punch(5, "2025-12-01 09:30:00"), ist_punch(5, f"2025-12-01 {last_out}")]

    day = engine.build_calendar(5, punches, SETTINGS)[0]

    assert day.is_early_out is expected


def test_overtime_is_worked_time_beyond_shift_length(engine):
    punches = [ist_punch(5, "2025-12-01 09:00:00"), ist_punch(5, "2025-12-01 19:30:00")]

    day = engine.build_calendar(5, punches, SETTINGS)[0]

    assert (day.total_hours, day.total_minutes) == (10, 30)
    assert day.overtime_minutes == 90


def test_custom_settings_change_flags(engine):
    settings = AttendanceSettings.from_mapping({"workStartTime": "08:00", "workEndTime": "16:00", "lateThresholdMinutes": 0})
    punches = [ist_punch(5, "2025-12-01 08:01:00"), ist_punch(5, "2025-12-01 16:30:00")]

    day = engine.build_calendar(5, punches, settings)[0]

    assert day.is_late
    assert day.overtime_minutes == 29


def test_seconds_are_ignored_in_durations(engine):
    punches = [ist_punch(5, "2025-12-01 09:00:59"), ist_punch(5, "2025-12-01 09:01:00")]

    day = engine.build_calendar(5, punches, SETTINGS)[0]

    assert (day.total_hours, day.total_minutes) == (0, 1)


def test_duplicate_punches_are_kept_and_pair_to_zero(engine):
    punches = [ist_punch(5, "2025-12-01 09:00:00"), ist_punch(5, "2025-12-01 09:00:00")]

    day = engine.build_calendar(5, punches, SETTINGS)[0]

    assert day.status == AttendanceStatus.PRESENT
    assert len(day.punches) == 2
    assert (day.total_hours, day.total_minutes) == (0, 0)


def test_three_punches_pair_the_first_two(engine):
    punches = [
        ist_punch(5, "2025-12-01 09:00:00"),
        ist_punch(5, "2025-12-01 12:00:00"),
        ist_punch(5, "2025-12-01 13:00:00"),
    ]

    day = engine.build_calendar(5, punches, SETTINGS)[0]

    assert day.status == AttendanceStatus.INCOMPLETE
    assert (day.total_hours, day.total_minutes) == (3, 0)
    assert day.last_out == "13:00:00"
    assert [p.is_paired for p in day.punches] == [True, True, False]
    assert not day.is_early_out


def test_comp_date_overrides_punches(engine):
    punches = [ist_punch(5, "2025-12-01 09:00:00"), ist_punch(5, "2025-12-01 18:30:00")]

    records = engine.build_calendar(5, punches, SETTINGS, comp_dates={date(2025, 12, 1), date(2025, 12, 2)})

    for day in records[:2]:
        assert day.status == AttendanceStatus.COMP
        assert day.punches == ()
        assert day.first_in is None
        assert day.worked_minutes == 0
    assert records[2].status == AttendanceStatus.ABSENT


def test_build_range_ignores_punches_outside(engine):
    punches = [ist_punch(5, "2025-11-30 09:00:00"), ist_punch(5, "2025-12-01 09:00:00")]

    records = engine.build_range(5, punches, SETTINGS, start=date(2025, 12, 1), end=date(2025, 12, 3))

    assert [r.date for r in records] == [date(2025, 12, 1), date(2025, 12, 2), date(2025, 12, 3)]
    assert records[0].status == AttendanceStatus.INCOMPLETE


def test_manual_punch_is_labelled(engine):
    punches = [ist_punch(5, "2025-12-01 09:00:00", edited=True), ist_punch(5, "2025-12-01 18:00:00", verify=15)]

    day = engine.build_calendar(5, punches, SETTINGS)[0]

    assert [p.verification_label for p in day.punches] == ["Manual", "Face"]
    assert day.punches[0].is_edited
    assert day.to_dict()["punches"][0]["verificationType"] == "Manual"


def test_record_to_dict_shape(engine):
    punches = [ist_punch(5, "2025-12-01 09:00:00"), ist_punch(5, "2025-12-01 19:30:00")]

    data = engine.build_calendar(5, punches, SETTINGS)[0].to_dict()

    assert data["userId"] == 5
    assert data["date"] == "2025-12-01"
    assert data["status"] == "PRESENT"
    assert data["overtime"] == 90
    assert data["punches"][1] == {
        "time": "19:30:00",
        "type": "OUT",
        "verificationType": "Fingerprint",
        "isPaired": True,
        "isEdited": False,
    }
