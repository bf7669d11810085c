from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, datetime, time, timedelta
from typing import Any, Iterable, Mapping, Optional, Sequence, Union

from ..common.datetime_utils import civil_date, month_end, month_start, now_utc, parse_iso_date
from ..common.validators import require_hhmm
from ..core.constants import DEFAULT_CIVIL_UTC_OFFSET, PASTED_FILE_NAME
from ..core.enums import AttendanceStatus
from ..core.exceptions import DomainError, IngestionError, NotFoundError, ValidationError
from ..directory.model import Employee
from ..directory.parser import NameDirectoryParser
from ..punches.model import PunchEvent
from ..punches.parser import PunchLineParser, iter_text_lines
from ..reports.model import AttendanceReport, UserAttendanceSummary
from ..reports.summarizer import AggregationSummarizer
from .engine import CalendarAttendanceEngine
from .model import DailyAttendanceRecord
from .repository import AttendanceRepository
from .settings import AttendanceSettings

logger = logging.getLogger(__name__)

SettingsInput = Union[AttendanceSettings, Mapping[str, Any], None]


def _as_date(value: Union[date, str]) -> date:
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value).strip())
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}, expected YYYY-MM-DD")


class AttendanceService:
    """Builds attendance reports from uploads and maintains the persisted store.

    Without a repository only the stateless report operations are
    available (`process_file`, `parse_text`).
    """

    def __init__(
        self,
        repository: Optional[AttendanceRepository] = None,
        *,
        utc_offset: str = DEFAULT_CIVIL_UTC_OFFSET,
        default_settings: Optional[AttendanceSettings] = None,
        punch_parser: Optional[PunchLineParser] = None,
        directory_parser: Optional[NameDirectoryParser] = None,
        engine: Optional[CalendarAttendanceEngine] = None,
        summarizer: Optional[AggregationSummarizer] = None,
    ):
        self._repo = repository
        self._punch_parser = punch_parser or PunchLineParser(utc_offset)
        self._tz = self._punch_parser.tz
        self._directory_parser = directory_parser or NameDirectoryParser()
        self._engine = engine or CalendarAttendanceEngine(tz=self._tz)
        self._summarizer = summarizer or AggregationSummarizer()
        self._default_settings = default_settings or AttendanceSettings()

    def resolve_settings(self, settings: SettingsInput = None) -> AttendanceSettings:
        if isinstance(settings, AttendanceSettings):
            return settings
        return AttendanceSettings.from_mapping(settings, defaults=self._default_settings)

    # ---- stateless reports ----

    def process_file(
        self,
        buffer: bytes,
        file_name: str,
        settings: SettingsInput = None,
        user_file: Optional[bytes] = None,
    ) -> AttendanceReport:
        resolved = self.resolve_settings(settings)

        names: dict[int, str] = {}
        if user_file is not None:
            try:
                names = self._directory_parser.parse(user_file)
            except IngestionError as e:
                logger.warning("Failed to parse user data file: %s", e)

        by_employee: dict[int, list[PunchEvent]] = defaultdict(list)
        total = 0
        first: Optional[datetime] = None
        last: Optional[datetime] = None
        for event in self._punch_parser.iter_events(iter_text_lines(buffer)):
            by_employee[event.employee_id].append(event)
            total += 1
            first = event.timestamp if first is None or event.timestamp < first else first
            last = event.timestamp if last is None or event.timestamp > last else last

        if total == 0:
            raise IngestionError("No valid attendance records found in file")

        users = [
            self.summarize_employee(employee_id, by_employee[employee_id], resolved, user_name=names.get(employee_id))
            for employee_id in sorted(by_employee)
        ]
        logger.info("Processed %d records for %d users from %s", total, len(users), file_name)

        return AttendanceReport(
            file_name=file_name,
            processed_at=now_utc(),
            date_from=civil_date(first, self._tz),
            date_to=civil_date(last, self._tz),
            total_records=total,
            settings=resolved,
            users=users,
        )

    def parse_text(self, text: str, settings: SettingsInput = None) -> AttendanceReport:
        return self.process_file((text or "").encode("utf-8"), PASTED_FILE_NAME, settings)

    def summarize_employee(
        self,
        employee_id: int,
        punches: Sequence[PunchEvent],
        settings: AttendanceSettings,
        *,
        user_name: Optional[str] = None,
    ) -> UserAttendanceSummary:
        records = self._engine.build_calendar(employee_id, punches, settings)
        return self._summarizer.summarize(employee_id, records, user_name=user_name)

    # ---- persisted store ----

    def import_directory(self, buffer: bytes) -> dict:
        names = self._directory_parser.parse(buffer)
        created, updated = self._require_repo().upsert_employee_names(names)
        logger.info("User directory imported: %d created, %d updated", created, updated)
        return {"created": created, "updated": updated}

    def import_punches(self, buffer: bytes) -> dict:
        repo = self._require_repo()
        inserted = 0
        skipped = 0
        known: set[int] = set()
        affected: dict[int, set[date]] = defaultdict(set)

        for line in iter_text_lines(buffer):
            event = self._punch_parser.parse_line(line)
            if event is None:
                skipped += 1
                continue
            if event.employee_id not in known:
                repo.ensure_employee(event.employee_id)
                known.add(event.employee_id)
            if repo.insert_punch(event):
                inserted += 1
                affected[event.employee_id].add(civil_date(event.timestamp, self._tz))
            else:
                skipped += 1

        if not known:
            raise IngestionError("No valid attendance records found in file")

        days = self._recalculate_months(affected)
        logger.info(
            "Attendance uploaded: %d inserted, %d skipped; recalculated %d user-days for %d users",
            inserted,
            skipped,
            days,
            len(affected),
        )
        return {"inserted": inserted, "skipped": skipped}

    def list_employees(self) -> Sequence[Employee]:
        return self._require_repo().list_employees()

    def get_month_report(self, year: int, month: int, settings: SettingsInput = None) -> AttendanceReport:
        repo = self._require_repo()
        resolved = self.resolve_settings(settings)
        try:
            start = date(int(year), int(month), 1)
        except (TypeError, ValueError):
            raise ValidationError(f"Invalid month: {year}-{month}")
        end = month_end(start)

        punches = repo.get_punches(start=self._day_start(start), end=self._day_start(end + timedelta(days=1)))
        comp_dates = repo.get_comp_dates(start_date=start, end_date=end)

        by_employee: dict[int, list[PunchEvent]] = defaultdict(list)
        for p in punches:
            by_employee[p.employee_id].append(p)
        names = {e.biometric_id: e.display_name for e in repo.list_employees()}

        users = []
        for employee_id in sorted(set(by_employee) | set(comp_dates)):
            records = self._engine.build_range(
                employee_id,
                by_employee.get(employee_id, ()),
                resolved,
                start=start,
                end=end,
                comp_dates=comp_dates.get(employee_id, set()),
            )
            user_name = names.get(employee_id, f"Employee {employee_id}")
            users.append(self._summarizer.summarize(employee_id, records, user_name=user_name))

        return AttendanceReport(
            file_name="database",
            processed_at=now_utc(),
            date_from=start,
            date_to=end,
            total_records=len(punches),
            settings=resolved,
            users=users,
        )

    def mark_comp_off(self, employee_id: int, day: Union[date, str]) -> DailyAttendanceRecord:
        """ABSENT -> COMP. Any other current status is rejected."""
        repo = self._require_repo()
        day = _as_date(day)
        self._require_employee(employee_id)

        current = self._compute_day(employee_id, day)
        if current.status != AttendanceStatus.ABSENT:
            raise ValidationError(f"Cannot mark as COMP off: Current status is {current.status.value}")

        record = self._engine.build_day(employee_id, day, (), self._default_settings, is_comp=True)
        repo.save_daily_records([record])
        logger.info("Marked COMP off for user %d on %s", employee_id, day)
        return record

    def clear_comp_off(self, employee_id: int, day: Union[date, str]) -> DailyAttendanceRecord:
        repo = self._require_repo()
        day = _as_date(day)
        self._require_employee(employee_id)

        stored = repo.get_stored_day(employee_id=employee_id, work_date=day)
        if not stored or stored.status != AttendanceStatus.COMP:
            raise ValidationError(f"Day {day} is not marked as COMP off")

        record = self._compute_day(employee_id, day, keep_comp=False)
        repo.save_daily_records([record])
        logger.info("Cleared COMP off for user %d on %s", employee_id, day)
        return record

    def add_punch(
        self,
        employee_id: int,
        day: Union[date, str],
        time_of_day: str,
        *,
        manual: bool = True,
    ) -> DailyAttendanceRecord:
        repo = self._require_repo()
        day = _as_date(day)
        hhmm = require_hhmm(time_of_day, "time")
        self._require_employee(employee_id)

        hours, minutes = (int(x) for x in hhmm.split(":"))
        punch = PunchEvent(
            employee_id=employee_id,
            timestamp=datetime.combine(day, time(hours, minutes), tzinfo=self._tz),
            is_edited=manual,
        )
        if not repo.insert_punch(punch):
            raise ValidationError(f"A punch already exists at {hhmm} on {day}")

        logger.info("Added punch for user %d at %s on %s (manual=%s)", employee_id, hhmm, day, manual)
        return self.recalculate_day(employee_id, day)

    def delete_punch(self, employee_id: int, punch_time: Union[datetime, str]) -> DailyAttendanceRecord:
        repo = self._require_repo()
        instant = self._as_instant(punch_time)
        self._require_employee(employee_id)

        if not repo.delete_punch(employee_id=employee_id, punch_time=instant):
            raise NotFoundError("Punch not found")

        logger.info("Deleted punch for user %d at %s", employee_id, instant.isoformat())
        return self.recalculate_day(employee_id, civil_date(instant, self._tz))

    def recalculate_day(self, employee_id: int, day: date) -> DailyAttendanceRecord:
        record = self._compute_day(employee_id, day)
        self._require_repo().save_daily_records([record])
        return record

    # ---- helpers ----

    def _require_repo(self) -> AttendanceRepository:
        if self._repo is None:
            raise DomainError("Attendance store is not configured")
        return self._repo

    def _require_employee(self, employee_id: int) -> Employee:
        employee = self._require_repo().get_employee(employee_id)
        if not employee:
            raise NotFoundError(f"Employee with ID {employee_id} not found")
        return employee

    def _day_start(self, day: date) -> datetime:
        return datetime.combine(day, time.min, tzinfo=self._tz)

    def _as_instant(self, value: Union[datetime, str]) -> datetime:
        if isinstance(value, datetime):
            instant = value
        else:
            try:
                instant = datetime.fromisoformat(str(value).strip().replace("Z", "+00:00"))
            except ValueError:
                raise ValidationError("Invalid punch time format")
        if instant.tzinfo is None:
            instant = instant.replace(tzinfo=self._tz)
        return instant

    def _compute_day(self, employee_id: int, day: date, *, keep_comp: bool = True) -> DailyAttendanceRecord:
        # COMP survives recomputation until it is explicitly cleared.
        repo = self._require_repo()
        punches = repo.get_punches(
            start=self._day_start(day),
            end=self._day_start(day + timedelta(days=1)),
            employee_id=employee_id,
        )
        is_comp = False
        if keep_comp:
            comps = repo.get_comp_dates(start_date=day, end_date=day, employee_id=employee_id)
            is_comp = day in comps.get(employee_id, set())
        return self._engine.build_day(employee_id, day, punches, self._default_settings, is_comp=is_comp)

    def _recalculate_months(self, affected: Mapping[int, Iterable[date]]) -> int:
        repo = self._require_repo()
        total_days = 0
        for employee_id, days in affected.items():
            months = sorted({month_start(d) for d in days})
            for first in months:
                last = month_end(first)
                punches = repo.get_punches(
                    start=self._day_start(first),
                    end=self._day_start(last + timedelta(days=1)),
                    employee_id=employee_id,
                )
                comps = repo.get_comp_dates(start_date=first, end_date=last, employee_id=employee_id)
                records = self._engine.build_range(
                    employee_id,
                    punches,
                    self._default_settings,
                    start=first,
                    end=last,
                    comp_dates=comps.get(employee_id, set()),
                )
                repo.save_daily_records(records)
                total_days += len(records)
        return total_days
