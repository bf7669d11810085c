from __future__ import annotations

from datetime import date, datetime
from typing import Mapping, Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import (
    db_cursor,
    fetchall,
    fetchone,
    from_db_datetime,
    normalize_mysql_date,
    normalize_mysql_time,
    to_db_datetime,
)
from ..directory.model import Employee
from ..punches.model import PunchEvent
from .model import DailyAttendanceRecord
from .repository import AttendanceRepository, StoredDay


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_employees(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT biometric_id, name FROM employees ORDER BY biometric_id")
            return [Employee(biometric_id=int(r["biometric_id"]), name=r.get("name")) for r in fetchall(cur)]

    def get_employee(self, biometric_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT biometric_id, name FROM employees WHERE biometric_id=%s", (int(biometric_id),))
            r = fetchone(cur)
            if not r:
                return None
            return Employee(biometric_id=int(r["biometric_id"]), name=r.get("name"))

    def upsert_employee_names(self, names: Mapping[int, str]) -> tuple[int, int]:
        created = 0
        updated = 0
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT biometric_id, name FROM employees")
            existing = {int(r["biometric_id"]): r.get("name") for r in fetchall(cur)}
            for biometric_id, name in names.items():
                if biometric_id not in existing:
                    cur.execute("INSERT INTO employees(biometric_id, name) VALUES(%s,%s)", (biometric_id, name))
                    created += 1
                elif existing[biometric_id] != name:
                    cur.execute("UPDATE employees SET name=%s WHERE biometric_id=%s", (name, biometric_id))
                    updated += 1
        return created, updated

    def ensure_employee(self, biometric_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT IGNORE INTO employees(biometric_id, name) VALUES(%s, NULL)", (int(biometric_id),))
            return cur.rowcount > 0

    def insert_punch(self, punch: PunchEvent) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT IGNORE INTO punches(employee_id, punch_time, verification_method, in_out_flag, work_code, is_edited)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (
                    punch.employee_id,
                    to_db_datetime(punch.timestamp),
                    punch.verification_method,
                    punch.in_out_flag,
                    punch.work_code,
                    int(punch.is_edited),
                ),
            )
            return cur.rowcount > 0

    def delete_punch(self, *, employee_id: int, punch_time: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM punches WHERE employee_id=%s AND punch_time=%s",
                (int(employee_id), to_db_datetime(punch_time)),
            )
            return cur.rowcount > 0

    def get_punches(
        self,
        *,
        start: datetime,
        end: datetime,
        employee_id: Optional[int] = None,
    ) -> Sequence[PunchEvent]:
        sql = """
            SELECT employee_id, punch_time, verification_method, in_out_flag, work_code, is_edited
            FROM punches
            WHERE punch_time >= %s AND punch_time < %s
        """
        params: list = [to_db_datetime(start), to_db_datetime(end)]
        if employee_id is not None:
            sql += " AND employee_id=%s"
            params.append(int(employee_id))
        sql += " ORDER BY employee_id, punch_time"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            return [
                PunchEvent(
                    employee_id=int(r["employee_id"]),
                    timestamp=from_db_datetime(r["punch_time"]),
                    verification_method=int(r["verification_method"]),
                    in_out_flag=int(r["in_out_flag"]),
                    work_code=int(r["work_code"]),
                    is_edited=bool(r["is_edited"]),
                )
                for r in fetchall(cur)
            ]

    def get_comp_dates(
        self,
        *,
        start_date: date,
        end_date: date,
        employee_id: Optional[int] = None,
    ) -> Mapping[int, set[date]]:
        sql = "SELECT employee_id, work_date FROM daily_attendance WHERE status=%s AND work_date BETWEEN %s AND %s"
        params: list = [AttendanceStatus.COMP.value, start_date, end_date]
        if employee_id is not None:
            sql += " AND employee_id=%s"
            params.append(int(employee_id))

        result: dict[int, set[date]] = {}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            for r in fetchall(cur):
                result.setdefault(int(r["employee_id"]), set()).add(normalize_mysql_date(r["work_date"]))
        return result

    def get_stored_day(self, *, employee_id: int, work_date: date) -> Optional[StoredDay]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT employee_id, work_date, status, first_in, last_out, total_minutes, punch_count
                FROM daily_attendance
                WHERE employee_id=%s AND work_date=%s
                """,
                (int(employee_id), work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return StoredDay(
                employee_id=int(r["employee_id"]),
                work_date=normalize_mysql_date(r["work_date"]),
                status=AttendanceStatus(r["status"]),
                first_in=normalize_mysql_time(r.get("first_in")),
                last_out=normalize_mysql_time(r.get("last_out")),
                total_minutes=int(r["total_minutes"]),
                punch_count=int(r["punch_count"]),
            )

    def save_daily_records(self, records: Sequence[DailyAttendanceRecord]) -> None:
        if not records:
            return
        with db_cursor(self._conn_factory) as (_, cur):
            cur.executemany(
                """
                INSERT INTO daily_attendance(
                    employee_id, work_date, day_code, status, first_in, last_out, total_minutes, punch_count
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    day_code=VALUES(day_code),
                    status=VALUES(status),
                    first_in=VALUES(first_in),
                    last_out=VALUES(last_out),
                    total_minutes=VALUES(total_minutes),
                    punch_count=VALUES(punch_count)
                """,
                [
                    (
                        r.employee_id,
                        r.date,
                        r.day_code,
                        r.status.value,
                        r.first_in,
                        r.last_out,
                        r.worked_minutes,
                        len(r.punches),
                    )
                    for r in records
                ],
            )
