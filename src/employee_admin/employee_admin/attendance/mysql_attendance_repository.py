from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional, Sequence

from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from ..common.datetime_utils import format_clock
from ..core.exceptions import DuplicateRecord
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, normalize_decimal, normalize_mysql_time
from .model import AttendanceFilter, AttendanceRecord
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, work_date, clock_in, clock_out, break_duration,
    worked_hours, overtime_hours, notes, created_at, updated_at
"""


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        work_date=r["work_date"],
        clock_in=normalize_mysql_time(r.get("clock_in")),
        clock_out=normalize_mysql_time(r.get("clock_out")),
        break_duration=normalize_mysql_time(r.get("break_duration")),
        worked_hours=normalize_decimal(r.get("worked_hours")),
        overtime_hours=normalize_decimal(r.get("overtime_hours")),
        notes=r.get("notes"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    """MySQL adapter. The ``uq_attendance_employee_day`` unique key backs the
    one-record-per-day rule across processes."""

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        employee_id, work_date, clock_in, clock_out, break_duration,
                        worked_hours, overtime_hours, notes, created_at, updated_at
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        int(record.employee_id),
                        record.work_date,
                        format_clock(record.clock_in),
                        format_clock(record.clock_out),
                        format_clock(record.break_duration),
                        record.worked_hours,
                        record.overtime_hours,
                        record.notes,
                        record.created_at,
                        record.updated_at,
                    ),
                )
                return replace(record, attendance_id=int(cur.lastrowid))
        except IntegrityError as exc:
            if exc.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateRecord(record.employee_id, record.work_date) from exc
            raise

    def update(self, record: AttendanceRecord) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE attendance_records
                SET clock_in=%s, clock_out=%s, break_duration=%s,
                    worked_hours=%s, overtime_hours=%s, notes=%s, updated_at=%s
                WHERE attendance_id=%s
                """,
                (
                    format_clock(record.clock_in),
                    format_clock(record.clock_out),
                    format_clock(record.break_duration),
                    record.worked_hours,
                    record.overtime_hours,
                    record.notes,
                    record.updated_at,
                    int(record.attendance_id),
                ),
            )
            return cur.rowcount > 0

    def get_by_id(self, attendance_id: int) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance_records WHERE attendance_id=%s",
                (int(attendance_id),),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def find(self, predicate: Callable[[AttendanceRecord], bool]) -> Sequence[AttendanceRecord]:
        if not isinstance(predicate, AttendanceFilter):
            # Arbitrary callables cannot be pushed down; filter in Python.
            return [r for r in self._select("1=1", ()) if predicate(r)]

        clauses = ["1=1"]
        params: list[object] = []

        if predicate.employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(predicate.employee_id))
        if predicate.work_date is not None:
            clauses.append("work_date=%s")
            params.append(predicate.work_date)
        if predicate.date_from is not None:
            clauses.append("work_date>=%s")
            params.append(predicate.date_from)
        if predicate.date_to is not None:
            clauses.append("work_date<=%s")
            params.append(predicate.date_to)

        return self._select(" AND ".join(clauses), tuple(params))

    def get_by_employee(self, employee_id: int) -> Sequence[AttendanceRecord]:
        return self._select("employee_id=%s", (int(employee_id),))

    def _select(self, where: str, params: tuple) -> list[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE {where}
                ORDER BY work_date ASC, attendance_id ASC
                """,
                params,
            )
            return [_row_to_record(r) for r in fetchall(cur)]
