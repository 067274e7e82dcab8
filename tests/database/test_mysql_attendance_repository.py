from __future__ import annotations

from datetime import date, time, timedelta
from decimal import Decimal

import pytest
from mysql.connector import errorcode
from mysql.connector.errors import IntegrityError

from src.employee_admin.employee_admin.attendance.model import AttendanceFilter, AttendanceRecord
from src.employee_admin.employee_admin.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.employee_admin.employee_admin.core.exceptions import DuplicateRecord
from src.employee_admin.employee_admin.database.mysql_base import normalize_mysql_time


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.lastrowid = 41
        self.rowcount = 1

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.fail_with is not None:
            raise self._conn.fail_with

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, rows=(), fail_with=None):
        self.rows = list(rows)
        self.fail_with = fail_with
        self.executed = []
        self.committed = False
        self.rolled_back = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        pass


class FakeConnectionFactory:
    def __init__(self, conn: FakeConnection):
        self._conn = conn

    def connect(self, *, database: bool = True):
        return self._conn


def test_add_assigns_generated_id_and_formats_times():
    conn = FakeConnection()
    repo = MySQLAttendanceRepository(FakeConnectionFactory(conn))

    saved = repo.add(AttendanceRecord(None, 7, date(2026, 1, 5), clock_in=timedelta(hours=9)))

    assert saved.attendance_id == 41
    sql, params = conn.executed[0]
    assert sql.startswith("INSERT INTO attendance_records")
    assert params[:3] == (7, date(2026, 1, 5), "09:00:00")
    assert conn.committed


def test_unique_key_violation_becomes_duplicate_record():
    dup = IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)
    conn = FakeConnection(fail_with=dup)
    repo = MySQLAttendanceRepository(FakeConnectionFactory(conn))

    with pytest.raises(DuplicateRecord):
        repo.add(AttendanceRecord(None, 7, date(2026, 1, 5)))

    assert conn.rolled_back


def test_filter_is_pushed_into_where_clause():
    conn = FakeConnection(
        rows=[
            {
                "attendance_id": 3,
                "employee_id": 7,
                "work_date": date(2026, 1, 5),
                "clock_in": timedelta(hours=9),
                "clock_out": "17:30:00",
                "break_duration": time(0, 30),
                "worked_hours": Decimal("8.0000"),
                "overtime_hours": 0,
                "notes": None,
            }
        ]
    )
    repo = MySQLAttendanceRepository(FakeConnectionFactory(conn))

    rows = repo.find(AttendanceFilter(employee_id=7, date_from=date(2026, 1, 1), date_to=date(2026, 1, 31)))

    sql, params = conn.executed[0]
    assert "WHERE 1=1 AND employee_id=%s AND work_date>=%s AND work_date<=%s" in sql
    assert params == (7, date(2026, 1, 1), date(2026, 1, 31))
    assert rows[0].clock_out == timedelta(hours=17, minutes=30)
    assert rows[0].break_duration == timedelta(minutes=30)
    assert rows[0].overtime_hours == Decimal("0")


def test_normalize_negative_time_string():
    assert normalize_mysql_time("-01:30:00") == -timedelta(hours=1, minutes=30)
    assert normalize_mysql_time(None) is None
