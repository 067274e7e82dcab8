from __future__ import annotations

from dataclasses import replace
from typing import Callable, Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveFilter, LeaveRequest
from .repository import LeaveRequestRepository

_COLUMNS = """
    leave_request_id, employee_id, leave_type, start_date, end_date, days_requested,
    status, reason, manager_comments, reviewed_at, created_at, updated_at
"""


def _row_to_request(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_request_id=int(r["leave_request_id"]),
        employee_id=int(r["employee_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        days_requested=int(r["days_requested"]),
        status=LeaveStatus(r["status"]),
        reason=r.get("reason"),
        manager_comments=r.get("manager_comments"),
        reviewed_at=r.get("reviewed_at"),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


class MySQLLeaveRequestRepository(LeaveRequestRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def add(self, request: LeaveRequest) -> LeaveRequest:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(
                    employee_id, leave_type, start_date, end_date, days_requested,
                    status, reason, created_at, updated_at
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(request.employee_id),
                    request.leave_type.value,
                    request.start_date,
                    request.end_date,
                    int(request.days_requested),
                    request.status.value,
                    request.reason,
                    request.created_at,
                    request.updated_at,
                ),
            )
            return replace(request, leave_request_id=int(cur.lastrowid))

    def update(self, request: LeaveRequest) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, manager_comments=%s, reviewed_at=%s, updated_at=%s
                WHERE leave_request_id=%s
                """,
                (
                    request.status.value,
                    request.manager_comments,
                    request.reviewed_at,
                    request.updated_at,
                    int(request.leave_request_id),
                ),
            )
            return cur.rowcount > 0

    def get_by_id(self, leave_request_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_request_id=%s",
                (int(leave_request_id),),
            )
            r = fetchone(cur)
            return _row_to_request(r) if r else None

    def find(self, predicate: Callable[[LeaveRequest], bool]) -> Sequence[LeaveRequest]:
        if not isinstance(predicate, LeaveFilter):
            return [r for r in self._select("1=1", ()) if predicate(r)]

        clauses = ["1=1"]
        params: list[object] = []

        if predicate.employee_id is not None:
            clauses.append("employee_id=%s")
            params.append(int(predicate.employee_id))
        if predicate.status is not None:
            clauses.append("status=%s")
            params.append(predicate.status.value)
        if predicate.start_year is not None:
            clauses.append("YEAR(start_date)=%s")
            params.append(int(predicate.start_year))

        return self._select(" AND ".join(clauses), tuple(params))

    def get_by_employee(self, employee_id: int) -> Sequence[LeaveRequest]:
        return self._select("employee_id=%s", (int(employee_id),))

    def _select(self, where: str, params: tuple) -> list[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY start_date ASC, leave_request_id ASC
                """,
                params,
            )
            return [_row_to_request(r) for r in fetchall(cur)]
