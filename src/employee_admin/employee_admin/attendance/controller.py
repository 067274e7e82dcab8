from __future__ import annotations

from flask import Flask, abort, jsonify, request

from ..common.payload import clock_field, date_field, datetime_field, int_field, json_object, text_field
from ..container import Container
from .model import ClockEvent, NewAttendance


def register(app: Flask, container: Container) -> None:
    service = container.attendance_service

    def _body() -> dict:
        return json_object(request.get_json(silent=True))

    def _clock_event() -> ClockEvent:
        body = _body()
        return ClockEvent(
            employee_id=int_field(body, "employee_id"),
            timestamp=datetime_field(body, "timestamp"),
            notes=text_field(body, "notes"),
            break_duration=clock_field(body, "break_duration"),
        )

    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    def clock_in():
        view = service.clock_in(_clock_event())
        return jsonify(view.to_dict()), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    def clock_out():
        view = service.clock_out(_clock_event())
        return jsonify(view.to_dict()), 200

    @app.route("/api/attendance", methods=["POST"], endpoint="attendance_create")
    def create_attendance():
        body = _body()
        view = service.create_attendance(
            NewAttendance(
                employee_id=int_field(body, "employee_id"),
                work_date=date_field(body, "date"),
                clock_in=clock_field(body, "clock_in"),
                clock_out=clock_field(body, "clock_out"),
                break_duration=clock_field(body, "break_duration"),
                notes=text_field(body, "notes"),
            )
        )
        return jsonify(view.to_dict()), 201

    @app.route("/api/attendance/<int:attendance_id>", methods=["GET"], endpoint="attendance_get")
    def get_attendance(attendance_id: int):
        view = service.get_by_id(attendance_id)
        if view is None:
            abort(404, description=f"Attendance {attendance_id} not found")
        return jsonify(view.to_dict())

    @app.route("/api/attendance/employee/<int:employee_id>", methods=["GET"], endpoint="attendance_by_employee")
    def list_for_employee(employee_id: int):
        args = request.args.to_dict()
        views = service.list_for_employee(
            employee_id,
            start=date_field(args, "start", required=False),
            end=date_field(args, "end", required=False),
        )
        return jsonify([v.to_dict() for v in views])

    @app.route("/api/attendance/date/<work_date>", methods=["GET"], endpoint="attendance_by_date")
    def list_for_date(work_date: str):
        day = date_field({"date": work_date}, "date")
        return jsonify([v.to_dict() for v in service.list_for_date(day)])

    @app.route("/api/attendance/<int:employee_id>/today", methods=["GET"], endpoint="attendance_today")
    def get_today(employee_id: int):
        view = service.get_today(employee_id)
        if view is None:
            abort(404, description=f"No attendance today for employee {employee_id}")
        return jsonify(view.to_dict())

    @app.route("/api/attendance/<int:employee_id>/monthly-hours", methods=["GET"], endpoint="attendance_monthly_hours")
    def monthly_hours(employee_id: int):
        args = request.args.to_dict()
        year = int_field(args, "year")
        month = int_field(args, "month")
        hours = service.monthly_worked_hours(employee_id, year, month)
        return jsonify({"employee_id": employee_id, "year": year, "month": month, "hours": float(hours)})
