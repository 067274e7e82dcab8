from __future__ import annotations

from flask import Flask, abort, jsonify, request

from ..common.payload import date_field, enum_field, int_field, json_object, text_field
from ..container import Container
from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveDecision, NewLeaveRequest


def register(app: Flask, container: Container) -> None:
    service = container.leave_service

    def _body() -> dict:
        return json_object(request.get_json(silent=True))

    @app.route("/api/leave/request", methods=["POST"], endpoint="leave_request_create")
    def request_leave():
        body = _body()
        view = service.create(
            NewLeaveRequest(
                employee_id=int_field(body, "employee_id"),
                leave_type=enum_field(body, "leave_type", LeaveType.parse),
                start_date=date_field(body, "start_date"),
                end_date=date_field(body, "end_date"),
                reason=text_field(body, "reason"),
            )
        )
        return jsonify(view.to_dict()), 201

    @app.route("/api/leave/<int:leave_request_id>", methods=["GET"], endpoint="leave_request_get")
    def get_leave(leave_request_id: int):
        view = service.get_by_id(leave_request_id)
        if view is None:
            abort(404, description=f"Leave request {leave_request_id} not found")
        return jsonify(view.to_dict())

    @app.route("/api/leave/employee/<int:employee_id>", methods=["GET"], endpoint="leave_by_employee")
    def list_for_employee(employee_id: int):
        return jsonify([v.to_dict() for v in service.list_for_employee(employee_id)])

    @app.route("/api/leave/status/<status>", methods=["GET"], endpoint="leave_by_status")
    def list_by_status(status: str):
        parsed = enum_field({"status": status}, "status", LeaveStatus.parse)
        return jsonify([v.to_dict() for v in service.list_by_status(parsed)])

    @app.route("/api/leave/pending", methods=["GET"], endpoint="leave_pending")
    def list_pending():
        return jsonify([v.to_dict() for v in service.list_pending()])

    @app.route("/api/leave/<int:leave_request_id>/status", methods=["PUT"], endpoint="leave_update_status")
    def update_status(leave_request_id: int):
        body = _body()
        view = service.update_status(
            leave_request_id,
            LeaveDecision(
                status=enum_field(body, "status", LeaveStatus.parse),
                manager_comments=text_field(body, "manager_comments"),
            ),
        )
        return jsonify(view.to_dict())

    @app.route("/api/leave/<int:employee_id>/balance", methods=["GET"], endpoint="leave_balance")
    def get_balance(employee_id: int):
        year = int_field(request.args.to_dict(), "year", required=False)
        return jsonify(service.balance(employee_id, year).to_dict())
